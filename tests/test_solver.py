import random
import time

import pytest
from wordfinder.solver import (
    MAX_SIZE,
    NUMBER_OF_RESULTS,
    ConfigurationError,
    GridIndex,
    build,
    count_occurrences,
)


BOARD = ["abcd", "efgh", "ijkl", "mnop"]


def _naive_count(rows: list[str], word: str) -> int:
    """Reference count: non-overlapping matches over every full row and column."""
    columns = ["".join(r[c] for r in rows) for c in range(len(rows[0]))]
    if len(word) == 1:
        return sum(r.count(word) for r in rows)
    return sum(t.count(word) for t in rows + columns)


def test_transpose():
    index = build(BOARD)
    assert index.rows == tuple(BOARD)
    assert index.columns == ("aeim", "bfjn", "cgko", "dhlp")
    for i, row in enumerate(index.rows):
        for j, ch in enumerate(row):
            assert index.columns[j][i] == ch


def test_non_square_grid():
    index = build(["abc", "def"])
    assert index.shape == (2, 3)
    assert index.columns == ("ad", "be", "cf")


def test_classmethod_and_function_agree():
    assert GridIndex.build(BOARD).columns == build(BOARD).columns


def test_empty_grid_rejected():
    with pytest.raises(ConfigurationError, match="empty"):
        build([])


def test_too_many_rows_rejected():
    with pytest.raises(ConfigurationError, match="65 rows"):
        build(["a"] * (MAX_SIZE + 1))


def test_too_many_columns_rejected():
    with pytest.raises(ConfigurationError, match="65 columns"):
        build(["a" * (MAX_SIZE + 1)])


def test_max_size_accepted():
    index = build(["x" * MAX_SIZE] * MAX_SIZE)
    assert index.shape == (MAX_SIZE, MAX_SIZE)


def test_ragged_grid_rejected():
    with pytest.raises(ConfigurationError, match="row 2"):
        build(["abc", "def", "gh"])


def test_custom_max_size():
    with pytest.raises(ConfigurationError):
        build(["abc", "def"], max_size=2)


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_count_occurrences_non_overlapping():
    assert count_occurrences("aa", "aaaa") == 2
    assert count_occurrences("aa", "aaa") == 1
    assert count_occurrences("xyz", "abc") == 0
    assert count_occurrences("a", "") == 0
    assert count_occurrences("abc", "ab") == 0
    assert count_occurrences("", "abc") == 0
    assert count_occurrences("ab", "abxab") == 2


def test_single_letters():
    index = build(BOARD)
    assert index.find_counts(["a", "e"]) == [("a", 1), ("e", 1)]


def test_vertical_match():
    # Column 0 reads "aeim"
    index = build(BOARD)
    assert index.tally(["ei", "aeim", "bf", "abcd"]) == {"ei": 1, "aeim": 1, "bf": 1, "abcd": 1}


def test_reverse_and_diagonal_not_matched():
    index = build(BOARD)
    assert index.tally(["dcba", "mie", "afkp"]) == {}


def test_row_counted_once_per_row():
    assert build(["aaaa"]).find_counts(["aa"]) == [("aa", 2)]


def test_row_text_starts_at_group_letter():
    index = build(["xxcatxcat", "xxxxxxxxx"])
    assert index.tally(["cat"]) == {"cat": 2}


def test_single_letter_count_equals_cells():
    rows = ["abca", "aaxb", "cabz"]
    index = build(rows)
    counts = index.tally(["a", "b", "z", "q"])
    assert counts == {"a": 5, "b": 3, "z": 1}


def test_duplicates_in_stream_ignored():
    index = build(["catcat", "aaaaaa", "tttttt"])
    once = index.find_counts(["cat", "at"])
    repeated = index.find_counts(["cat", "cat", "at", "cat", "at"])
    assert once == repeated


def test_empty_stream():
    assert build(BOARD).find([]) == []


def test_invalid_words_skipped():
    index = build(BOARD)
    assert index.find(["", None, 5, "a"]) == ["a"]


def test_absent_words_excluded():
    index = build(BOARD)
    result = index.find(["zzz", "ab", "qq"])
    assert result == ["ab"]


def test_results_sorted_and_capped():
    rows = ["abababab", "cdcdcdcd", "efefefef"]
    words = ["ab", "ba", "cd", "dc", "ef", "fe", "a", "b", "c", "d", "e", "f", "ac", "ce"]
    index = build(rows)
    results = index.find_counts(words)
    assert len(results) == NUMBER_OF_RESULTS
    counts = [c for _, c in results]
    assert counts == sorted(counts, reverse=True)
    assert all(c > 0 for c in counts)


def test_tie_break_is_first_seen_order():
    index = build(["xy", "yx"])
    assert index.find(["y", "x"]) == ["y", "x"]
    assert index.find(["x", "y"]) == ["x", "y"]


def test_limit():
    index = build(BOARD)
    assert index.find(["a", "b", "c"], limit=2) == ["a", "b"]
    assert index.find(["a", "b", "c"], limit=0) == ["a", "b", "c"]


def test_matches_naive_scan():
    rng = random.Random(7)
    rows = ["".join(rng.choice("abc") for _ in range(12)) for _ in range(9)]
    words = ["".join(rng.choice("abc") for _ in range(rng.randint(1, 4))) for _ in range(60)]
    index = build(rows)
    counts = index.tally(words)
    for word in set(words):
        expected = _naive_count(rows, word)
        assert counts.get(word, 0) == expected, word


def test_performance_full_grid():
    """Search a 64x64 grid with a few thousand words in well under a second."""
    rng = random.Random(1)
    letters = "abcdefghijklmnopqrstuvwxyz"
    rows = ["".join(rng.choice(letters) for _ in range(MAX_SIZE)) for _ in range(MAX_SIZE)]
    words = ["".join(rng.choice(letters) for _ in range(rng.randint(2, 5))) for _ in range(3000)]

    index = build(rows)
    start = time.perf_counter()
    result = index.find(words)
    elapsed = time.perf_counter() - start

    assert elapsed < 2.0, f"Search took {elapsed:.3f}s"
    assert len(result) <= NUMBER_OF_RESULTS
