from __future__ import annotations

import logging
from typing import Iterable, Sequence

logger = logging.getLogger("wordfinder")

MAX_SIZE = 64
NUMBER_OF_RESULTS = 10


class ConfigurationError(ValueError):
    """The grid cannot be indexed: empty, too large, or ragged."""


def count_occurrences(word: str, text: str) -> int:
    """Count non-overlapping occurrences of word in text ("aa" in "aaa" is 1)."""
    if not word or len(word) > len(text) or word not in text:
        return 0
    return (len(text) - len(text.replace(word, ""))) // len(word)


class GridIndex:
    __slots__ = ("_rows", "_columns")

    def __init__(self, rows: tuple[str, ...], columns: tuple[str, ...]):
        self._rows = rows
        self._columns = columns

    @classmethod
    def build(cls, rows: Sequence[str], max_size: int = MAX_SIZE) -> GridIndex:
        """Validate the row-major grid and transpose it into columns.

        Rows are expected top to bottom, all of the same length:

            ["abc",       [ a b c ]
             "def",   ->  [ d e f ]   ->  columns ("adg", "beh", "cfi")
             "ghi"]       [ g h i ]

        The grid does not need to be square.
        """
        rows = list(rows)
        if not rows:
            raise ConfigurationError("Matrix is empty")

        column_count = len(rows[0])
        if len(rows) > max_size:
            raise ConfigurationError(
                f"Matrix has {len(rows)} rows, over the limit of {max_size}"
            )
        if column_count > max_size:
            raise ConfigurationError(
                f"Matrix has {column_count} columns, over the limit of {max_size}"
            )
        for idx, row in enumerate(rows):
            if len(row) != column_count:
                raise ConfigurationError(
                    f"Matrix rows do not have the same size: row {idx} has "
                    f"{len(row)} characters, row 0 has {column_count}"
                )

        columns = [""] * column_count
        for row in rows:
            for c in range(column_count):
                columns[c] += row[c]

        logger.debug("Indexed %dx%d matrix", len(rows), column_count)
        return cls(tuple(rows), tuple(columns))

    @property
    def rows(self) -> tuple[str, ...]:
        return self._rows

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    @property
    def shape(self) -> tuple[int, int]:
        return len(self._rows), len(self._columns)

    def tally(self, words: Iterable[str]) -> dict[str, int]:
        """Count how often each distinct word appears across rows and columns.

        Words are grouped by their first letter so that rows without that
        letter are skipped, and each column is scanned downwards only once
        per group, starting from the topmost row that holds the letter.
        Only words with at least one occurrence get an entry.
        """
        groups: dict[str, list[str]] = {}
        for word in _distinct(words):
            groups.setdefault(word[0], []).append(word)

        counts: dict[str, int] = {}
        for letter, group in groups.items():
            searched_columns: set[int] = set()

            for row_idx, row in enumerate(self._rows):
                first = row.find(letter)
                if first == -1:
                    continue

                columns_to_search = []
                pos = first
                while pos != -1:
                    if pos not in searched_columns:
                        searched_columns.add(pos)
                        columns_to_search.append(pos)
                    pos = row.find(letter, pos + 1)

                row_text = row[first:]
                for word in group:
                    # Single letters are picked up by the column scan only
                    count = count_occurrences(word, row_text) if len(word) > 1 else 0
                    for col_idx in columns_to_search:
                        count += count_occurrences(word, self._columns[col_idx][row_idx:])
                    if count > 0:
                        counts[word] = counts.get(word, 0) + count

        return counts

    def find_counts(self, words: Iterable[str], limit: int = NUMBER_OF_RESULTS) -> list[tuple[str, int]]:
        """Return up to ``limit`` (word, count) pairs, most frequent first.

        Equal counts keep the order in which the words first appeared in the
        input stream.
        """
        words = _distinct(words)
        order = {w: i for i, w in enumerate(words)}
        counts = self.tally(words)
        ranked = sorted(counts.items(), key=lambda kv: (-kv[1], order[kv[0]]))
        return ranked[:limit] if limit > 0 else ranked

    def find(self, words: Iterable[str], limit: int = NUMBER_OF_RESULTS) -> list[str]:
        return [word for word, _ in self.find_counts(words, limit)]


def build(rows: Sequence[str], max_size: int = MAX_SIZE) -> GridIndex:
    return GridIndex.build(rows, max_size)


def _distinct(words: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for word in words:
        if not isinstance(word, str) or not word:
            logger.debug("Skipping invalid word %r", word)
            continue
        seen.setdefault(word, None)
    return list(seen)
