"""
Word Finder command line.

Usage:
    python -m scripts.find_words [--matrix Matrix.txt] [--words Wordstream.json]

Examples:
    python -m scripts.find_words
    python -m scripts.find_words --matrix puzzles/big.txt --words puzzles/big.json --limit 5

This will:
  1. Load the matrix (one row per line) and index its rows and columns
  2. Load the candidate words from a JSON list
  3. Print the most frequent words found horizontally or vertically
"""
import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wordfinder.settings import settings
from wordfinder.loader import load_matrix, load_wordstream
from wordfinder.metrics import StageTimer
from wordfinder.solver import ConfigurationError, build

logger = logging.getLogger("wordfinder")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Find the most frequent words in a letter matrix")
    parser.add_argument("--matrix", type=Path, default=settings.MATRIX_PATH,
                        help=f"Matrix file, one row per line (default: {settings.MATRIX_PATH.name})")
    parser.add_argument("--words", type=Path, default=settings.WORDSTREAM_PATH,
                        help=f"JSON list of words to look for (default: {settings.WORDSTREAM_PATH.name})")
    parser.add_argument("--limit", type=int, default=settings.NUMBER_OF_RESULTS,
                        help=f"Number of results to print (default: {settings.NUMBER_OF_RESULTS})")
    parser.add_argument("--max-size", type=int, default=settings.MAX_SIZE,
                        help=f"Maximum rows and columns accepted (default: {settings.MAX_SIZE})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    for path in (args.matrix, args.words):
        if not path.exists():
            print(f"Error: {path} does not exist")
            return 1

    timer = StageTimer()

    logger.info("Loading matrix from file %s", args.matrix)
    try:
        rows = load_matrix(args.matrix)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}")
        return 1

    logger.info("Loading words from file %s", args.words)
    try:
        words = load_wordstream(args.words)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    logger.info("Found %d words as input", len(words))

    try:
        with timer.stage("matrix setup"):
            index = build(rows, args.max_size)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1

    with timer.stage("search"):
        results = index.find_counts(words, args.limit)

    print("Result:")
    for word, count in results:
        print(f"    Word = {word}, Count = {count}")
    logger.info("End. Total elapsed: %.1f ms", timer.total_ms)
    return 0


if __name__ == "__main__":
    sys.exit(main())
