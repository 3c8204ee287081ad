import json
import logging
from pathlib import Path

logger = logging.getLogger("wordfinder")


def load_matrix(path: str | Path) -> list[str]:
    """Read grid rows, one per line. Shape is checked when the index is built."""
    rows = []
    with open(path, "r", encoding="utf-8-sig") as f:
        for line in f:
            row = line.rstrip("\r\n")
            if row:
                rows.append(row)
    return rows


def load_wordstream(path: str | Path) -> list[str]:
    """Read the candidate words from a JSON array of strings."""
    with open(path, "r", encoding="utf-8-sig") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of words, got {type(data).__name__}")

    words = [w for w in data if isinstance(w, str)]
    if len(words) != len(data):
        logger.warning("Dropped %d non-string entries from %s", len(data) - len(words), path)
    return words
