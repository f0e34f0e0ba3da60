"""Whole-file text helpers.

Both helpers report failure through their return value instead of
raising, so callers decide what a failure means.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


def read_text(path: Path | str) -> Optional[str]:
    """Return the whole file as UTF-8 text, or None if it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def write_text(path: Path | str, text: str) -> bool:
    """Replace the file's contents with ``text``. Returns success."""
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
    except OSError:
        return False
    return True
