"""Per-character predicates for the editor command language.

These are pure functions with no state and no I/O; the line parser is
their only consumer.
"""
from __future__ import annotations

from valman.core.constants import DECIMAL_POINT, OPERATORS, SIGNS
from valman.core.prefix import ASSIGN_MARKER


def is_numeric(ch: str) -> bool:
    """True for characters that can appear in a number literal."""
    return len(ch) == 1 and ("0" <= ch <= "9" or ch in SIGNS or ch == DECIMAL_POINT)


def is_assignment(chunk: str, marker: str = ASSIGN_MARKER) -> bool:
    """True if ``chunk`` is exactly the assignment marker."""
    return chunk == marker


def is_operator(ch: str) -> bool:
    return len(ch) == 1 and ch in OPERATORS
