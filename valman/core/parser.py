"""Editor language parser — turns one input line into a Command.

Responsibilities
----------------
- Recognise reserved verbs (first token, case-sensitive)
- Split assignment lines on the marker, collapsing repeated markers
  (``x || || 3`` is ``x || 3``)
- Extract the numeric literal by scanning right-to-left
- Reject anything else with a MalformedLine carrying the reason

The parser never touches a registry or a stream, so every rule here can
be tested on plain strings.
"""
from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Optional

from valman.core.classify import is_assignment, is_numeric, is_operator
from valman.core.commands import (
    Command, AssignCommand, VerbCommand, NavigateCommand, MalformedLine,
)
from valman.core.constants import SIGNS, VERBS
from valman.core.prefix import ASSIGN_MARKER

# optional sign, digits, at most one decimal point; no exponent
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


# ---------------------------------------------------------------------------
# Number literals
# ---------------------------------------------------------------------------

def parse_number(text: str) -> Optional[float]:
    """Return the value of a number literal, or None if ``text`` is not one.

    A literal too long to fit a finite float is rejected.
    """
    text = text.strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def format_value(value: float) -> str:
    """Render ``value`` as a positional literal parse_number() reads back exactly.

    Examples
    --------
    >>> format_value(3.0)
    '3.0'
    >>> format_value(1e-07)
    '0.0000001'
    """
    return format(Decimal(repr(float(value))), "f")


def extract_first_number(text: str) -> tuple[str, str]:
    """Split ``text`` into (leading_text, numeric_run).

    Scans right-to-left from the last non-blank character and takes the
    maximal run of numeric characters.  ``numeric_run`` is empty when the
    text does not end in one; it is not validated here.
    """
    text = text.rstrip()
    start = len(text)
    while start > 0 and is_numeric(text[start - 1]):
        start -= 1
    return text[:start], text[start:]


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

def find_marker(text: str, marker: str = ASSIGN_MARKER) -> int:
    """Index of the first assignment marker in ``text``, or -1."""
    n = len(marker)
    for i in range(len(text) - n + 1):
        if is_assignment(text[i:i + n], marker):
            return i
    return -1


def collapse_markers(text: str, marker: str = ASSIGN_MARKER) -> str:
    """Remove every assignment marker from ``text``."""
    n   = len(marker)
    out: list[str] = []
    i = 0
    while i < len(text):
        if is_assignment(text[i:i + n], marker):
            i += n
            continue
        out.append(text[i])
        i += 1
    return "".join(out)


# ---------------------------------------------------------------------------
# Assignments
# ---------------------------------------------------------------------------

def parse_assignment(text: str, marker: str = ASSIGN_MARKER) -> AssignCommand | MalformedLine:
    """Parse ``name <marker> [op] value``.

    The name is everything before the first marker, trimmed.  A transform
    operator directly after the marker makes a compound assignment; ``+``
    and ``-`` only count as operators when followed by whitespace, so
    ``x || -2`` is a plain negative literal.
    """
    text = text.strip()
    idx  = find_marker(text, marker)
    if idx < 0:
        return MalformedLine(text, f"missing {marker!r}")

    name = text[:idx].strip()
    if not name:
        return MalformedLine(text, "missing name")

    rest = collapse_markers(text[idx:], marker).strip()
    op: Optional[str] = None
    if rest and is_operator(rest[0]) and (rest[0] not in SIGNS or rest[1:2].isspace()):
        op, rest = rest[0], rest[1:].strip()

    leading, run = extract_first_number(rest)
    if not run:
        return MalformedLine(text, "missing value")
    if leading.strip():
        return MalformedLine(text, f"unexpected text {leading.strip()!r}")
    value = parse_number(run)
    if value is None:
        return MalformedLine(text, f"bad number {run!r}")
    return AssignCommand(name=name, value=value, op=op)


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------

def parse_line(line: str, marker: str = ASSIGN_MARKER) -> Optional[Command]:
    """Classify one input line.

    Returns None for a blank line.
    """
    text = line.strip()
    if not text:
        return None

    parts = text.split(None, 1)
    if parts[0] in VERBS:
        argument = parts[1].strip() if len(parts) > 1 else ""
        return _parse_verb(parts[0], argument, text, marker)

    if find_marker(text, marker) >= 0:
        return parse_assignment(text, marker)

    words = text.split()
    if parse_number(words[-1]) is not None:
        reason = f"missing {marker!r}" if len(words) > 1 else "missing name"
        return MalformedLine(text, reason)
    return NavigateCommand(name=text)


def _parse_verb(verb: str, argument: str, text: str, marker: str) -> Command:
    if verb == "add":
        if not argument:
            return MalformedLine(text, f"add: usage: add name {marker} value")
        cmd = parse_assignment(argument, marker)
        if isinstance(cmd, MalformedLine):
            return MalformedLine(text, f"add: {cmd.reason}")
        if cmd.op is not None:
            return MalformedLine(text, f"add: operator {cmd.op!r} not allowed")
        return VerbCommand(verb, argument, assignment=cmd)

    if verb == "erase":
        if not argument:
            return MalformedLine(text, "erase: name required")
        return VerbCommand(verb, argument, target=argument)

    if verb == "pow":
        words = argument.split(None, 1)
        if not words:
            return MalformedLine(text, "pow: usage: pow exponent [name]")
        exponent = parse_number(words[0])
        if exponent is None:
            return MalformedLine(text, f"pow: bad exponent {words[0]!r}")
        target = words[1].strip() if len(words) > 1 else ""
        return VerbCommand(verb, argument, exponent=exponent, target=target)

    if verb == "sqrt":
        return VerbCommand(verb, argument, target=argument)

    return VerbCommand(verb, argument)


def parse_lines(text: str, marker: str = ASSIGN_MARKER) -> list[tuple[int, AssignCommand | MalformedLine]]:
    """Parse a persisted registry text.

    Returns (1-based line number, command) for every non-blank line; each
    line must be a plain assignment.
    """
    result: list[tuple[int, AssignCommand | MalformedLine]] = []
    for num, raw in enumerate(text.splitlines(), start=1):
        if not raw.strip():
            continue
        result.append((num, parse_assignment(raw, marker)))
    return result
