"""Command dataclasses for the editor language.

Each class is the structured result of parsing one input line.  Commands
are built by parser.py and executed by editor.py.

AssignCommand   — name || value   /   name || * value
VerbCommand     — list, help, add, erase, store, load, sqrt, pow, clear, quit
NavigateCommand — a bare (possibly partial) entry name
MalformedLine   — anything the grammar rejects
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass
class AssignCommand:
    """name || value  or  name || <op> value

    name : candidate name, possibly partial (resolved by the editor)
    value: the numeric literal
    op   : one of + - * / ^ for a compound assignment, None for a plain one
    """
    name:  str
    value: float
    op:    Optional[str] = None


@dataclass
class VerbCommand:
    """A reserved-verb line.

    argument  : the raw text after the verb, trimmed
    assignment: parsed argument of ``add``
    exponent  : parsed exponent of ``pow``
    target    : optional entry name for erase / sqrt / pow
    """
    verb:       str
    argument:   str                     = ""
    assignment: Optional[AssignCommand] = None
    exponent:   Optional[float]         = None
    target:     str                     = ""


@dataclass
class NavigateCommand:
    """Bare identifier — move the cursor and echo the value."""
    name: str


@dataclass
class MalformedLine:
    """A line the grammar rejected; ``reason`` is shown to the user."""
    text:   str
    reason: str


# Convenience union type (for type hints only; use isinstance() at runtime)
Command = Union[AssignCommand, VerbCommand, NavigateCommand, MalformedLine]
