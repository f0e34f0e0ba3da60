"""Name autocompletion against a registry snapshot.

Resolution is a three-way result and callers must handle every arm:

Unique    — exactly one entry (exact match, or the only completion)
NoMatch   — nothing matches
Ambiguous — two or more completions, sorted by name
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Union


@dataclass(frozen=True)
class Unique:
    name: str


@dataclass(frozen=True)
class NoMatch:
    candidate: str


@dataclass(frozen=True)
class Ambiguous:
    candidate:  str
    candidates: tuple[str, ...]


Resolution = Union[Unique, NoMatch, Ambiguous]
Resolver   = Callable[[str, Iterable[str]], Resolution]


def _resolve(candidate: str, names: Iterable[str], match: Callable[[str], bool]) -> Resolution:
    pool = list(names)
    if candidate in pool:
        return Unique(candidate)
    hits = sorted(name for name in pool if match(name))
    if not hits:
        return NoMatch(candidate)
    if len(hits) == 1:
        return Unique(hits[0])
    return Ambiguous(candidate, tuple(hits))


def auto_complete(candidate: str, names: Iterable[str]) -> Resolution:
    """Resolve ``candidate`` as an exact name or a name prefix."""
    return _resolve(candidate, names, lambda name: name.startswith(candidate))


def true_auto_complete(candidate: str, names: Iterable[str]) -> Resolution:
    """Like auto_complete() but ``candidate`` may appear anywhere in a name."""
    return _resolve(candidate, names, lambda name: candidate in name)
