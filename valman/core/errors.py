"""Error taxonomy for registry and editor operations.

Every error is raised where it is detected and recovered inside
Editor.execute(), which reports it on the output stream.
"""
from __future__ import annotations

from typing import Iterable


class ValmanError(Exception):
    """Base class for all recoverable registry / editor errors."""


class MalformedCommand(ValmanError):
    """No extractable name or required literal."""


class UnresolvedEntry(ValmanError):
    """Autocompletion found no entry for the given name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"no entry matches {name!r}")
        self.name = name


class AmbiguousEntry(ValmanError):
    """Autocompletion found several entries for the given name."""

    def __init__(self, name: str, candidates: Iterable[str]) -> None:
        self.name       = name
        self.candidates = tuple(candidates)
        super().__init__(
            f"{name!r} is ambiguous: " + ", ".join(self.candidates)
        )


class FileNotFound(ValmanError):
    """Load target is missing or unreadable."""

    def __init__(self, path) -> None:
        super().__init__(f"cannot read file: {path}")
        self.path = path


class FileWriteFailure(ValmanError):
    """Store target could not be written."""

    def __init__(self, path) -> None:
        super().__init__(f"cannot write file: {path}")
        self.path = path


class TransformError(ValmanError):
    """sqrt / pow / compound assignment produced no usable number."""
