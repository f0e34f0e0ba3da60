"""Registry of named float entries.

Entry names are unique and case-sensitive.  Indexed access is lenient:
``registry[name]`` fabricates a zero-valued entry when the name is absent
and never raises.  Mutation by a user-typed name goes through the editor's
autocompletion instead, which can fail.

All access is single-threaded; one registry belongs to one session.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional

from valman.core.errors import MalformedCommand
from valman.core.persistence import load_registry, store_registry
from valman.core.prefix import ASSIGN_MARKER

LogFn         = Callable[[str, str], None]        # (level, message)
EraseListener = Callable[[Optional[str]], None]   # erased name, None = all


@dataclass
class Entry:
    """One name/value pair. Mutable; the registry owns it."""
    name:  str
    value: float = 0.0


class Registry:
    """Maps entry name → Entry.

    Parameters
    ----------
    path : Path | str | None
        Backing file.  Loaded at construction if it exists; a missing file
        gives an empty registry.
    marker : str
        Two-character delimiter used in the file format.
    """

    def __init__(
        self,
        path:   Path | str | None = None,
        marker: str               = ASSIGN_MARKER,
        log_fn: LogFn | None      = None,
    ) -> None:
        self._entries:   dict[str, Entry]    = {}
        self._listeners: list[EraseListener] = []
        self.marker = marker
        self.path   = Path(path) if path is not None else None
        self._log   = log_fn or (lambda lvl, msg: None)
        if self.path is not None:
            self.load(self.path)

    # ------------------------------------------------------------------
    # Names
    # ------------------------------------------------------------------

    def _valid_name(self, name: str) -> bool:
        return (
            bool(name)
            and name == name.strip()
            and "\n" not in name
            and self.marker not in name
        )

    def _check_name(self, name: str) -> None:
        if not self._valid_name(name):
            raise MalformedCommand(f"invalid entry name: {name!r}")

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, name: str, value: float) -> Entry:
        """Insert or overwrite ``name``."""
        self._check_name(name)
        entry = self._entries.get(name)
        if entry is None:
            entry = self._entries[name] = Entry(name, float(value))
        else:
            entry.value = float(value)
        return entry

    def erase(self, name: str) -> bool:
        """Remove ``name`` if present. Returns True if something was removed."""
        if self._entries.pop(name, None) is None:
            return False
        self._notify(name)
        return True

    def clear(self) -> None:
        self._entries.clear()
        self._notify(None)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def entry(self, name: str) -> Entry:
        """Return the mutable Entry for ``name``, creating a zero one if absent.

        An invalid name gets a detached zero Entry the registry does not keep.
        """
        found = self._entries.get(name)
        if found is not None:
            return found
        if not self._valid_name(name):
            self._log("WARNING", f"invalid entry name {name!r}, not stored")
            return Entry(name, 0.0)
        return self.add(name, 0.0)

    def get(self, name: str) -> Optional[Entry]:
        """Strict lookup: the Entry for ``name`` or None. Never creates."""
        return self._entries.get(name)

    def find(self, text: str) -> bool:
        """True if at least one name starts with ``text``."""
        return any(name.startswith(text) for name in self._entries)

    def names(self) -> list[str]:
        return sorted(self._entries)

    def as_dict(self) -> dict[str, float]:
        return {name: e.value for name, e in self._entries.items()}

    def __getitem__(self, name: str) -> float:
        return self.entry(name).value

    def __setitem__(self, name: str, value: float) -> None:
        self.entry(name).value = float(value)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, fn: EraseListener) -> None:
        """Call ``fn(name)`` after an erase, ``fn(None)`` after clear()."""
        self._listeners.append(fn)

    def remove_listener(self, fn: EraseListener) -> None:
        if fn in self._listeners:
            self._listeners.remove(fn)

    def _notify(self, name: Optional[str]) -> None:
        for fn in list(self._listeners):
            fn(name)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _target(self, path: Path | str | None) -> Path:
        if path is not None:
            return Path(path)
        if self.path is None:
            raise MalformedCommand("file name required")
        return self.path

    def load(self, path: Path | str | None = None) -> bool:
        """Merge a registry file. False if the file does not exist."""
        return load_registry(self, self._target(path), self.marker, log=self._log)

    def store(self, path: Path | str | None = None) -> int:
        """Write every entry to the file. Returns the number written."""
        target = self._target(path)
        count  = store_registry(self, target, self.marker)
        self._log("INFO", f"Stored {count} entries to {target}")
        return count

    def __repr__(self) -> str:
        return f"Registry({self.as_dict()!r})"
