"""Registry file format — one ``name<marker>value`` line per entry.

Loading is tolerant: blank lines are ignored and lines the assignment
grammar rejects are skipped with a warning.  Storing rewrites the whole
file; if the write fails the in-memory registry is left as it was.
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from valman.core.registry import Registry

from valman.core.commands import MalformedLine
from valman.core.errors import FileNotFound, FileWriteFailure
from valman.core.parser import format_value, parse_lines
from valman.core.prefix import ASSIGN_MARKER
from valman.utils.file_io import read_text, write_text

LogFn = Callable[[str, str], None]   # (level, message)


def load_registry(
    registry: "Registry",
    path:     Path | str,
    marker:   str          = ASSIGN_MARKER,
    log:      LogFn | None = None,
) -> bool:
    """Merge the entries of ``path`` into ``registry``.

    Returns True if an existing file was read, False if it does not exist
    (the registry is untouched).  Raises FileNotFound if the file exists
    but cannot be read.
    """
    _log = log or (lambda lvl, msg: None)
    path = Path(path)
    if not path.exists():
        _log("INFO", f"{path} does not exist, nothing loaded")
        return False

    text = read_text(path)
    if text is None:
        raise FileNotFound(path)

    loaded = 0
    for num, cmd in parse_lines(text, marker):
        if isinstance(cmd, MalformedLine):
            _log("WARNING", f"{path.name}:{num}: skipped, {cmd.reason}")
            continue
        if cmd.op is not None:
            _log("WARNING", f"{path.name}:{num}: skipped, operator {cmd.op!r}")
            continue
        registry.add(cmd.name, cmd.value)
        loaded += 1

    _log("INFO", f"Loaded {loaded} entries from {path}")
    return True


def dump_registry(registry: "Registry", marker: str = ASSIGN_MARKER) -> str:
    """Render ``registry`` in file format, sorted by name."""
    return "".join(
        f"{name}{marker}{format_value(value)}\n"
        for name, value in sorted(registry.as_dict().items())
    )


def store_registry(
    registry: "Registry",
    path:     Path | str,
    marker:   str = ASSIGN_MARKER,
) -> int:
    """Write every entry to ``path``. Returns the number of entries written.

    Raises FileWriteFailure if the file cannot be written.
    """
    text = dump_registry(registry, marker)
    if not write_text(path, text):
        raise FileWriteFailure(path)
    return len(registry)
