"""Centralised optional-dependency imports.

Each library is imported once at module level.  Consumers check the
``HAS_*`` flags before using the corresponding module reference.
"""
from __future__ import annotations

# ---------------------------------------------------------------------------
# readline  (line editing and tab completion in the terminal REPL;
#            missing on Windows builds of CPython)
# ---------------------------------------------------------------------------
try:
    import readline as readline      # type: ignore[import]
    HAS_READLINE = True
except ImportError:
    readline = None  # type: ignore[assignment]
    HAS_READLINE = False

# ---------------------------------------------------------------------------
# PySide6  (--gui front-end)
# ---------------------------------------------------------------------------
try:
    import PySide6 as PySide6        # type: ignore[import]
    HAS_QT = True
except ImportError:
    PySide6 = None  # type: ignore[assignment]
    HAS_QT = False
