"""Centralised tunables and reserved words.

All constants that control editor behaviour are collected here
so they are easy to find, document, and adjust.
"""

# ---------------------------------------------------------------------------
# Grammar  (valman/core/classify.py, valman/core/parser.py)
# ---------------------------------------------------------------------------
MARKER_LEN    = 2                  # the assignment marker is always two chars
OPERATORS     = "+-*/^"            # transform operators after the marker
SIGNS         = "+-"
DECIMAL_POINT = "."

# Reserved verbs, case-sensitive
VERBS: frozenset[str] = frozenset({
    "list", "help", "add", "erase", "store",
    "load", "sqrt", "pow", "clear", "quit",
})

# ---------------------------------------------------------------------------
# Editor  (valman/core/editor.py)
# ---------------------------------------------------------------------------
DEFAULT_PROMPT        = "> "
DEFAULT_REGISTRY_FILE = "registry.txt"
EMPTY_LISTING         = "(empty)"
