"""Syntax highlighter for the editor console transcript."""
from PySide6.QtCore import QRegularExpression
from PySide6.QtGui import QSyntaxHighlighter, QTextCharFormat, QColor, QFont

from valman.core.constants import VERBS
from valman.core.prefix import ASSIGN_MARKER, makeregprefix

# ---------------------------------------------------------------------------
# Colour palette (VS Code Dark+ inspired)
# ---------------------------------------------------------------------------
_COL_VERB     = "#C586C0"   # purple
_COL_MARKER   = "#DCDCAA"   # yellow
_COL_NUMBER   = "#B5CEA8"   # light green
_COL_OPERATOR = "#D4D4D4"   # near-white
_COL_INPUT    = "#4FC1FF"   # cyan, the echoed "> " of a command line
_COL_ERROR    = "#F44747"   # red

# Output lines produced by reported errors
_ERROR_LINES = (
    r"^(parse error|no entry matches|no target|cannot (read|write) file|"
    r"invalid entry name|file name required).*$|^'.*' is ambiguous:$"
)


def _fmt(color: str, bold: bool = False, italic: bool = False) -> QTextCharFormat:
    f = QTextCharFormat()
    f.setForeground(QColor(color))
    if bold:
        f.setFontWeight(QFont.Weight.Bold)
    if italic:
        f.setFontItalic(True)
    return f


def _keyword_pattern(words) -> str:
    escaped = sorted(words, key=len, reverse=True)
    return r"^(?:> )?(" + "|".join(escaped) + r")\b"


class ConsoleHighlighter(QSyntaxHighlighter):
    """QSyntaxHighlighter for the console: verbs, marker, numbers, errors."""

    def __init__(self, document, marker: str = ASSIGN_MARKER) -> None:
        super().__init__(document)
        self._marker = marker
        self._rules: list[tuple[QRegularExpression, QTextCharFormat, int]] = []
        self._build_rules()

    def _build_rules(self) -> None:
        add = self._rules.append

        # 1. Operators
        add((QRegularExpression(r"[+\-*/^]"), _fmt(_COL_OPERATOR), 0))

        # 2. Numbers
        add((QRegularExpression(r"(?<![\w.])[+-]?(\d+(\.\d*)?|\.\d+)\b"), _fmt(_COL_NUMBER), 0))

        # 3. Assignment marker
        add((QRegularExpression(makeregprefix(self._marker)), _fmt(_COL_MARKER, bold=True), 0))

        # 4. Command echo prefix
        add((QRegularExpression(r"^> "), _fmt(_COL_INPUT, bold=True), 0))

        # 5. Verbs at the start of a command line (group 1 skips the "> ")
        add((QRegularExpression(_keyword_pattern(VERBS)), _fmt(_COL_VERB, bold=True), 1))

        # 6. Error reports (highest priority, applied last)
        add((QRegularExpression(_ERROR_LINES), _fmt(_COL_ERROR, italic=True), 0))

    def highlightBlock(self, text: str) -> None:
        for pattern, fmt, group in self._rules:
            it = pattern.globalMatch(text)
            while it.hasNext():
                m = it.next()
                self.setFormat(m.capturedStart(group), m.capturedLength(group), fmt)
