"""Console panel — transcript of executed commands plus a command line.

Up/Down in the command line walk through previously entered commands.
"""
from __future__ import annotations

from PySide6.QtWidgets import QWidget, QVBoxLayout, QPlainTextEdit, QLineEdit
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont, QKeyEvent, QTextCursor

from valman.gui.styles import CONSOLE
from valman.gui.syntax_highlighter import ConsoleHighlighter


class _CommandLine(QLineEdit):
    """QLineEdit with a command history on the arrow keys."""

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self._history: list[str] = []
        self._pos = 0

    def remember(self, line: str) -> None:
        if line and (not self._history or self._history[-1] != line):
            self._history.append(line)
        self._pos = len(self._history)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() == Qt.Key.Key_Up and self._history:
            self._pos = max(0, self._pos - 1)
            self.setText(self._history[self._pos])
        elif event.key() == Qt.Key.Key_Down and self._history:
            self._pos = min(len(self._history), self._pos + 1)
            self.setText(self._history[self._pos] if self._pos < len(self._history) else "")
        else:
            super().keyPressEvent(event)


class ConsolePanel(QWidget):
    """Read-only transcript above a single-line command input."""

    command_entered = Signal(str)

    def __init__(self, marker: str, parent=None) -> None:
        super().__init__(parent)
        self.setStyleSheet(CONSOLE)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        font = QFont("Consolas", 10)
        font.setStyleHint(QFont.StyleHint.Monospace)

        self._transcript = QPlainTextEdit()
        self._transcript.setReadOnly(True)
        self._transcript.setFont(font)
        self._highlighter = ConsoleHighlighter(self._transcript.document(), marker)
        layout.addWidget(self._transcript)

        self._input = _CommandLine()
        self._input.setFont(font)
        self._input.setPlaceholderText(f"name {marker} value   /   help")
        self._input.returnPressed.connect(self._on_return)
        layout.addWidget(self._input)

    # ------------------------------------------------------------------
    def _on_return(self) -> None:
        line = self._input.text()
        self._input.remember(line.strip())
        self._input.clear()
        self.command_entered.emit(line)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def append(self, command: str, output: str) -> None:
        """Add ``command`` (echoed with a "> " prefix) and its output."""
        cursor = self._transcript.textCursor()
        cursor.movePosition(QTextCursor.MoveOperation.End)
        cursor.insertText(f"> {command.strip()}\n")
        if output:
            cursor.insertText(output if output.endswith("\n") else output + "\n")
        self._transcript.setTextCursor(cursor)
        self._transcript.ensureCursorVisible()

    def clear(self) -> None:
        self._transcript.clear()

    def focus_input(self) -> None:
        self._input.setFocus()
