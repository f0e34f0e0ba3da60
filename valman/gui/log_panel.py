"""Log panel — timestamped editor and persistence messages.

Entries below the selected level are dropped as they arrive; DEBUG
(one line per executed command) is hidden unless asked for.
"""
from datetime import datetime

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QTextEdit, QPushButton, QLabel, QComboBox,
)
from PySide6.QtGui import QColor, QTextCharFormat, QTextCursor, QFont

from valman.gui.styles import BUTTON

_LEVELS = ["DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"]

_LEVEL_COLORS: dict[str, str] = {
    "DEBUG":   "#858585",
    "INFO":    "#D4D4D4",
    "SUCCESS": "#4EC9B0",
    "WARNING": "#CE9178",
    "ERROR":   "#F44747",
}


class LogPanel(QWidget):
    """Read-only text area for log entries with a minimum-level filter."""

    def __init__(self) -> None:
        super().__init__()
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 2, 4, 4)
        layout.setSpacing(2)

        header = QHBoxLayout()
        title = QLabel("ログ")
        title.setStyleSheet("color: #CCCCCC; font-size: 12px;")
        header.addWidget(title)
        header.addStretch()
        self._level_box = QComboBox()
        self._level_box.addItems(_LEVELS)
        self._level_box.setCurrentText("INFO")
        header.addWidget(self._level_box)
        clear_btn = QPushButton("クリア")
        clear_btn.setStyleSheet(BUTTON)
        clear_btn.clicked.connect(self.clear)
        header.addWidget(clear_btn)
        layout.addLayout(header)

        self._text = QTextEdit()
        self._text.setReadOnly(True)
        font = QFont("Consolas", 9)
        font.setStyleHint(QFont.StyleHint.Monospace)
        self._text.setFont(font)
        self._text.setStyleSheet(
            "QTextEdit { background:#0C0C0C; color:#CCCCCC; border:none; }"
        )
        layout.addWidget(self._text)

    def _visible(self, level: str) -> bool:
        if level not in _LEVELS:
            return True
        return _LEVELS.index(level) >= _LEVELS.index(self._level_box.currentText())

    def log(self, level: str, message: str) -> None:
        """Append a timestamped, colour-coded entry if it passes the filter."""
        level = level.upper()
        if not self._visible(level):
            return
        ts = datetime.now().strftime("%H:%M:%S.%f")[:-3]

        cursor = self._text.textCursor()
        cursor.movePosition(QTextCursor.MoveOperation.End)

        ts_fmt = QTextCharFormat()
        ts_fmt.setForeground(QColor("#858585"))
        cursor.setCharFormat(ts_fmt)
        cursor.insertText(f"[{ts}] ")

        lvl_fmt = QTextCharFormat()
        lvl_fmt.setForeground(QColor(_LEVEL_COLORS.get(level, "#D4D4D4")))
        cursor.setCharFormat(lvl_fmt)
        cursor.insertText(f"[{level:7}] {message}\n")

        self._text.setTextCursor(cursor)
        self._text.ensureCursorVisible()

    def clear(self) -> None:
        self._text.clear()
