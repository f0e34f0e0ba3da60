"""Registry watch panel — shows every entry and its current value.

Displayed as a two-column QTableWidget (Name | Value) inside a QDockWidget.
The main window pushes a fresh snapshot after every executed command.
Double-clicking a row selects that entry in the editor.
"""
from __future__ import annotations

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem,
    QHeaderView, QPushButton, QHBoxLayout, QLabel,
)
from PySide6.QtCore import Signal
from PySide6.QtGui import QColor, QFont

from valman.core.parser import format_value
from valman.gui.styles import BUTTON, TABLE

_COL_NAME     = "#9CDCFE"   # light blue
_COL_POSITIVE = "#B5CEA8"   # light green
_COL_NEGATIVE = "#CE9178"   # orange
_COL_CURSOR   = "#3A3D41"   # row background of the selected entry


class RegistryPanel(QWidget):
    """A table that displays the current registry snapshot."""

    entry_activated = Signal(str)   # entry name
    clear_requested = Signal()

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setStyleSheet(TABLE + BUTTON)
        self._build_ui()

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(2, 2, 2, 2)
        layout.setSpacing(2)

        bar = QHBoxLayout()
        self._count_label = QLabel("0 件")
        self._count_label.setStyleSheet("color: #AAAAAA; font-size: 11px;")
        self._clear_btn = QPushButton("全削除")
        self._clear_btn.setFixedHeight(22)
        self._clear_btn.clicked.connect(self.clear_requested)
        bar.addWidget(self._count_label)
        bar.addStretch()
        bar.addWidget(self._clear_btn)
        layout.addLayout(bar)

        self._table = QTableWidget(0, 2)
        self._table.setHorizontalHeaderLabels(["名前", "値"])
        self._table.horizontalHeader().setSectionResizeMode(
            0, QHeaderView.ResizeMode.Interactive
        )
        self._table.horizontalHeader().setSectionResizeMode(
            1, QHeaderView.ResizeMode.Stretch
        )
        self._table.horizontalHeader().setDefaultSectionSize(130)
        self._table.verticalHeader().setVisible(False)
        self._table.setSelectionBehavior(
            QTableWidget.SelectionBehavior.SelectRows
        )
        self._table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self._table.cellDoubleClicked.connect(self._on_double_click)

        mono = QFont("Consolas", 10)
        mono.setStyleHint(QFont.StyleHint.Monospace)
        self._table.setFont(mono)

        layout.addWidget(self._table)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update_entries(self, entries: dict[str, float], cursor: str | None = None) -> None:
        """Replace the table contents with ``entries`` sorted by name.

        The row of ``cursor`` (the editor's selected entry) is highlighted.
        """
        self._table.setRowCount(0)
        for name, value in sorted(entries.items()):
            row = self._table.rowCount()
            self._table.insertRow(row)

            name_item = QTableWidgetItem(name)
            name_item.setForeground(QColor(_COL_NAME))
            val_item = QTableWidgetItem(format_value(value))
            val_item.setForeground(QColor(_COL_NEGATIVE if value < 0 else _COL_POSITIVE))
            if name == cursor:
                for item in (name_item, val_item):
                    item.setBackground(QColor(_COL_CURSOR))

            self._table.setItem(row, 0, name_item)
            self._table.setItem(row, 1, val_item)

        self._count_label.setText(f"{len(entries)} 件")

    # ------------------------------------------------------------------
    def _on_double_click(self, row: int, _col: int) -> None:
        item = self._table.item(row, 0)
        if item:
            self.entry_activated.emit(item.text())
