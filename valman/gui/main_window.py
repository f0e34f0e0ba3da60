"""Main application window."""
from __future__ import annotations

from PySide6.QtWidgets import (
    QMainWindow, QDockWidget, QLabel, QFileDialog, QMessageBox,
)
from PySide6.QtCore import Qt, QSettings
from PySide6.QtGui import QAction, QKeySequence, QCloseEvent

from valman.core.editor import Editor, EditorState
from valman.core.registry import Registry
from valman.core.settings_manager import SettingsManager
from valman.gui.console_panel import ConsolePanel
from valman.gui.log_panel import LogPanel
from valman.gui.registry_panel import RegistryPanel
from valman.gui.styles import MAIN_WINDOW

_FILE_FILTER = "Registry Files (*.txt);;All Files (*)"


class MainWindow(QMainWindow):
    def __init__(self, registry: Registry, settings: SettingsManager) -> None:
        super().__init__()
        self._registry = registry
        self._settings = settings

        self.setWindowTitle("Valman")
        self.setMinimumSize(720, 480)
        self.setStyleSheet(MAIN_WINDOW)

        # The log panel must exist before the editor starts logging
        self._log_panel = LogPanel()
        self._editor = Editor(registry, settings=settings, log_fn=self._log)

        self._build_central()
        self._build_log_dock()
        self._build_registry_dock()
        self._build_menu()
        self._build_statusbar()
        self._connect_signals()
        self._restore_geometry()

        self._refresh()
        self._log("INFO", f"Valman 起動完了 ({len(registry)} entries)")

    # ================================================================
    # UI construction
    # ================================================================

    def _build_central(self) -> None:
        self._console = ConsolePanel(self._registry.marker)
        self.setCentralWidget(self._console)

    def _build_log_dock(self) -> None:
        dock = QDockWidget("ログ", self)
        dock.setAllowedAreas(Qt.DockWidgetArea.BottomDockWidgetArea)
        dock.setFeatures(
            QDockWidget.DockWidgetFeature.DockWidgetClosable |
            QDockWidget.DockWidgetFeature.DockWidgetMovable
        )
        dock.setWidget(self._log_panel)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, dock)
        self._log_dock = dock
        self.resizeDocks([dock], [140], Qt.Orientation.Vertical)

    def _build_registry_dock(self) -> None:
        self._reg_panel = RegistryPanel()

        dock = QDockWidget("レジストリ", self)
        dock.setAllowedAreas(
            Qt.DockWidgetArea.RightDockWidgetArea |
            Qt.DockWidgetArea.LeftDockWidgetArea
        )
        dock.setFeatures(
            QDockWidget.DockWidgetFeature.DockWidgetClosable |
            QDockWidget.DockWidgetFeature.DockWidgetMovable |
            QDockWidget.DockWidgetFeature.DockWidgetFloatable
        )
        dock.setWidget(self._reg_panel)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, dock)
        self._reg_dock = dock

    def _build_menu(self) -> None:
        mb = self.menuBar()

        # ── File ────────────────────────────────────────────────────────
        file_menu = mb.addMenu("ファイル(&F)")
        self._a_open   = QAction("読み込み(&O)...",        self, shortcut=QKeySequence.StandardKey.Open)
        self._a_save   = QAction("保存(&S)",              self, shortcut=QKeySequence.StandardKey.Save)
        self._a_saveas = QAction("名前を付けて保存(&A)...", self, shortcut=QKeySequence("Ctrl+Shift+S"))
        self._a_exit   = QAction("終了(&X)",              self, shortcut=QKeySequence("Ctrl+Q"))
        file_menu.addActions([self._a_open, self._a_save, self._a_saveas])
        file_menu.addSeparator()
        file_menu.addAction(self._a_exit)

        # ── View ────────────────────────────────────────────────────────
        view_menu = mb.addMenu("表示(&V)")
        log_toggle = self._log_dock.toggleViewAction()
        log_toggle.setText("ログパネル(&L)")
        reg_toggle = self._reg_dock.toggleViewAction()
        reg_toggle.setText("レジストリ(&R)")
        a_clear_console = QAction("コンソールをクリア(&C)", self)
        a_clear_console.triggered.connect(self._console.clear)
        view_menu.addActions([log_toggle, reg_toggle, a_clear_console])

        # ── Help ────────────────────────────────────────────────────────
        help_menu = mb.addMenu("ヘルプ(&H)")
        a_commands = QAction("コマンド一覧(&C)", self)
        a_commands.triggered.connect(lambda: self._run_command("help"))
        a_about = QAction("バージョン情報(&A)", self)
        a_about.triggered.connect(self._show_about)
        help_menu.addActions([a_commands, a_about])

    def _build_statusbar(self) -> None:
        self._status_label = QLabel("準備完了")
        self._cursor_label = QLabel("")
        sb = self.statusBar()
        sb.addWidget(self._status_label)
        sb.addPermanentWidget(self._cursor_label)

    # ================================================================
    # Signal wiring
    # ================================================================

    def _connect_signals(self) -> None:
        self._console.command_entered.connect(self._run_command)
        self._reg_panel.entry_activated.connect(self._run_command)
        self._reg_panel.clear_requested.connect(self._confirm_clear)

        self._a_open.triggered.connect(self._load_dialog)
        self._a_save.triggered.connect(lambda: self._run_command("store"))
        self._a_saveas.triggered.connect(self._store_dialog)
        self._a_exit.triggered.connect(self.close)

    # ================================================================
    # Command execution
    # ================================================================

    def _run_command(self, line: str) -> None:
        if not line.strip():
            return
        output = self._editor.edit(line)
        self._console.append(line, output)
        self._refresh()
        if self._editor.state is EditorState.TERMINATED:
            self.close()

    def _refresh(self) -> None:
        cursor = self._editor.cursor
        self._reg_panel.update_entries(
            self._registry.as_dict(), cursor.name if cursor else None
        )
        self._cursor_label.setText(f"選択: {cursor.name}" if cursor else "")
        path = self._registry.path
        self._status_label.setText(str(path) if path else "準備完了")
        self._console.focus_input()

    # ================================================================
    # Action handlers
    # ================================================================

    def _load_dialog(self) -> None:
        start = str(self._registry.path or self._settings.registry_file)
        path, _ = QFileDialog.getOpenFileName(self, "レジストリを読み込む", start, _FILE_FILTER)
        if path:
            self._run_command(f"load {path}")

    def _store_dialog(self) -> None:
        start = str(self._registry.path or self._settings.registry_file)
        path, _ = QFileDialog.getSaveFileName(self, "名前を付けて保存", start, _FILE_FILTER)
        if path:
            self._run_command(f"store {path}")

    def _confirm_clear(self) -> None:
        reply = QMessageBox.question(
            self, "全削除",
            "すべてのエントリを削除しますか？",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply == QMessageBox.StandardButton.Yes:
            self._run_command("clear")

    # ================================================================
    # Helpers
    # ================================================================

    def _log(self, level: str, message: str) -> None:
        self._log_panel.log(level, message)

    def _show_about(self) -> None:
        QMessageBox.about(
            self, "バージョン情報",
            "<b>Valman</b> v0.1.0<br>"
            "Python 3 + PySide6<br><br>"
            "名前付き数値レジストリ エディタ",
        )

    # ================================================================
    # Geometry persistence
    # ================================================================

    def _restore_geometry(self) -> None:
        qs = QSettings("Valman", "MainWindow")
        geom = qs.value("geometry")
        state = qs.value("windowState")
        if geom:
            self.restoreGeometry(geom)
        else:
            self.resize(1000, 640)
        if state:
            self.restoreState(state)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._editor.close()

        qs = QSettings("Valman", "MainWindow")
        qs.setValue("geometry",    self.saveGeometry())
        qs.setValue("windowState", self.saveState())
        event.accept()
