"""Dark-theme stylesheets shared across the application."""

MAIN_WINDOW = """
    QMainWindow           { background: #1E1E1E; }
    QMenuBar              { background: #3C3C3C; color: #CCCCCC; }
    QMenuBar::item        { padding: 4px 10px; }
    QMenuBar::item:selected { background: #094771; }
    QMenu                 { background: #252526; color: #CCCCCC; border: 1px solid #454545; }
    QMenu::item           { padding: 4px 20px; }
    QMenu::item:selected  { background: #094771; }
    QMenu::separator      { height: 1px; background: #3C3C3C; margin: 2px 0; }
    QDockWidget::title    {
        background: #333333; color: #CCCCCC;
        padding: 4px 6px; font-size: 12px;
    }
    QDockWidget           { color: #CCCCCC; }
    QStatusBar            { background: #007ACC; color: #FFFFFF; font-size: 12px; }
    QStatusBar::item      { border: none; }
"""

TABLE = """
    QTableWidget {
        background-color: #1E1E1E;
        color: #D4D4D4;
        border: none;
        gridline-color: #3C3C3C;
    }
    QTableWidget::item { padding: 2px 6px; }
    QTableWidget::item:selected { background: #264F78; }
    QHeaderView::section {
        background-color: #2D2D2D;
        color: #AAAAAA;
        border: none;
        border-bottom: 1px solid #3C3C3C;
        padding: 3px 6px;
    }
"""

CONSOLE = """
    QPlainTextEdit { background: #0C0C0C; color: #CCCCCC; border: none; }
    QLineEdit {
        background: #1E1E1E; color: #D4D4D4;
        border: 1px solid #3C3C3C; padding: 3px 6px;
    }
    QLineEdit:focus { border: 1px solid #007ACC; }
"""

BUTTON = """
    QPushButton {
        background: #3C3C3C; color: #CCCCCC;
        border: 1px solid #555; border-radius: 3px;
        padding: 2px 10px; font-size: 11px;
    }
    QPushButton:hover { background: #4A4A4A; }
"""
