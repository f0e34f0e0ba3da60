"""Valman — Entry point."""
import argparse
import sys
from pathlib import Path

from valman.core.editor import Editor
from valman.core.errors import ValmanError
from valman.core.registry import Registry
from valman.core.settings_manager import SettingsManager
from valman.utils.optional_deps import HAS_QT

BASE_DIR = Path(__file__).parent


def _stderr_log(level: str, message: str) -> None:
    print(f"[{level:7}] {message}", file=sys.stderr)


def _run_gui(registry: Registry, settings: SettingsManager) -> int:
    from PySide6.QtWidgets import QApplication
    from valman.gui.main_window import MainWindow

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Valman")
    app.setApplicationVersion("0.1.0")
    app.setOrganizationName("Valman")
    app.setStyle("Fusion")

    window = MainWindow(registry, settings)
    window.show()
    return app.exec()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="valman", description="Named value registry editor")
    parser.add_argument("file", nargs="?", help="Registry file (default from settings).")
    parser.add_argument("--config", type=Path, default=BASE_DIR / "valman.ini",
                        help="Settings file.")
    parser.add_argument("-c", "--command", action="append", default=[],
                        help="Run this line and exit; may be repeated.")
    parser.add_argument("--gui", action="store_true", help="Open the PySide6 window.")
    parser.add_argument("--verbose", action="store_true", help="Log to stderr.")
    args = parser.parse_args(argv)

    settings = SettingsManager(args.config)
    log_fn   = _stderr_log if args.verbose else None
    path     = Path(args.file) if args.file else settings.registry_file

    try:
        registry = Registry(path, marker=settings.marker, log_fn=log_fn)
    except ValmanError as exc:
        print(exc, file=sys.stderr)
        return 1

    if args.gui:
        if not HAS_QT:
            print("--gui requires PySide6", file=sys.stderr)
            return 1
        return _run_gui(registry, settings)

    editor = Editor(registry, settings=settings, log_fn=log_fn)
    if args.command:
        for line in args.command:
            if not editor.execute(line):
                break
        return 0

    editor.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
