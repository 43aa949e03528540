"""
PixOrder - Media File Organizer
Entry point for the PySide6 GUI application.

    pixorder [--rules rules.json] [--log-file]
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

# Ensure src/ is on sys.path for absolute imports when launched as a script
SRC_DIR = Path(__file__).resolve().parent.parent  # src/ directory
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication, QMessageBox

from pixorder_app.core.errors import RuleFileError
from pixorder_app.core.rules import RuleSet

logger = logging.getLogger("pixorder_app")

HOMEBREW_BIN_DIRS = ("/opt/homebrew/bin", "/usr/local/bin")

PALETTE = {
    QPalette.ColorRole.Window: QColor(60, 73, 63),
    QPalette.ColorRole.WindowText: QColor(240, 247, 244),
    QPalette.ColorRole.Base: QColor(31, 38, 33),
    QPalette.ColorRole.Text: QColor(240, 247, 244),
    QPalette.ColorRole.Button: QColor(126, 141, 133),
    QPalette.ColorRole.ButtonText: QColor(240, 247, 244),
    QPalette.ColorRole.Highlight: QColor(162, 227, 196),
}


def parse_args(argv: List[str]) -> argparse.Namespace:
    """Parse PixOrder options; unknown (Qt) arguments are left alone."""
    parser = argparse.ArgumentParser(
        prog="pixorder",
        description="Sort photos and videos into folders by aspect ratio.",
    )
    parser.add_argument(
        "--rules",
        type=Path,
        help="JSON rule file to use instead of the built-in rules",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="also write each run's log to ~/Documents/pixorder_<timestamp>.log",
    )
    args, _ = parser.parse_known_args(argv)
    return args


def setup_dark_theme(app: QApplication) -> None:
    """Apply the green-gray palette."""
    palette = QPalette()
    for role, color in PALETTE.items():
        palette.setColor(role, color)
    app.setPalette(palette)


def extend_tool_path() -> None:
    """Put Homebrew bin dirs on PATH; Finder launches get a minimal PATH."""
    current = [p for p in os.environ.get("PATH", "").split(os.pathsep) if p]
    os.environ["PATH"] = os.pathsep.join(dict.fromkeys(list(HOMEBREW_BIN_DIRS) + current))


def main(argv: Optional[List[str]] = None) -> int:
    """Initialize and run the application."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    args = parse_args(sys.argv[1:] if argv is None else argv)
    extend_tool_path()

    QApplication.setApplicationName("PixOrder")
    QApplication.setOrganizationName("PixOrder")
    QApplication.setOrganizationDomain("com.pixorder.app")
    QApplication.setApplicationDisplayName("PixOrder - Media File Organizer")
    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    setup_dark_theme(app)

    rule_set = RuleSet.default()
    if args.rules is not None:
        try:
            rule_set = RuleSet.load(args.rules)
        except RuleFileError as e:
            logger.error("Cannot load rules: %s", e)
            QMessageBox.critical(None, "Invalid Rules File", str(e))
            return 1
        logger.info("Loaded %d rules from %s", len(rule_set), args.rules)

    from pixorder_app.ui.main_window import MainWindow

    window = MainWindow(rule_set=rule_set, log_to_file=args.log_file)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
