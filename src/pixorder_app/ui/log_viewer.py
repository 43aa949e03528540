# ui/log_viewer.py
"""
Run log panel.

Mirrors RunLogger messages forwarded by ClassifyWorker.log_message, plus the
window's own notices. Levels are the lowercase LogLevel names, with an extra
"success" level for end-of-run messages.
"""

from datetime import datetime

from PySide6.QtGui import QColor, QFont, QTextCharFormat, QTextCursor
from PySide6.QtWidgets import QTextEdit

# Oldest lines are dropped past this many
MAX_LOG_LINES = 5000

LEVEL_COLORS = {
    "debug": "#888888",
    "info": "#7E8D85",
    "success": "#A2E3C4",
    "warning": "#f59e0b",
    "error": "#ef4444",
}

TIMESTAMP_COLOR = "#666666"
MESSAGE_COLOR = "#B3BFB8"


def _char_format(color: str, bold: bool = False) -> QTextCharFormat:
    fmt = QTextCharFormat()
    fmt.setForeground(QColor(color))
    if bold:
        fmt.setFontWeight(QFont.Weight.Bold)
    return fmt


class LogViewer(QTextEdit):
    """Read-only, color-coded view of the current run's log."""

    def __init__(self):
        super().__init__()

        self.setReadOnly(True)
        self.document().setMaximumBlockCount(MAX_LOG_LINES)

        font = QFont("SF Mono", 11)
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.setFont(font)
        self.setStyleSheet(
            "QTextEdit { background-color: #1f2621; color: #F0F7F4; "
            "border-radius: 8px; padding: 12px; border: none; }"
        )

    def log(self, message: str, level: str = "info") -> None:
        """
        Append one line: "[HH:MM:SS] LEVEL    message".

        Args:
            message: Text to show
            level: debug, info, success, warning or error (unknown levels show as info)
        """
        level = level.lower()
        color = LEVEL_COLORS.get(level, LEVEL_COLORS["info"])

        cursor = self.textCursor()
        cursor.movePosition(QTextCursor.MoveOperation.End)
        cursor.insertText(
            f"[{datetime.now():%H:%M:%S}] ", _char_format(TIMESTAMP_COLOR)
        )
        cursor.insertText(f"{level.upper():<8}", _char_format(color, bold=True))
        cursor.insertText(f" {message}\n", _char_format(MESSAGE_COLOR))

        self.setTextCursor(cursor)
        self.ensureCursorVisible()


__all__ = ["LogViewer"]
