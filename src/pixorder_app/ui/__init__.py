"""
UI components for PixOrder.

- main_window: MainWindow with folder selection, mode and conflict options,
  start/pause/cancel controls and progress tracking
- log_viewer: LogViewer widget with colored log output
"""

from .log_viewer import LogViewer
from .main_window import MainWindow

__all__ = ["MainWindow", "LogViewer"]
