# core/worker.py
"""
Background worker thread for classification runs.

Scans the source folder, runs the Classifier on its own QThread, and
re-emits classifier events and run-log messages as PySide6 signals so the
UI receives them on its own thread.

Usage:
    worker = ClassifyWorker(source, target, options, include_subfolders)
    worker.progress.connect(on_progress)
    worker.log_message.connect(on_log)
    worker.completed.connect(on_completed)
    worker.start()
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QThread, Signal

from pixorder_app.core.classifier import Classifier
from pixorder_app.core.errors import ScanError
from pixorder_app.core.metadata import MetadataReader
from pixorder_app.core.results import (
    ClassificationObserver,
    ClassificationOptions,
    ClassificationResult,
    ClassificationSummary,
)
from pixorder_app.core.rules import RuleSet
from pixorder_app.core.scanner import MediaScanner
from pixorder_app.utils.run_log import LogLevel, RunLogger

logger = logging.getLogger(__name__)


class ClassifyWorker(QThread):
    """
    Worker thread that scans and classifies one folder.

    Emits signals for start, progress, per-file results, log lines and
    completion. Scan failures abort the run and are reported once via
    scan_failed.
    """

    # Signals for UI communication
    started_processing = Signal(int)  # total files
    progress = Signal(int, int, str)  # current, total, ETA string
    file_processed = Signal(object)  # ClassificationResult
    log_message = Signal(str, str)  # message, level ("debug"/"info"/"warning"/"error")
    completed = Signal(object)  # ClassificationSummary
    scan_failed = Signal(str)  # error message

    def __init__(
        self,
        source_folder: Union[str, Path],
        target_folder: Union[str, Path, None] = None,
        options: Optional[ClassificationOptions] = None,
        include_subfolders: bool = False,
        rule_set: Optional[RuleSet] = None,
        log_to_file: bool = False,
        metadata_reader: Optional[MetadataReader] = None,
    ):
        """
        Initialize the ClassifyWorker.

        Args:
            source_folder: Folder to scan for media files
            target_folder: Folder receiving the subfolders (default: source_folder)
            options: Classification options for the run
            include_subfolders: If True, scan subfolders as well
            rule_set: Rules to apply (default: RuleSet.default())
            log_to_file: If True, also write the run log to a file
            metadata_reader: Dimension probe (default: MetadataReader())
        """
        super().__init__()

        self.source_folder = Path(source_folder)
        self.target_folder = Path(target_folder) if target_folder else self.source_folder
        self.options = options or ClassificationOptions()
        self.include_subfolders = include_subfolders
        self.rule_set = rule_set or RuleSet.default()

        self._start_time: float = 0.0

        self.run_log = RunLogger(log_to_file=log_to_file, listener=self._on_log)
        self.classifier = Classifier(
            metadata_reader=metadata_reader,
            run_log=self.run_log,
            observer=_SignalObserver(self),
        )

    def pause(self) -> None:
        self.classifier.pause()
        self.log_message.emit("Operation paused", "info")

    def resume(self) -> None:
        self.classifier.resume()
        self.log_message.emit("Resuming operation...", "info")

    def request_stop(self) -> None:
        """Request graceful stop; the file in progress is finished first."""
        self.classifier.cancel()
        self.log_message.emit("Stop requested by user...", "warning")

    def run(self) -> None:
        """Main execution method - scan, then classify."""
        self._start_time = time.time()
        self.classifier.reset_control_state()

        try:
            scanner = MediaScanner()
            self.log_message.emit(
                f"Scanning media files in {self.source_folder}"
                + (" and subfolders..." if self.include_subfolders else "..."),
                "info",
            )
            media_files = scanner.scan_folder(
                self.source_folder, include_subfolders=self.include_subfolders
            )
        except ScanError as e:
            logger.error("Scan failed: %s", e)
            self.log_message.emit(f"Scan failed: {e}", "error")
            self.scan_failed.emit(str(e))
            self.run_log.close()
            return

        self.log_message.emit(f"Found {len(media_files)} media files", "info")

        try:
            self.classifier.classify(
                media_files,
                self.rule_set,
                self.target_folder,
                self.options,
            )
        except Exception as e:
            logger.exception("Fatal error in worker")
            self.log_message.emit(f"Fatal error: {e}", "error")
            self.scan_failed.emit(str(e))
        finally:
            self.run_log.close()

    def _calculate_eta(self, current: int, total: int) -> str:
        """Calculate estimated time remaining."""
        if current == 0 or total == 0:
            return "Calculating..."

        elapsed = time.time() - self._start_time
        if elapsed < 1:
            return "Calculating..."

        rate = current / elapsed
        remaining_seconds = (total - current) / rate

        mins = int(remaining_seconds // 60)
        secs = int(remaining_seconds % 60)

        if mins > 0:
            return f"ETA: {mins}m {secs}s"
        return f"ETA: {secs}s"

    def _on_log(self, message: str, level: LogLevel) -> None:
        self.log_message.emit(message, level.value.lower())


class _SignalObserver(ClassificationObserver):
    """Bridges classifier events to the worker's signals."""

    def __init__(self, worker: ClassifyWorker):
        self.worker = worker

    def on_start(self, total_files: int) -> None:
        self.worker.started_processing.emit(total_files)

    def on_file_processed(
        self, index: int, total_files: int, result: ClassificationResult
    ) -> None:
        eta = self.worker._calculate_eta(index, total_files)
        self.worker.progress.emit(index, total_files, eta)
        self.worker.file_processed.emit(result)

    def on_completed(self, summary: ClassificationSummary) -> None:
        self.worker.completed.emit(summary)


__all__ = ["ClassifyWorker"]
