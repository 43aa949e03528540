# utils/run_log.py
"""
Run event logging.

Forwards classification events to the standard logging module and,
optionally, to an append-only plain-text log file and a listener callback
(used by the UI to mirror messages in its log view).

Format:
    [YYYY-MM-DD HH:MM:SS.mmm] [LEVEL] message

Usage:
    with RunLogger(log_to_file=True) as run_log:
        classifier = Classifier(run_log=run_log)
        classifier.classify(files, rule_set, base_dir)
"""

import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Default log file directory
DEFAULT_LOG_DIR = Path.home() / "Documents"


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.value)


LogListener = Callable[[str, LogLevel], None]


class RunLogger:
    """
    Event sink for classification runs.

    Every message goes to the module logger. When file logging is enabled,
    each message is also appended as one timestamped line to
    pixorder_<timestamp>.log in log_dir.
    """

    def __init__(
        self,
        log_to_file: bool = False,
        log_dir: Path | str | None = None,
        log_path: Path | str | None = None,
        listener: Optional[LogListener] = None,
    ):
        """
        Initialize the RunLogger.

        Args:
            log_to_file: If True, append every message to a log file
            log_dir: Directory for the log file (default: ~/Documents)
            log_path: Explicit log file path (overrides log_dir, implies log_to_file)
            listener: Called with (message, level) for every message
        """
        if log_path is not None:
            self.log_path: Optional[Path] = Path(log_path)
        elif log_to_file:
            directory = Path(log_dir) if log_dir is not None else DEFAULT_LOG_DIR
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            self.log_path = directory / f"pixorder_{timestamp}.log"
        else:
            self.log_path = None

        self.listener = listener
        self._message_count = 0
        self._file_failed = False

    @property
    def message_count(self) -> int:
        return self._message_count

    def log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        """
        Record a message.

        Args:
            message: Free-form message text
            level: Severity
        """
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        line = f"[{timestamp}] [{level.value}] {message}"
        self._message_count += 1

        logger.log(level.logging_level, message)

        if self.log_path is not None:
            self._write_line(line)

        if self.listener is not None:
            self.listener(message, level)

    def _write_line(self, line: str) -> None:
        if self._file_failed:
            return
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            # Append mode; one line per event
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            # Keep logging to the logger only; don't retry on every message
            self._file_failed = True
            logger.warning("Failed to write run log %s: %s", self.log_path, e)

    def log_classification_start(self, total_files: int, directory: Path | str) -> None:
        self.log(f"Starting classification of {total_files} files into {directory}")

    def log_classification_result(self, result) -> None:
        name = Path(result.original_path).name
        if result.success:
            rule_name = (
                result.matched_rule.name if result.matched_rule else "No matching rule"
            )
            self.log(f"✓ {name} ({result.aspect_ratio}) → {rule_name}")
        else:
            error = str(result.error) if result.error else "Unknown error"
            self.log(f"✗ {name}: {error}", LogLevel.ERROR)

    def log_classification_summary(self, summary) -> None:
        self.log(f"Classification completed in {summary.duration:.2f}s")
        self.log(
            f"Results: {summary.successful_files}/{summary.total_files} "
            "files processed successfully"
        )

        if summary.failed_files > 0:
            self.log(f"Failed to process {summary.failed_files} files", LogLevel.WARNING)

        for rule_name, count in summary.rule_distribution().items():
            self.log(f"  {rule_name}: {count} files")

    def close(self) -> None:
        """Detach the listener and report where the log file was written."""
        self.listener = None
        if self.log_path is not None and not self._file_failed:
            logger.info(
                "Run log finalized: %s (%d messages)",
                self.log_path,
                self._message_count,
            )

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["RunLogger", "LogLevel", "LogListener", "DEFAULT_LOG_DIR"]
