# core/classifier.py
"""
Aspect-ratio classification engine.

Runs each file through the pipeline:
    probe dimensions -> compute ratio -> match rule -> resolve destination
    -> handle conflict -> copy/move

Files are processed strictly in list order on the calling thread. pause(),
resume() and cancel() may be called from any other thread; the loop checks
them before each file and waits (without spinning) while paused.

Usage:
    classifier = Classifier(observer=my_observer)
    classifier.reset_control_state()
    summary = classifier.classify(files, RuleSet.default(), base_dir, options)
"""

import logging
import threading
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pixorder_app.core.errors import (
    CannotCreateDirectoryError,
    OperationError,
    ProbeError,
    UnreadableFileError,
    os_error_reason,
)
from pixorder_app.core.file_ops import handle_file_operation
from pixorder_app.core.metadata import MetadataReader
from pixorder_app.core.ratio import AspectRatio, RatioCalculator
from pixorder_app.core.results import (
    ClassificationMode,
    ClassificationObserver,
    ClassificationOptions,
    ClassificationResult,
    ClassificationSummary,
)
from pixorder_app.core.rules import RuleSet
from pixorder_app.utils.run_log import RunLogger

logger = logging.getLogger(__name__)

# Upper bound on how long a paused loop sleeps between checks (seconds)
PAUSE_POLL_INTERVAL = 0.1


class ControlSignal(Enum):
    """Externally controlled run signal. Cancel always wins over pause."""

    RUN = "run"
    PAUSE = "pause"
    CANCEL = "cancel"


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Classifier:
    """
    Sorts media files into subfolders by aspect ratio.

    Emits on_start / on_file_processed / on_completed to the observer and
    writes one run-log line per event.
    """

    def __init__(
        self,
        metadata_reader: Optional[MetadataReader] = None,
        run_log: Optional[RunLogger] = None,
        observer: Optional[ClassificationObserver] = None,
        ratio_calculator: Optional[RatioCalculator] = None,
    ):
        """
        Initialize the Classifier.

        Args:
            metadata_reader: Dimension probe (default: MetadataReader())
            run_log: Event log sink (default: logger-only RunLogger)
            observer: Receives start / per-file / completion events
            ratio_calculator: Dimension-to-ratio converter
        """
        self.metadata_reader = metadata_reader or MetadataReader()
        self.run_log = run_log or RunLogger()
        self.observer = observer
        self.ratio_calculator = ratio_calculator or RatioCalculator()

        self._condition = threading.Condition()
        self._signal = ControlSignal.RUN
        self._active = False
        self._last_outcome = RunState.IDLE

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def pause(self) -> None:
        with self._condition:
            if self._signal is ControlSignal.RUN:
                self._signal = ControlSignal.PAUSE
                self._condition.notify_all()

    def resume(self) -> None:
        with self._condition:
            if self._signal is ControlSignal.PAUSE:
                self._signal = ControlSignal.RUN
                self._condition.notify_all()

    def cancel(self) -> None:
        """Request cancellation. Idempotent; also clears a pending pause."""
        with self._condition:
            self._signal = ControlSignal.CANCEL
            self._condition.notify_all()

    def reset_control_state(self) -> None:
        """Clear pause/cancel left over from a previous run."""
        with self._condition:
            self._signal = ControlSignal.RUN
            if not self._active:
                self._last_outcome = RunState.IDLE
            self._condition.notify_all()

    @property
    def is_paused(self) -> bool:
        with self._condition:
            return self._signal is ControlSignal.PAUSE

    @property
    def is_cancelled(self) -> bool:
        with self._condition:
            return self._signal is ControlSignal.CANCEL

    @property
    def state(self) -> RunState:
        with self._condition:
            if not self._active:
                return self._last_outcome
            if self._signal is ControlSignal.PAUSE:
                return RunState.PAUSED
            return RunState.RUNNING

    def _should_stop(self) -> bool:
        """Checkpoint: wait out a pause, then report whether to stop."""
        with self._condition:
            if self._signal is ControlSignal.CANCEL:
                return True
            while self._signal is ControlSignal.PAUSE:
                self._condition.wait(timeout=PAUSE_POLL_INTERVAL)
            return self._signal is ControlSignal.CANCEL

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(
        self,
        media_files: Sequence[Union[str, Path]],
        rule_set: RuleSet,
        base_directory: Union[str, Path],
        options: Optional[ClassificationOptions] = None,
    ) -> ClassificationSummary:
        """
        Classify files into subfolders of base_directory.

        Args:
            media_files: Files to process, in processing order
            rule_set: Rules to match against, in priority order
            base_directory: Folder that receives the rule subfolders
            options: Run configuration (default: ClassificationOptions())

        Returns:
            ClassificationSummary. total_files is always len(media_files);
            files not reached before a cancel count as failed.
        """
        options = options or ClassificationOptions()
        base_directory = Path(base_directory)
        files = [Path(f) for f in media_files]
        total = len(files)

        start_time = datetime.now()
        with self._condition:
            self._active = True

        self.run_log.log_classification_start(total, base_directory)
        if self.observer:
            self.observer.on_start(total)

        results: List[ClassificationResult] = []
        success_count = 0
        cancelled = False

        try:
            for index, media_file in enumerate(files):
                if self._should_stop():
                    self.run_log.log("Classification cancelled by user")
                    cancelled = True
                    break

                result = self.process_file(media_file, rule_set, base_directory, options)
                results.append(result)
                if result.success:
                    success_count += 1

                self.run_log.log_classification_result(result)
                if self.observer:
                    self.observer.on_file_processed(index + 1, total, result)
        finally:
            with self._condition:
                self._active = False
                self._last_outcome = (
                    RunState.CANCELLED if cancelled else RunState.COMPLETED
                )

        summary = ClassificationSummary(
            start_time=start_time,
            end_time=datetime.now(),
            total_files=total,
            successful_files=success_count,
            failed_files=total - success_count,
            results=results,
        )

        self.run_log.log_classification_summary(summary)
        if self.observer:
            self.observer.on_completed(summary)

        return summary

    def process_file(
        self,
        media_file: Path,
        rule_set: RuleSet,
        base_directory: Path,
        options: ClassificationOptions,
    ) -> ClassificationResult:
        """Run one file through the pipeline. Never raises for probe/operation errors."""
        try:
            dimensions = self.metadata_reader.get_dimensions(media_file)
        except ProbeError as e:
            return self._failure(media_file, e)
        except OSError as e:
            return self._failure(
                media_file, UnreadableFileError(os_error_reason(e), path=media_file)
            )

        try:
            aspect_ratio = self.ratio_calculator.calculate_ratio(dimensions)
        except ValueError as e:
            return self._failure(media_file, ProbeError(str(e), path=media_file))

        matched_rule = rule_set.find_matching_rule(aspect_ratio)
        folder_name = (
            matched_rule.destination_path if matched_rule else options.default_folder_name
        )

        destination_folder = base_directory / folder_name
        destination = destination_folder / media_file.name

        logger.debug(
            "Routing %s (%s) -> %s",
            media_file.name,
            aspect_ratio,
            folder_name,
        )

        if options.mode is ClassificationMode.DRY_RUN:
            return ClassificationResult(
                original_path=media_file,
                destination_path=destination,
                aspect_ratio=aspect_ratio,
                matched_rule=matched_rule,
                success=True,
            )

        try:
            if options.create_subfolders:
                try:
                    destination_folder.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    raise CannotCreateDirectoryError(
                        f"Cannot create destination directory ({os_error_reason(e)})",
                        path=destination_folder,
                    ) from e

            final_destination = handle_file_operation(
                media_file,
                destination,
                options.mode,
                options.conflict_resolution,
            )
        except OperationError as e:
            return self._failure(media_file, e)

        return ClassificationResult(
            original_path=media_file,
            destination_path=final_destination,
            aspect_ratio=aspect_ratio,
            matched_rule=matched_rule,
            success=True,
        )

    def _failure(self, media_file: Path, error: Exception) -> ClassificationResult:
        return ClassificationResult(
            original_path=media_file,
            aspect_ratio=AspectRatio(ratio=0),
            success=False,
            error=error,
        )


__all__ = [
    "Classifier",
    "ControlSignal",
    "RunState",
    "PAUSE_POLL_INTERVAL",
]
