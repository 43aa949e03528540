# core/results.py
"""
Run configuration, per-file results and run summaries.

Also defines ClassificationObserver, the event sink the Classifier reports
to. Observers are called on the classifier's own thread; marshaling onto a
UI thread is the observer's job.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pixorder_app.core.ratio import AspectRatio
from pixorder_app.core.rules import Rule

DEFAULT_FOLDER_NAME = "Other"


class ClassificationMode(Enum):
    MOVE = "move"
    COPY = "copy"
    DRY_RUN = "dry_run"


class ConflictResolution(Enum):
    SKIP = "skip"
    RENAME = "rename"
    OVERWRITE = "overwrite"


@dataclass(frozen=True)
class ClassificationOptions:
    """Immutable configuration for one classification run."""

    mode: ClassificationMode = ClassificationMode.MOVE
    conflict_resolution: ConflictResolution = ConflictResolution.RENAME
    create_subfolders: bool = True
    default_folder_name: str = DEFAULT_FOLDER_NAME


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying a single file."""

    original_path: Path
    aspect_ratio: AspectRatio
    success: bool
    destination_path: Optional[Path] = None
    matched_rule: Optional[Rule] = None
    error: Optional[Exception] = None


@dataclass(frozen=True)
class ClassificationSummary:
    """
    Aggregate outcome of a run.

    Note: total_files is the length of the input list even when the run was
    cancelled, and failed_files is total_files - successful_files. Files the
    run never reached are therefore reported as failed.
    """

    start_time: datetime
    end_time: datetime
    total_files: int
    successful_files: int
    failed_files: int
    results: List[ClassificationResult] = field(default_factory=list)

    @property
    def duration(self) -> float:
        """Run duration in seconds."""
        return (self.end_time - self.start_time).total_seconds()

    @property
    def success_rate(self) -> float:
        if self.total_files == 0:
            return 0.0
        return self.successful_files / self.total_files

    def rule_distribution(self) -> Dict[str, int]:
        """Count of results per matched rule name, in first-seen order."""
        counts: Dict[str, int] = {}
        for result in self.results:
            if result.matched_rule is None:
                continue
            name = result.matched_rule.name
            counts[name] = counts.get(name, 0) + 1
        return counts


class ClassificationObserver:
    """
    Receives classifier events. Subclass and override what you need.

    Events arrive in processing order: one on_start, one on_file_processed
    per processed file, one on_completed.
    """

    def on_start(self, total_files: int) -> None:
        pass

    def on_file_processed(
        self, index: int, total_files: int, result: ClassificationResult
    ) -> None:
        pass

    def on_completed(self, summary: ClassificationSummary) -> None:
        pass


__all__ = [
    "ClassificationMode",
    "ConflictResolution",
    "ClassificationOptions",
    "ClassificationResult",
    "ClassificationSummary",
    "ClassificationObserver",
    "DEFAULT_FOLDER_NAME",
]
