# Core business logic modules
# - ratio: AspectRatio value type, RatioCalculator
# - rules: Rule, RuleSet, default rule table
# - results: options, per-file results, run summary, observer
# - errors: scan / probe / operation error taxonomy
# - metadata: MetadataReader (image and video dimensions)
# - scanner: MediaScanner
# - file_ops: conflict handling and copy/move
# - classifier: Classifier engine (pause/resume/cancel)
# - worker: ClassifyWorker QThread (imported from pixorder_app.core.worker)

from pixorder_app.core.classifier import Classifier, ControlSignal, RunState
from pixorder_app.core.errors import (
    OperationError,
    PixOrderError,
    ProbeError,
    RuleFileError,
    ScanError,
)
from pixorder_app.core.file_ops import handle_file_operation
from pixorder_app.core.metadata import MediaDimensions, MetadataReader
from pixorder_app.core.ratio import COMMON_RATIOS, AspectRatio, RatioCalculator
from pixorder_app.core.results import (
    ClassificationMode,
    ClassificationObserver,
    ClassificationOptions,
    ClassificationResult,
    ClassificationSummary,
    ConflictResolution,
)
from pixorder_app.core.rules import Rule, RuleSet
from pixorder_app.core.scanner import MediaScanner

__all__ = [
    # Ratio model
    "AspectRatio",
    "RatioCalculator",
    "COMMON_RATIOS",
    # Rules
    "Rule",
    "RuleSet",
    # Run types
    "ClassificationMode",
    "ConflictResolution",
    "ClassificationOptions",
    "ClassificationResult",
    "ClassificationSummary",
    "ClassificationObserver",
    # Engine
    "Classifier",
    "ControlSignal",
    "RunState",
    "handle_file_operation",
    # Collaborators
    "MediaScanner",
    "MetadataReader",
    "MediaDimensions",
    # Errors
    "PixOrderError",
    "ScanError",
    "ProbeError",
    "OperationError",
    "RuleFileError",
]
