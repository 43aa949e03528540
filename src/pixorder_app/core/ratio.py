# core/ratio.py
"""
Aspect ratio value type and ratio calculation.

An AspectRatio pairs a width/height ratio with a matching tolerance. Two
ratios match when their difference is within the larger of the two
tolerances, so a loose rule can still catch a strict query and vice versa.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

DEFAULT_TOLERANCE = 0.05

# Tolerance used when picking a human-readable label
LABEL_TOLERANCE = 0.05

# Checked in order; first match wins
LABEL_TABLE: Tuple[Tuple[float, str], ...] = (
    (1.0, "1:1"),
    (1.333, "4:3"),
    (1.5, "3:2"),
    (1.777, "16:9"),
    (2.333, "21:9"),
    (0.75, "3:4"),
    (0.667, "2:3"),
    (0.562, "9:16"),
)


@dataclass(frozen=True)
class AspectRatio:
    """Width-to-height ratio with a matching tolerance."""

    ratio: float
    tolerance: float = DEFAULT_TOLERANCE

    def __post_init__(self):
        if self.ratio < 0:
            raise ValueError(f"Aspect ratio must be >= 0, got {self.ratio}")
        if self.tolerance < 0:
            raise ValueError(f"Tolerance must be >= 0, got {self.tolerance}")

    @classmethod
    def from_dimensions(
        cls,
        width: float,
        height: float,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> "AspectRatio":
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Dimensions must be positive, got {width}x{height}"
            )
        return cls(ratio=float(width) / float(height), tolerance=tolerance)

    def matches(
        self,
        other: Union["AspectRatio", float],
        tolerance: Optional[float] = None,
    ) -> bool:
        """
        Check whether another ratio falls within tolerance of this one.

        Args:
            other: AspectRatio or raw ratio value
            tolerance: Explicit tolerance for raw values (default: own tolerance).
                       Ignored for AspectRatio arguments, which always use the
                       larger of the two tolerances.

        Returns:
            True if |self.ratio - other.ratio| <= effective tolerance
        """
        if isinstance(other, AspectRatio):
            effective = max(self.tolerance, other.tolerance)
            return abs(self.ratio - other.ratio) <= effective

        effective = self.tolerance if tolerance is None else tolerance
        return abs(self.ratio - float(other)) <= effective

    @property
    def label(self) -> str:
        for common_ratio, label in LABEL_TABLE:
            if self.matches(common_ratio, tolerance=LABEL_TOLERANCE):
                return label
        return f"{self.ratio:.3f}:1"

    def __str__(self) -> str:
        return self.label


COMMON_RATIOS: Dict[str, AspectRatio] = {
    "square": AspectRatio(1.0),
    "4:3": AspectRatio(4.0 / 3.0),
    "3:2": AspectRatio(3.0 / 2.0),
    "16:9": AspectRatio(16.0 / 9.0),
    "21:9": AspectRatio(21.0 / 9.0),
    "portrait_4:3": AspectRatio(3.0 / 4.0),
    "portrait_3:2": AspectRatio(2.0 / 3.0),
    "portrait_9:16": AspectRatio(9.0 / 16.0),
}


class RatioCalculator:
    """Converts raw media dimensions into an AspectRatio."""

    def __init__(self, tolerance: float = DEFAULT_TOLERANCE):
        self.tolerance = tolerance

    def calculate_ratio(self, dimensions) -> AspectRatio:
        """Compute the ratio for any object exposing width and height."""
        return self.ratio_for(dimensions.width, dimensions.height)

    def ratio_for(self, width: float, height: float) -> AspectRatio:
        return AspectRatio.from_dimensions(width, height, tolerance=self.tolerance)


__all__ = [
    "AspectRatio",
    "RatioCalculator",
    "COMMON_RATIOS",
    "DEFAULT_TOLERANCE",
    "LABEL_TABLE",
]
