"""
Eye anchor estimation from eye contour landmarks.

Reduces the two eye contours of a face to a single normalized anchor point:
the average of the two contour centroids.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from eyes.vision.landmarks import EyeContours, Point2D, as_point_array
from eyes.utils.logger import get_logger

logger = get_logger(__name__)


# Stands in for an eye whose contour is missing
NEUTRAL_POINT = Point2D(0.5, 0.5)


class DetectionQuality(Enum):
    """How many eyes contributed real landmarks to an anchor."""

    BOTH_EYES = "both_eyes"
    ONE_EYE = "one_eye"
    NONE = "none"


@dataclass(frozen=True)
class EyeAnchor:
    """Normalized anchor point with the quality of the detection behind it."""

    point: Point2D
    quality: DetectionQuality

    @property
    def is_degraded(self) -> bool:
        """True if at least one eye was replaced by the neutral point."""
        return self.quality is not DetectionQuality.BOTH_EYES


def centroid(points: Sequence) -> Optional[Point2D]:
    """
    Componentwise arithmetic mean of a point sequence.

    Args:
        points: Sequence of (x, y) points

    Returns:
        Centroid, or None for an empty sequence
    """
    array = as_point_array(points)
    if len(array) == 0:
        return None

    mean = array.mean(axis=0)
    return Point2D(float(mean[0]), float(mean[1]))


def midpoint(a: Point2D, b: Point2D) -> Point2D:
    """Componentwise average of two points."""
    return Point2D((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


def compute_anchor(left: Optional[Sequence], right: Optional[Sequence]) -> EyeAnchor:
    """
    Compute the anchor point from left and right eye contours.

    Args:
        left: Left eye contour points (may be empty or None)
        right: Right eye contour points (may be empty or None)

    Returns:
        EyeAnchor; a missing eye contributes NEUTRAL_POINT
    """
    left_center = centroid(left) if left is not None else None
    right_center = centroid(right) if right is not None else None

    found = sum(c is not None for c in (left_center, right_center))
    if found == 2:
        quality = DetectionQuality.BOTH_EYES
    elif found == 1:
        quality = DetectionQuality.ONE_EYE
    else:
        quality = DetectionQuality.NONE

    point = midpoint(
        left_center if left_center is not None else NEUTRAL_POINT,
        right_center if right_center is not None else NEUTRAL_POINT,
    )

    return EyeAnchor(point=point, quality=quality)


class EyePositionEstimator:
    """
    Turn detected eye contours into eye anchors.

    Stateless apart from the last anchor, which is kept for diagnostics.
    """

    def __init__(self):
        self._last_anchor: Optional[EyeAnchor] = None
        self._last_quality: Optional[DetectionQuality] = None

    def estimate(self, contours: EyeContours) -> EyeAnchor:
        """
        Estimate the anchor for one face.

        Args:
            contours: Eye contours from the landmark detector

        Returns:
            EyeAnchor for this frame
        """
        anchor = compute_anchor(contours.left, contours.right)

        # Log quality changes only, not every frame
        if anchor.quality is not self._last_quality:
            if anchor.is_degraded:
                logger.info(f"Eye landmarks degraded: {anchor.quality.value}")
            elif self._last_quality is not None:
                logger.info("Both eyes detected again")
            self._last_quality = anchor.quality

        self._last_anchor = anchor
        return anchor

    @property
    def last_anchor(self) -> Optional[EyeAnchor]:
        """Get last estimated anchor."""
        return self._last_anchor

    def reset(self):
        """Reset estimator state."""
        self._last_anchor = None
        self._last_quality = None

