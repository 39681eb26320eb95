"""
Eye landmark types and extraction from a Face Mesh landmark array.

Coordinates are normalized image coordinates (0-1). Image-space and
screen-space points share the Point2D type; which space a point lives in is
fixed by the call site.
"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Sequence

import numpy as np


# MediaPipe Face Mesh eye contour indices, ordered around the eyelid.
# "Left" and "right" are from the subject's perspective.
LEFT_EYE_CONTOUR = [
    263, 249, 390, 373, 374, 380, 381, 382,
    362, 398, 384, 385, 386, 387, 388, 466,
]
RIGHT_EYE_CONTOUR = [
    33, 7, 163, 144, 145, 153, 154, 155,
    133, 173, 157, 158, 159, 160, 161, 246,
]


class Point2D(NamedTuple):
    """2D point, normalized image coordinates or screen pixels."""

    x: float
    y: float


def as_point_array(points: Optional[Sequence]) -> np.ndarray:
    """
    Convert a sequence of (x, y) points to a float array of shape (N, 2).

    None and empty sequences become an empty (0, 2) array.
    """
    if points is None:
        return np.empty((0, 2), dtype=np.float64)

    array = np.asarray(points, dtype=np.float64)
    if array.size == 0:
        return np.empty((0, 2), dtype=np.float64)

    return array.reshape(-1, 2)


def _empty_contour() -> np.ndarray:
    return np.empty((0, 2), dtype=np.float64)


@dataclass(frozen=True, eq=False)
class EyeContours:
    """
    Eye contours of one detected face.

    An empty contour means the detector found the face but no landmarks for
    that eye.
    """

    left: np.ndarray = field(default_factory=_empty_contour)  # Shape: (N, 2)
    right: np.ndarray = field(default_factory=_empty_contour)  # Shape: (M, 2)

    @classmethod
    def from_points(
        cls, left: Optional[Sequence], right: Optional[Sequence]
    ) -> "EyeContours":
        """Build contours from any (x, y) sequences."""
        return cls(left=as_point_array(left), right=as_point_array(right))

    @property
    def has_left(self) -> bool:
        return len(self.left) > 0

    @property
    def has_right(self) -> bool:
        return len(self.right) > 0


def extract_contour(landmarks: np.ndarray, indices: Sequence[int]) -> np.ndarray:
    """
    Pick the contour points for one eye out of the full landmark array.

    Args:
        landmarks: All face landmarks, shape (K, 2) or (K, 3)
        indices: Contour indices into the landmark array

    Returns:
        Contour of shape (len(indices), 2), or an empty contour when the
        array is too short or holds non-finite values for this eye
    """
    if landmarks is None or len(landmarks) <= max(indices):
        return _empty_contour()

    contour = np.asarray(landmarks, dtype=np.float64)[list(indices), :2]

    if not np.all(np.isfinite(contour)):
        return _empty_contour()

    return contour


def contours_from_landmarks(landmarks: np.ndarray) -> EyeContours:
    """
    Extract both eye contours from a Face Mesh landmark array.

    Args:
        landmarks: Normalized landmarks of a single face, shape (K, 2+)

    Returns:
        EyeContours (an eye is empty when its landmarks are unavailable)
    """
    return EyeContours(
        left=extract_contour(landmarks, LEFT_EYE_CONTOUR),
        right=extract_contour(landmarks, RIGHT_EYE_CONTOUR),
    )
