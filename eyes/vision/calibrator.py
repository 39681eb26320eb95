"""
One-shot center calibration and eye-to-screen mapping.

The first anchor seen after launch is recorded as the calibration center.
After that, anchors are projected to screen pixels with a fixed transform
that swaps the axes and flips the vertical one (front camera sensor rotated
against a portrait screen).

The recorded center is not part of the projection. It is exposed through
CalibrationState.center and offset_from_center() so callers can see it.
"""

import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from eyes.vision.landmarks import Point2D
from eyes.utils.logger import get_logger

logger = get_logger(__name__)


class CalibrationPhase(Enum):
    """
    Calibration phases.

    Transition:
        UNCALIBRATED -> CALIBRATED (one way, no reset)
    """

    UNCALIBRATED = auto()  # Waiting for the first anchor
    CALIBRATED = auto()    # Center recorded, anchors are mapped to screen


@dataclass(frozen=True)
class CalibrationSnapshot:
    """Consistent copy of the calibration state for readers."""

    phase: CalibrationPhase
    center: Optional[Point2D]

    @property
    def is_set(self) -> bool:
        return self.phase is CalibrationPhase.CALIBRATED


class CalibrationState:
    """
    Process-lifetime calibration latch.

    Written by the frame-processing thread, read by the UI. The phase and the
    center change together under one lock, and only once.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._phase = CalibrationPhase.UNCALIBRATED
        self._center: Optional[Point2D] = None

    def latch(self, anchor: Point2D) -> bool:
        """
        Record the calibration center if not yet calibrated.

        Args:
            anchor: Normalized anchor point of the current frame

        Returns:
            True if this call performed the calibration, False if already
            calibrated (the stored center is left untouched)
        """
        with self._lock:
            if self._phase is CalibrationPhase.CALIBRATED:
                return False

            self._center = Point2D(float(anchor.x), float(anchor.y))
            self._phase = CalibrationPhase.CALIBRATED

        logger.info(f"Calibration center set: ({anchor.x:.3f}, {anchor.y:.3f})")
        return True

    def snapshot(self) -> CalibrationSnapshot:
        """Get phase and center as one consistent value."""
        with self._lock:
            return CalibrationSnapshot(phase=self._phase, center=self._center)

    @property
    def phase(self) -> CalibrationPhase:
        with self._lock:
            return self._phase

    @property
    def is_set(self) -> bool:
        return self.phase is CalibrationPhase.CALIBRATED

    @property
    def center(self) -> Optional[Point2D]:
        """Recorded center, or None while uncalibrated."""
        with self._lock:
            return self._center

    def offset_from_center(self, anchor: Point2D) -> Optional[Point2D]:
        """
        Anchor position relative to the calibration center.

        Returns:
            anchor - center, or None while uncalibrated
        """
        center = self.center
        if center is None:
            return None

        return Point2D(anchor.x - center.x, anchor.y - center.y)


def map_to_screen(anchor: Point2D, screen_width: float, screen_height: float) -> Point2D:
    """
    Map a normalized anchor to screen pixel coordinates.

    screen_x = anchor.y * width
    screen_y = (1 - anchor.x) * height

    Args:
        anchor: Normalized anchor point
        screen_width: Screen width in pixels
        screen_height: Screen height in pixels

    Returns:
        Screen position in pixels (not clamped)

    Raises:
        ValueError: If the screen size is not positive
    """
    if screen_width <= 0 or screen_height <= 0:
        raise ValueError(f"Invalid screen size: {screen_width}x{screen_height}")

    return Point2D(
        anchor.y * screen_width,
        (1.0 - anchor.x) * screen_height,
    )
