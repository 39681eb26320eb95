"""
Per-frame gaze pipeline.

eye contours -> eye anchor -> calibration / screen mapping -> FrameResult

Owns the calibration state and the latest gaze position. Frames are fed in
one at a time by a single producer; readers get immutable FrameResults or
locked snapshots.
"""

import threading
from dataclasses import dataclass
from typing import Optional, Tuple

from eyes.core.config import DetectionConfig
from eyes.vision.landmarks import EyeContours, Point2D
from eyes.vision.eye_mapper import EyeAnchor, EyePositionEstimator
from eyes.vision.calibrator import (
    CalibrationPhase,
    CalibrationSnapshot,
    CalibrationState,
    map_to_screen,
)
from eyes.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FrameResult:
    """Result of processing a single frame, handed to the UI."""

    success: bool
    face_detected: bool
    phase: CalibrationPhase
    gaze_position: Point2D  # Screen pixels; retained value if not updated
    gaze_updated: bool = False
    anchor: Optional[EyeAnchor] = None
    calibration_center: Optional[Point2D] = None
    center_offset: Optional[Point2D] = None
    frame_available: bool = True  # False when no camera frame was read

    @property
    def is_calibrated(self) -> bool:
        return self.phase is CalibrationPhase.CALIBRATED


class GazePipeline:
    """
    Maps detected eye contours to a screen position.

    Behaviour per frame:
    - No face: nothing changes, the previous gaze position is reported
    - First anchor: recorded as calibration center, no gaze position
    - Later anchors: projected to screen pixels and published
    """

    def __init__(
        self,
        config: DetectionConfig,
        screen_width: int,
        screen_height: int,
    ):
        """
        Initialize pipeline.

        Args:
            config: Detection configuration
            screen_width: Screen width in pixels
            screen_height: Screen height in pixels
        """
        self._config = config
        self._estimator = EyePositionEstimator()
        self._calibration = CalibrationState()

        self._size_lock = threading.Lock()
        self._screen_width = screen_width
        self._screen_height = screen_height
        self._validate_size(screen_width, screen_height)

        # Marker starts at the screen center
        self._gaze_lock = threading.Lock()
        self._gaze_position = Point2D(screen_width / 2.0, screen_height / 2.0)

        logger.info(f"GazePipeline initialized for {screen_width}x{screen_height}")

    @staticmethod
    def _validate_size(width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid screen size: {width}x{height}")

    def process(self, contours: Optional[EyeContours]) -> FrameResult:
        """
        Process the detector output for one frame.

        Args:
            contours: Eye contours of the detected face, or None if no face

        Returns:
            FrameResult describing what happened this frame
        """
        if contours is None:
            return self._skipped(face_detected=False)

        anchor = self._estimator.estimate(contours)

        if anchor.is_degraded and not self._config.accept_degraded:
            logger.debug(f"Skipping degraded frame: {anchor.quality.value}")
            return self._skipped(face_detected=True, anchor=anchor)

        if self._calibration.latch(anchor.point):
            # Calibration frame publishes no gaze position
            snapshot = self._calibration.snapshot()
            return FrameResult(
                success=True,
                face_detected=True,
                phase=snapshot.phase,
                gaze_position=self.gaze_position,
                anchor=anchor,
                calibration_center=snapshot.center,
                center_offset=Point2D(0.0, 0.0),
            )

        width, height = self.screen_size
        position = map_to_screen(anchor.point, width, height)

        with self._gaze_lock:
            self._gaze_position = position

        return FrameResult(
            success=True,
            face_detected=True,
            phase=CalibrationPhase.CALIBRATED,
            gaze_position=position,
            gaze_updated=True,
            anchor=anchor,
            calibration_center=self._calibration.center,
            center_offset=self._calibration.offset_from_center(anchor.point),
        )

    def _skipped(
        self, face_detected: bool, anchor: Optional[EyeAnchor] = None
    ) -> FrameResult:
        snapshot = self._calibration.snapshot()
        return FrameResult(
            success=False,
            face_detected=face_detected,
            phase=snapshot.phase,
            gaze_position=self.gaze_position,
            anchor=anchor,
            calibration_center=snapshot.center,
        )

    def update_screen_size(self, width: int, height: int):
        """
        Update screen dimensions used for mapping.

        Args:
            width: New screen width
            height: New screen height
        """
        self._validate_size(width, height)
        with self._size_lock:
            self._screen_width = width
            self._screen_height = height

        logger.info(f"Screen size updated: {width}x{height}")

    @property
    def screen_size(self) -> Tuple[int, int]:
        with self._size_lock:
            return (self._screen_width, self._screen_height)

    @property
    def gaze_position(self) -> Point2D:
        """Latest published gaze position (screen pixels)."""
        with self._gaze_lock:
            return self._gaze_position

    @property
    def calibration(self) -> CalibrationSnapshot:
        return self._calibration.snapshot()

    @property
    def last_anchor(self) -> Optional[EyeAnchor]:
        return self._estimator.last_anchor
