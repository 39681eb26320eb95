"""
OpenCV webcam capture.

Frames are converted to RGB and handed straight to the detector; nothing is
written to disk.
"""

import sys
import time
from typing import Optional

import cv2

from eyes.core.config import CameraConfig
from eyes.vision.frames import CameraFrame, CameraError, CameraAccessError
from eyes.utils.logger import get_logger

logger = get_logger(__name__)


def _default_backend() -> int:
    """DirectShow on Windows opens webcams faster; elsewhere let OpenCV pick."""
    if sys.platform.startswith("win"):
        return cv2.CAP_DSHOW
    return cv2.CAP_ANY


class Camera:
    """
    Webcam capture producing RGB frames.

    A failed read returns None. Only the first failure of a run is logged as
    a warning.
    """

    def __init__(self, config: CameraConfig):
        """
        Initialize camera.

        Args:
            config: Camera configuration
        """
        self._config = config
        self._capture: Optional[cv2.VideoCapture] = None
        self._is_open = False
        self._frame_count = 0
        self._read_failures = 0

        logger.info(f"Initializing camera {config.camera_index}")

    def open(self) -> bool:
        """
        Open camera and configure capture settings.

        Returns:
            True if successful

        Raises:
            CameraAccessError: If the device cannot be opened
            CameraError: If configuring the opened device fails
        """
        if self._is_open:
            logger.warning("Camera already open")
            return True

        self._capture = cv2.VideoCapture(self._config.camera_index, _default_backend())

        if not self._capture.isOpened():
            self._capture.release()
            self._capture = None
            raise CameraAccessError(
                f"Failed to open camera {self._config.camera_index}. "
                "Check that a camera is connected, not used by another "
                "application, and that camera access is allowed."
            )

        try:
            self._capture.set(cv2.CAP_PROP_FRAME_WIDTH, self._config.frame_width)
            self._capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self._config.frame_height)
            self._capture.set(cv2.CAP_PROP_FPS, self._config.target_fps)

            # Skip first few frames which may be black/corrupted
            for _ in range(self._config.warmup_frames):
                self._capture.read()

            self._is_open = True
            self._frame_count = 0
            self._read_failures = 0

            actual_width = int(self._capture.get(cv2.CAP_PROP_FRAME_WIDTH))
            actual_height = int(self._capture.get(cv2.CAP_PROP_FRAME_HEIGHT))
            actual_fps = self._capture.get(cv2.CAP_PROP_FPS)

            logger.info(
                f"Camera opened: {actual_width}x{actual_height} @ {actual_fps:.1f}fps"
            )

            return True

        except cv2.error as e:
            self.close()
            error_msg = f"Camera initialization failed: {e}"
            logger.error(error_msg)
            raise CameraError(error_msg) from e

    def read_frame(self) -> Optional[CameraFrame]:
        """
        Read a frame from the camera.

        Returns:
            CameraFrame if successful, None if read failed

        Note:
            Returned frame is in RGB format (converted from BGR).
        """
        if not self._is_open or self._capture is None:
            logger.warning("Attempted to read from closed camera")
            return None

        ret, frame = self._capture.read()

        if not ret or frame is None:
            self._read_failures += 1
            # Warn once per run of failures, the worker keeps retrying
            if self._read_failures == 1:
                logger.warning("Failed to read frame from camera")
            else:
                logger.debug(f"Frame read failed ({self._read_failures} in a row)")
            return None

        if self._read_failures:
            logger.info(f"Camera recovered after {self._read_failures} failed reads")
            self._read_failures = 0

        frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

        self._frame_count += 1

        return CameraFrame(
            image=frame_rgb,
            timestamp=time.monotonic(),
            frame_number=self._frame_count,
        )

    def close(self):
        """
        Release camera resources.

        Safe to call multiple times.
        """
        if self._capture is not None:
            self._capture.release()
            self._capture = None

        if self._is_open:
            logger.info("Camera closed")
        self._is_open = False

    @property
    def is_open(self) -> bool:
        """Check if camera is open."""
        return self._is_open

    @property
    def frame_count(self) -> int:
        """Get number of frames read."""
        return self._frame_count

