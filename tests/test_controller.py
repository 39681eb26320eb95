"""
Tests for the controller with fake camera and detector.
"""

import numpy as np
import pytest

from eyes.core.config import AppConfig
from eyes.core.controller import Controller
from eyes.core.state import AppState
from eyes.vision.calibrator import CalibrationPhase
from eyes.vision.frames import CameraFrame, CameraAccessError, CameraError
from eyes.vision.landmarks import EyeContours, Point2D


class FakeCamera:
    """Camera stand-in yielding blank frames."""

    def __init__(self, open_error=None, frames=True):
        self._open_error = open_error
        self._frames = frames
        self.is_open = False
        self.frame_number = 0
        self.closed = 0

    def open(self):
        if self._open_error is not None:
            raise self._open_error
        self.is_open = True
        return True

    def read_frame(self):
        if not self._frames:
            return None
        self.frame_number += 1
        return CameraFrame(
            image=np.zeros((4, 4, 3), dtype=np.uint8),
            timestamp=float(self.frame_number),
            frame_number=self.frame_number,
        )

    def close(self):
        self.is_open = False
        self.closed += 1


class FakeTracker:
    """Detector stand-in returning scripted results, one per frame."""

    def __init__(self, results):
        self._results = list(results)
        self.closed = False

    def process_frame(self, frame):
        return self._results.pop(0) if self._results else None

    def close(self):
        self.closed = True


CONTOURS = EyeContours.from_points(
    [(0.40, 0.50), (0.42, 0.52)],
    [(0.60, 0.50), (0.62, 0.52)],
)


def make_controller(camera=None, tracker=None):
    controller = Controller(
        AppConfig(),
        1170,
        2532,
        camera=camera or FakeCamera(),
        face_tracker=tracker or FakeTracker([]),
    )
    assert controller.initialize()
    return controller


class TestController:
    """Tests for controller lifecycle and frame processing."""

    def test_start_and_stop(self):
        """Test start opens the camera and stop releases it."""
        camera = FakeCamera()
        controller = make_controller(camera=camera)

        assert controller.start()
        assert controller.state == AppState.RUNNING
        assert controller.camera_access_granted is True
        assert camera.is_open

        assert controller.stop()
        assert controller.state == AppState.IDLE
        assert not camera.is_open

    def test_start_requires_initialize(self):
        """Test start fails before initialize."""
        controller = Controller(
            AppConfig(), 100, 100, camera=FakeCamera(), face_tracker=FakeTracker([])
        )

        assert not controller.start()
        assert controller.state == AppState.IDLE

    def test_permission_denied(self):
        """Test refused camera access sets the flag and the error state."""
        camera = FakeCamera(open_error=CameraAccessError("denied"))
        controller = make_controller(camera=camera)

        assert not controller.start()
        assert controller.camera_access_granted is False
        assert controller.state == AppState.ERROR
        assert controller.error.error_type == "CameraAccessError"

    def test_camera_error(self):
        """Test other camera failures are not reported as permission denied."""
        camera = FakeCamera(open_error=CameraError("broken"))
        controller = make_controller(camera=camera)

        assert not controller.start()
        assert controller.camera_access_granted is None
        assert controller.error.error_type == "CameraError"

        assert controller.reset_error()
        assert controller.state == AppState.IDLE

    def test_process_frame_calibrates_then_tracks(self):
        """Test frames flow through detection and mapping."""
        tracker = FakeTracker([CONTOURS, CONTOURS])
        controller = make_controller(tracker=tracker)
        controller.start()

        first = controller.process_frame()
        second = controller.process_frame()

        assert first.phase is CalibrationPhase.CALIBRATED
        assert not first.gaze_updated
        assert first.frame_available
        assert second.gaze_updated
        assert second.gaze_position.x == pytest.approx(596.7)
        assert second.gaze_position.y == pytest.approx(1240.68)
        assert controller.calibration_phase is CalibrationPhase.CALIBRATED

    def test_process_frame_when_not_running(self):
        """Test no frames are read before start."""
        camera = FakeCamera()
        controller = make_controller(camera=camera)

        result = controller.process_frame()

        assert not result.success
        assert not result.frame_available
        assert camera.frame_number == 0
        assert result.gaze_position == Point2D(585.0, 1266.0)

    def test_failed_read_keeps_state(self):
        """Test a failed camera read changes nothing."""
        controller = make_controller(camera=FakeCamera(frames=False))
        controller.start()

        result = controller.process_frame()

        assert not result.success
        assert not result.frame_available
        assert controller.calibration_phase is CalibrationPhase.UNCALIBRATED

    def test_update_screen_size(self):
        """Test display size changes reach the mapping."""
        controller = make_controller(tracker=FakeTracker([CONTOURS, CONTOURS]))
        controller.start()
        controller.update_screen_size(1000, 2000)
        controller.update_screen_size(0, 0)  # Ignored

        controller.process_frame()
        result = controller.process_frame()

        assert result.gaze_position == pytest.approx(Point2D(510.0, 980.0))

    def test_shutdown_releases_components(self):
        """Test shutdown closes camera and detector."""
        camera = FakeCamera()
        tracker = FakeTracker([])
        controller = make_controller(camera=camera, tracker=tracker)
        controller.start()

        controller.shutdown()

        assert not camera.is_open
        assert tracker.closed
        assert controller.state == AppState.IDLE
