"""
Tests for the gaze canvas, rendered offscreen.
"""

import pytest

pytest.importorskip("PyQt6")

from PyQt6.QtGui import QFontDatabase

from eyes.core.config import UIConfig
from eyes.core.pipeline import FrameResult
from eyes.gui.widgets import GazeCanvasWidget
from eyes.vision.calibrator import CalibrationPhase
from eyes.vision.landmarks import Point2D

GREEN = "#00ff00"
WHITE = "#ffffff"
BLACK = "#000000"


@pytest.fixture
def canvas(qapp):
    widget = GazeCanvasWidget(UIConfig())
    widget.resize(400, 300)
    yield widget
    widget.close()
    widget.deleteLater()


def pixel(widget, x, y):
    """Color name of one rendered pixel."""
    return widget.grab().toImage().pixelColor(x, y).name()


def make_result(phase, gaze=Point2D(200.0, 150.0), center=None):
    return FrameResult(
        success=True,
        face_detected=True,
        phase=phase,
        gaze_position=gaze,
        gaze_updated=phase is CalibrationPhase.CALIBRATED,
        calibration_center=center,
    )


class TestCalibrationPrompt:
    """Tests for the uncalibrated view."""

    def test_green_dot_before_first_result(self, canvas):
        assert pixel(canvas, 200, 150) == GREEN
        assert pixel(canvas, 10, 290) == BLACK

    def test_green_dot_while_uncalibrated(self, canvas):
        canvas.update_result(make_result(CalibrationPhase.UNCALIBRATED))

        assert pixel(canvas, 200, 150) == GREEN

    def test_readout_before_first_result(self, canvas):
        """Test the readout shows the canvas center before any frame."""
        assert canvas.readout_lines() == ["X: 200.00", "Y: 150.00"]


class TestGazeMarker:
    """Tests for the calibrated view."""

    @pytest.fixture
    def calibrated(self, canvas):
        canvas.update_result(
            make_result(
                CalibrationPhase.CALIBRATED,
                gaze=Point2D(80.0, 200.0),
                center=Point2D(0.51, 0.51),
            )
        )
        return canvas

    def test_marker_drawn_at_gaze_position(self, calibrated):
        assert pixel(calibrated, 80, 200) == WHITE
        # 50 px square, so 40 px away is outside it
        assert pixel(calibrated, 120, 200) == BLACK

    def test_prompt_hidden(self, calibrated):
        assert pixel(calibrated, 200, 150) != GREEN

    def test_readout_includes_center(self, calibrated):
        assert calibrated.readout_lines() == [
            "X: 80.00",
            "Y: 200.00",
            "Center X: 0.51",
            "Center Y: 0.51",
        ]


class TestPermissionDenied:
    """Tests for the camera-access message."""

    def test_replaces_prompt(self, canvas):
        canvas.set_permission_denied(True)

        assert pixel(canvas, 200, 150) != GREEN
        assert pixel(canvas, 195, 155) != GREEN

    def test_message_drawn_at_center_line(self, canvas):
        """Test the message text puts light pixels around the middle row."""
        if not QFontDatabase.families():
            pytest.skip("no fonts available to the offscreen platform")

        canvas.set_permission_denied(True)
        image = canvas.grab().toImage()

        lit = [
            (x, y)
            for y in range(144, 157)
            for x in range(100, 300)
            if image.pixelColor(x, y).name() != BLACK
        ]

        assert lit
        assert all(image.pixelColor(x, y).name() != GREEN for x, y in lit)

    def test_readout_still_shown(self, canvas):
        canvas.set_permission_denied(True)

        assert len(canvas.readout_lines()) == 2


class TestResize:
    """Tests for display size reporting."""

    def test_resize_emits_size(self, canvas, qapp):
        sizes = []
        canvas.resized.connect(lambda w, h: sizes.append((w, h)))

        canvas.show()
        canvas.resize(500, 400)
        qapp.processEvents()

        assert sizes
        assert sizes[-1] == (500, 400)
