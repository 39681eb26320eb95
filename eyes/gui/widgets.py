"""
Custom GUI widgets for Eyes.
"""

from typing import List, Optional

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, QRectF, pyqtSignal
from PyQt6.QtGui import QPainter, QColor

from eyes.core.config import UIConfig
from eyes.core.pipeline import FrameResult
from eyes.vision.landmarks import Point2D


class GazeCanvasWidget(QWidget):
    """
    Full-window canvas showing the calibration prompt or the gaze marker.

    Only ever updated from the UI thread, through update_result().
    """

    # Emitted with the new (width, height) whenever the canvas is resized
    resized = pyqtSignal(int, int)

    def __init__(self, config: UIConfig, parent=None):
        """
        Initialize canvas.

        Args:
            config: UI configuration
            parent: Parent widget
        """
        super().__init__(parent)

        self._config = config
        self._result: Optional[FrameResult] = None
        self._permission_denied = False

        self.setAutoFillBackground(False)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    def update_result(self, result: FrameResult):
        """Show the latest frame result."""
        self._result = result
        self.update()

    def set_permission_denied(self, denied: bool):
        """Show or hide the camera-access message."""
        self._permission_denied = denied
        self.update()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.resized.emit(self.width(), self.height())

    def paintEvent(self, event):
        """Paint background, marker and coordinate readout."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(self._config.background_color))

        mid_x = self.width() / 2.0
        mid_y = self.height() / 2.0

        if self._permission_denied:
            self._draw_centered_text(painter, self._config.permission_denied_text, mid_y)
        elif self._result is None or not self._result.is_calibrated:
            self._draw_calibration_prompt(painter, mid_x, mid_y)
        else:
            self._draw_marker(painter)

        self._draw_readout(painter)

    def _draw_calibration_prompt(self, painter: QPainter, mid_x: float, mid_y: float):
        size = self._config.calibration_dot_size
        color = QColor(self._config.calibration_dot_color)

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(color)
        painter.drawEllipse(QRectF(mid_x - size / 2.0, mid_y - size / 2.0, size, size))

        self._draw_centered_text(
            painter,
            self._config.calibration_prompt,
            mid_y - self._config.calibration_prompt_offset,
        )

    def _draw_marker(self, painter: QPainter):
        size = self._config.marker_size
        position = self._result.gaze_position

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(self._config.marker_color))
        painter.drawRect(
            QRectF(position.x - size / 2.0, position.y - size / 2.0, size, size)
        )

    def readout_lines(self) -> List[str]:
        """
        Text lines of the coordinate readout.

        Before the first result the marker position is the canvas center.
        """
        if self._result is None:
            position = Point2D(self.width() / 2.0, self.height() / 2.0)
        else:
            position = self._result.gaze_position

        lines = [f"X: {position.x:.2f}", f"Y: {position.y:.2f}"]

        if self._result is not None and self._result.is_calibrated:
            center = self._result.calibration_center
            if center is not None:
                lines.append(f"Center X: {center.x:.2f}")
                lines.append(f"Center Y: {center.y:.2f}")

        return lines

    def _draw_readout(self, painter: QPainter):
        lines = self.readout_lines()
        line_height = painter.fontMetrics().height()
        top = self._config.hud_top - line_height * len(lines) / 2.0

        for i, line in enumerate(lines):
            self._draw_centered_text(
                painter, line, max(0.0, top) + line_height * (i + 0.5)
            )

    def _draw_centered_text(self, painter: QPainter, text: str, y: float):
        """Draw one line of text horizontally centered on the canvas at height y."""
        painter.setPen(QColor(self._config.text_color))

        height = painter.fontMetrics().height()
        painter.drawText(
            QRectF(0.0, y - height / 2.0, self.width(), height),
            Qt.AlignmentFlag.AlignCenter,
            text,
        )
