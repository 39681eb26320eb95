"""
Camera frame type and camera errors.

Kept free of OpenCV so the pipeline and controller load without it.
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class CameraFrame:
    """Represents a captured camera frame with metadata."""

    image: np.ndarray  # RGB format (H, W, 3)
    timestamp: float
    frame_number: int


class CameraError(Exception):
    """Camera-related errors."""

    pass


class CameraAccessError(CameraError):
    """Camera could not be opened (missing, busy, or access refused)."""

    pass
