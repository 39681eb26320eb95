"""
Configuration management for Eyes.

All application configuration with sensible defaults.
Uses dataclasses for type safety and validation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple
import os


@dataclass
class CameraConfig:
    """Camera capture configuration."""

    camera_index: int = 0  # Default (front) camera
    frame_width: int = 1280  # Closest webcam match for a "high" preset
    frame_height: int = 720
    target_fps: int = 30
    warmup_frames: int = 5  # Frames to skip after camera init


@dataclass
class DetectionConfig:
    """Face landmark detection configuration."""

    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    # Single face is all the mapping uses
    max_num_faces: int = 1

    # Process frames where one or both eye contours are missing
    # (the missing eye is replaced by the neutral point)
    accept_degraded: bool = True


@dataclass
class UIConfig:
    """User interface configuration."""

    window_title: str = "Eyes"
    fullscreen: bool = True

    # Windowed size when fullscreen is off
    window_width: int = 1024
    window_height: int = 768

    background_color: str = "#000000"

    # Center dot shown while waiting for the calibration frame
    calibration_dot_size: int = 20
    calibration_dot_color: str = "#00ff00"
    calibration_prompt: str = "Please look at the center of the screen"
    calibration_prompt_offset: int = 30  # Pixels above the dot

    # Square drawn at the gaze position
    marker_size: int = 50
    marker_color: str = "#ffffff"

    text_color: str = "#ffffff"
    hud_top: int = 30  # Vertical position of the coordinate readout

    permission_denied_text: str = "Camera access not granted"


@dataclass
class AppConfig:
    """Main application configuration."""

    camera: CameraConfig = field(default_factory=CameraConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    # Application version
    version: str = "0.1.0"

    # Log level from environment or default to WARNING
    log_level: str = field(
        default_factory=lambda: os.getenv("EYES_LOG_LEVEL", "WARNING")
    )

    # File logging is off unless a path is given
    log_file: Optional[Path] = field(
        default_factory=lambda: _path_from_env("EYES_LOG_FILE")
    )

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """Validate configuration parameters."""
        for name in ("min_detection_confidence", "min_tracking_confidence"):
            value = getattr(self.detection, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0.0 and 1.0")

        if self.detection.max_num_faces < 1:
            raise ValueError("max_num_faces must be at least 1")

        if self.camera.camera_index < 0:
            raise ValueError("camera_index must be non-negative")

        if self.camera.target_fps < 1 or self.camera.target_fps > 60:
            raise ValueError("target_fps must be between 1 and 60")

        if self.camera.frame_width <= 0 or self.camera.frame_height <= 0:
            raise ValueError("frame size must be positive")

        if self.ui.marker_size <= 0 or self.ui.calibration_dot_size <= 0:
            raise ValueError("marker sizes must be positive")

    @property
    def window_size(self) -> Tuple[int, int]:
        """Windowed-mode size as (width, height)."""
        return (self.ui.window_width, self.ui.window_height)


def _path_from_env(name: str) -> Optional[Path]:
    value = os.getenv(name)
    return Path(value).expanduser() if value else None


def get_default_config() -> AppConfig:
    """
    Get default application configuration.

    Returns:
        AppConfig instance with default values
    """
    return AppConfig()
