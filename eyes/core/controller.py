"""
Central controller orchestrating the gaze pipeline.

Manages application state and coordinates camera, detector and pipeline.
"""

from typing import Optional

from eyes.core.config import AppConfig
from eyes.core.state import StateMachine, AppState, ErrorInfo
from eyes.core.pipeline import GazePipeline, FrameResult
from eyes.vision.calibrator import CalibrationPhase
from eyes.vision.frames import CameraError, CameraAccessError
from eyes.vision.landmarks import Point2D
from eyes.utils.timing import Timer
from eyes.utils.logger import get_logger

logger = get_logger(__name__)


class Controller:
    """
    Central controller for Eyes.

    Pipeline per frame:
    camera -> face/eye landmarks -> eye anchor -> calibration / screen mapping

    Camera and face tracker can be injected; otherwise the OpenCV camera and
    MediaPipe tracker are created by initialize().
    """

    def __init__(
        self,
        config: AppConfig,
        screen_width: int,
        screen_height: int,
        camera=None,
        face_tracker=None,
    ):
        """
        Initialize controller.

        Args:
            config: Application configuration
            screen_width: Screen width in pixels
            screen_height: Screen height in pixels
            camera: Frame source with open/read_frame/close/is_open (optional)
            face_tracker: Detector with process_frame/close (optional)
        """
        self._config = config
        self._screen_width = screen_width
        self._screen_height = screen_height

        self._state_machine = StateMachine(initial_state=AppState.IDLE)

        self._camera = camera
        self._face_tracker = face_tracker
        self._pipeline: Optional[GazePipeline] = None

        # None until the camera has been tried
        self._camera_access_granted: Optional[bool] = None

        logger.info(f"Controller initialized for {screen_width}x{screen_height}")

    def initialize(self) -> bool:
        """
        Create any collaborators that were not injected.

        Returns:
            True if successful, False if a component failed to start
        """
        try:
            if self._camera is None:
                # Imported here so the pipeline runs without OpenCV installed
                from eyes.vision.camera import Camera

                self._camera = Camera(self._config.camera)

            if self._face_tracker is None:
                from eyes.vision.face_tracker import FaceTracker

                self._face_tracker = FaceTracker(self._config.detection)

            self._pipeline = GazePipeline(
                self._config.detection,
                self._screen_width,
                self._screen_height,
            )

            logger.info("All components initialized successfully")
            return True

        except Exception as e:
            error_msg = f"Initialization failed: {e}"
            logger.error(error_msg)
            self._state_machine.set_error(
                ErrorInfo(
                    error_type="InitializationError",
                    message=error_msg,
                    recoverable=False,
                )
            )
            return False

    def start(self) -> bool:
        """
        Open the camera and start processing frames.

        Returns:
            True if started, False if the camera is unavailable
        """
        if self._pipeline is None:
            logger.warning("Controller not initialized")
            return False

        if not self._state_machine.can_transition_to(AppState.RUNNING):
            logger.warning(f"Cannot start from state {self._state_machine.current_state}")
            return False

        try:
            if not self._camera.is_open:
                self._camera.open()

        except CameraAccessError as e:
            self._camera_access_granted = False
            logger.warning("Camera access not granted")
            self._state_machine.set_error(
                ErrorInfo(
                    error_type="CameraAccessError",
                    message=str(e),
                    recoverable=True,
                )
            )
            return False

        except CameraError as e:
            self._state_machine.set_error(
                ErrorInfo(
                    error_type="CameraError",
                    message=str(e),
                    recoverable=True,
                )
            )
            return False

        self._camera_access_granted = True
        self._state_machine.require_transition(AppState.RUNNING)
        logger.info("Tracking started")
        return True

    def stop(self) -> bool:
        """
        Stop processing and release the camera.

        Returns:
            True if stopped, False if not running
        """
        if self._state_machine.current_state != AppState.RUNNING:
            return False

        self._camera.close()
        self._state_machine.transition_to(AppState.IDLE)
        logger.info("Tracking stopped")
        return True

    def process_frame(self) -> FrameResult:
        """
        Process one frame of the pipeline.

        Returns:
            FrameResult with processing details

        Call this from the worker thread only.
        """
        if self._state_machine.current_state != AppState.RUNNING:
            return self._idle_result()

        frame = self._camera.read_frame()
        if frame is None:
            return self._idle_result()

        with Timer("detect") as timer:
            contours = self._face_tracker.process_frame(frame.image)
        logger.debug(f"Frame {frame.frame_number}: {timer}")

        return self._pipeline.process(contours)

    def _idle_result(self) -> FrameResult:
        center = None
        if self._pipeline is not None:
            center = self._pipeline.calibration.center

        return FrameResult(
            success=False,
            face_detected=False,
            phase=self.calibration_phase,
            gaze_position=self.gaze_position,
            calibration_center=center,
            frame_available=False,
        )

    def update_screen_size(self, width: int, height: int):
        """Update screen dimensions from the display."""
        if width <= 0 or height <= 0:
            logger.debug(f"Ignoring invalid screen size {width}x{height}")
            return

        self._screen_width = width
        self._screen_height = height

        if self._pipeline is not None:
            self._pipeline.update_screen_size(width, height)

    def reset_error(self) -> bool:
        """Leave ERROR state so start() can be tried again."""
        if self._state_machine.current_state != AppState.ERROR:
            return False
        return self._state_machine.transition_to(AppState.IDLE)

    def shutdown(self):
        """Clean shutdown of all components."""
        logger.info("Shutting down controller")

        if self._camera is not None and self._camera.is_open:
            self._camera.close()

        if self._face_tracker is not None:
            self._face_tracker.close()

        self._state_machine.reset()

    # Properties
    @property
    def state(self) -> AppState:
        """Get current application state."""
        return self._state_machine.current_state

    @property
    def error(self) -> Optional[ErrorInfo]:
        """Get error information if in ERROR state."""
        return self._state_machine.error

    @property
    def camera_access_granted(self) -> Optional[bool]:
        """False once opening the camera was refused, None before trying."""
        return self._camera_access_granted

    @property
    def calibration_phase(self) -> CalibrationPhase:
        if self._pipeline is None:
            return CalibrationPhase.UNCALIBRATED
        return self._pipeline.calibration.phase

    @property
    def gaze_position(self) -> Point2D:
        if self._pipeline is None:
            return Point2D(self._screen_width / 2.0, self._screen_height / 2.0)
        return self._pipeline.gaze_position
