"""
Main application window with worker thread architecture.

Threading model:
- Main thread: UI event loop (PyQt6), sole owner of rendering state
- Worker thread: camera capture, landmark detection and mapping
- Communication: immutable FrameResults sent through Qt signals
"""

import time
from typing import Optional

from PyQt6.QtWidgets import QApplication, QMainWindow, QMessageBox
from PyQt6.QtCore import QThread, pyqtSignal
from PyQt6.QtGui import QKeySequence, QShortcut

from eyes.core.controller import Controller
from eyes.core.config import AppConfig
from eyes.core.pipeline import FrameResult
from eyes.core.state import AppState
from eyes.gui.widgets import GazeCanvasWidget
from eyes.utils.logger import get_logger

logger = get_logger(__name__)


class ProcessingWorker(QThread):
    """
    Worker thread for camera processing.

    Processes one frame at a time; the blocking camera read paces the loop.
    When no frame is available it backs off instead of spinning.
    NEVER updates UI directly from this thread.
    """

    # Seconds to wait while idle or after a failed camera read
    IDLE_DELAY = 0.1

    frame_processed = pyqtSignal(FrameResult)
    error_occurred = pyqtSignal(str)

    def __init__(self, controller: Controller, parent=None):
        """
        Initialize worker.

        Args:
            controller: Controller instance
            parent: Parent QObject
        """
        super().__init__(parent)
        self._controller = controller
        self._running = False

    def run(self):
        """Worker thread main loop."""
        logger.info("Processing worker started")
        self._running = True

        try:
            while self._running:
                delay = self.process_once()
                if delay > 0:
                    time.sleep(delay)

        except Exception as e:
            logger.error(f"Worker thread error: {e}")
            self.error_occurred.emit(str(e))

        logger.info("Processing worker stopped")

    def process_once(self) -> float:
        """
        Process a single frame and emit the result.

        Returns:
            Seconds to wait before the next call (0 when a frame was read)
        """
        if self._controller.state != AppState.RUNNING:
            return self.IDLE_DELAY

        result = self._controller.process_frame()
        if not result.frame_available:
            return self.IDLE_DELAY

        self.frame_processed.emit(result)
        return 0.0

    def stop(self):
        """Stop the worker thread."""
        self._running = False


class MainWindow(QMainWindow):
    """
    Main application window: a black full-screen canvas.
    """

    def __init__(self, config: AppConfig):
        """
        Initialize main window.

        Args:
            config: Application configuration
        """
        super().__init__()

        self._config = config

        screen_geometry = QApplication.primaryScreen().geometry()
        self._screen_width = screen_geometry.width()
        self._screen_height = screen_geometry.height()

        logger.info(f"Screen size: {self._screen_width}x{self._screen_height}")

        self._controller = Controller(
            self._config,
            self._screen_width,
            self._screen_height,
        )
        self._worker: Optional[ProcessingWorker] = None

        self._init_ui()
        self._setup_keyboard_shortcuts()

    def _init_ui(self):
        """Initialize UI components."""
        self.setWindowTitle(self._config.ui.window_title)
        self.resize(*self._config.window_size)

        self._canvas = GazeCanvasWidget(self._config.ui)
        self._canvas.resized.connect(self._controller.update_screen_size)
        self.setCentralWidget(self._canvas)

    def _setup_keyboard_shortcuts(self):
        """Esc closes the application."""
        self._quit_shortcut = QShortcut(QKeySequence("Esc"), self)
        self._quit_shortcut.activated.connect(self.close)

    def start(self) -> bool:
        """
        Initialize the controller, open the camera and start the worker.

        Returns:
            True if frames are being processed
        """
        if not self._controller.initialize():
            error = self._controller.error
            QMessageBox.critical(
                self,
                "Initialization Error",
                error.message if error else "Failed to initialize Eyes.",
            )
            return False

        if not self._controller.start():
            if self._controller.camera_access_granted is False:
                # Shown on the canvas instead of a dialog
                self._canvas.set_permission_denied(True)
            else:
                error = self._controller.error
                QMessageBox.critical(
                    self,
                    "Camera Error",
                    error.message if error else "Failed to start the camera.",
                )
            return False

        self._start_worker()
        return True

    def _start_worker(self):
        """Start processing worker thread."""
        self._worker = ProcessingWorker(self._controller)
        self._worker.frame_processed.connect(self._on_frame_processed)
        self._worker.error_occurred.connect(self._on_worker_error)
        self._worker.start()

        logger.info("Worker thread started")

    def _on_frame_processed(self, result: FrameResult):
        """
        Handle frame processing result from worker.

        Called in main thread via signal.
        """
        self._canvas.update_result(result)

    def _on_worker_error(self, error_msg: str):
        """Handle worker thread error."""
        logger.error(f"Worker error: {error_msg}")
        QMessageBox.critical(
            self,
            "Processing Error",
            f"An error occurred during processing:\n{error_msg}\n\n"
            "Please check that the camera is connected and accessible.",
        )

    def closeEvent(self, event):
        """Handle window close event."""
        logger.info("Application closing")

        if self._worker:
            self._worker.stop()
            self._worker.wait(5000)

        self._controller.shutdown()

        event.accept()
