"""
Eyes - Webcam gaze marker

Main entry point. Camera frames are processed in memory and nothing is
kept between launches.

Usage:
    python -m eyes.main
"""

import sys
from PyQt6.QtWidgets import QApplication

from eyes.core.config import get_default_config
from eyes.gui.app_window import MainWindow
from eyes.utils.logger import setup_logger, get_logger


def main():
    """Main entry point."""

    config = get_default_config()

    setup_logger(
        name="eyes",
        level=config.log_level,
        log_file=config.log_file,
    )

    # __name__ is "__main__" under python -m, outside the "eyes" logger
    logger = get_logger("eyes.main")
    logger.info("=" * 60)
    logger.info("Eyes Starting")
    logger.info(f"Version: {config.version}")
    logger.info("=" * 60)

    app = QApplication(sys.argv)
    app.setApplicationName("Eyes")
    app.setApplicationVersion(config.version)

    window = MainWindow(config)
    if config.ui.fullscreen:
        window.showFullScreen()
    else:
        window.show()

    window.start()

    logger.info("Application window created")

    exit_code = app.exec()

    logger.info("Application exiting")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
