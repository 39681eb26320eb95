"""
Eye landmark detection using MediaPipe Face Mesh.

Only the two eye contours of the first face are kept; everything else the
mesh returns is dropped after each frame.
"""

from typing import Optional

import numpy as np
import mediapipe as mp

from eyes.core.config import DetectionConfig
from eyes.vision.landmarks import EyeContours, contours_from_landmarks
from eyes.utils.logger import get_logger

logger = get_logger(__name__)


class FaceTracker:
    """
    Face and eye contour detection using MediaPipe Face Mesh.

    Runs in video mode, so consecutive frames reuse the tracked face.
    """

    def __init__(self, config: DetectionConfig):
        """
        Initialize face tracker.

        Args:
            config: Detection configuration
        """
        self._config = config

        # Eye contours are part of the base mesh, iris refinement is not needed
        self._face_mesh = mp.solutions.face_mesh.FaceMesh(
            static_image_mode=False,
            max_num_faces=config.max_num_faces,
            refine_landmarks=False,
            min_detection_confidence=config.min_detection_confidence,
            min_tracking_confidence=config.min_tracking_confidence,
        )

        logger.info("FaceTracker initialized with MediaPipe Face Mesh")

    def process_frame(self, frame: np.ndarray) -> Optional[EyeContours]:
        """
        Detect the first face in a frame and extract its eye contours.

        Args:
            frame: RGB image (H, W, 3) as numpy array

        Returns:
            EyeContours if a face was found, None otherwise
        """
        if frame is None or frame.size == 0:
            return None

        if self._face_mesh is None:
            logger.warning("Attempted to process frame with closed FaceTracker")
            return None

        try:
            results = self._face_mesh.process(frame)
        except Exception as e:
            # Detector failure counts as "no face" for this frame
            logger.debug(f"Error processing frame: {e}")
            return None

        if not results.multi_face_landmarks:
            return None

        face_landmarks = results.multi_face_landmarks[0]
        landmarks = np.array(
            [[lm.x, lm.y] for lm in face_landmarks.landmark],
            dtype=np.float64,
        )

        return contours_from_landmarks(landmarks)

    def close(self):
        """Release MediaPipe resources."""
        if self._face_mesh is not None:
            self._face_mesh.close()
            self._face_mesh = None
            logger.info("FaceTracker closed")
