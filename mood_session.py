"""State behind the "Detect Mood" view: loading flag, detected mood, error."""
import logging
from typing import Callable, List, Optional

from expressions import ExpressionDetector, dominant_expression
from songs_client import Song, SongsClient

logger = logging.getLogger(__name__)

WEBCAM_ERROR = "Unable to access webcam."
NO_FACE_ERROR = "No face detected. Please ensure your face is visible."
DETECTION_ERROR = "An error occurred during mood detection."


class MoodDetection:
    def __init__(self, detector: ExpressionDetector, client: SongsClient,
                 set_songs: Optional[Callable[[List[Song]], None]] = None):
        self.detector = detector
        self.client = client
        self.set_songs = set_songs or (lambda songs: None)
        self.loading = False
        self.detected_mood = None
        self.error = None

    def detect_mood(self, frame) -> Optional[str]:
        """Classify one frame, fetch songs for its mood and hand them to ``set_songs``.

        Returns the detected mood, or ``None`` when ``error`` was set.
        """
        self.loading = True
        self.error = None
        self.detected_mood = None
        try:
            detections = self.detector.detect_all_faces(frame)
            if not detections:
                self.error = NO_FACE_ERROR
                return None

            mood = dominant_expression(detections[0].expressions)
            self.detected_mood = mood
            logger.info(f"Detected mood: {mood}")

            self.set_songs(self.client.get_songs(mood))
            return mood
        except Exception as e:
            self.error = DETECTION_ERROR
            logger.error(f"Mood detection error: {e}")
            return None
        finally:
            self.loading = False
