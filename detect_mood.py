"""
Standalone mood detection script for local testing with webcam.
Press SPACE to detect your mood and list recommended songs, q to quit.
"""
import logging
import sys

import cv2

import config
from expressions import ExpressionDetector, dominant_expression
from mood_session import MoodDetection, WEBCAM_ERROR
from songs_client import SongsClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

WINDOW_NAME = "Mood Detection"


def open_camera(index: int = None):
    """Open the webcam, using DirectShow on Windows."""
    index = config.CAMERA_INDEX if index is None else index
    if sys.platform.startswith("win"):
        return cv2.VideoCapture(index, cv2.CAP_DSHOW)
    return cv2.VideoCapture(index)


def annotate(frame, detections):
    for detection in detections:
        (x, y, w, h) = detection.box
        label = dominant_expression(detection.expressions)
        cv2.rectangle(frame, (x, y), (x+w, y+h), (255, 0, 0), 2)
        cv2.putText(frame, label, (x, y-10), cv2.FONT_HERSHEY_SIMPLEX,
                    0.9, (36, 255, 12), 2)
    return frame


def print_songs(songs):
    if not songs:
        print("No recommendations yet. Try detecting your mood!")
        return
    print("🎵 Recommended Songs")
    for i, song in enumerate(songs, start=1):
        print(f"{i:2d}. {song.title} - {song.artist}  {song.audio}")


def main():
    """Run webcam-based mood detection loop."""
    detector = ExpressionDetector()
    try:
        detector.load_models()
    except OSError as e:
        logger.error(f"Models could not be loaded: {e}")
        return 1
    state = MoodDetection(detector, SongsClient(), set_songs=print_songs)

    cap = open_camera()
    if not cap.isOpened():
        print(f"❌ {WEBCAM_ERROR}")
        return 1

    cv2.namedWindow(WINDOW_NAME, cv2.WINDOW_NORMAL)

    try:
        while True:
            ret, frame = cap.read()
            if not ret:
                print("❌ Failed to grab frame")
                break

            detections = detector.detect_all_faces(frame)
            cv2.imshow(WINDOW_NAME, annotate(frame.copy(), detections))

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            if key == ord(' '):
                mood = state.detect_mood(frame)
                if state.error:
                    print(f"❌ {state.error}")
                elif mood:
                    print(f"Detected mood: {mood}")
    finally:
        cap.release()
        cv2.destroyAllWindows()
    return 0


if __name__ == "__main__":
    sys.exit(main())
