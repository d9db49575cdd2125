import base64

import numpy as np
import cv2
import pytest

from expressions import FaceDetection
from songs_client import Song


class FakeCascade:
    def __init__(self, faces=()):
        self.faces = np.array(faces, dtype=np.int32).reshape(-1, 4) if faces else ()
        self.calls = []

    def detectMultiScale(self, gray, scale_factor, min_neighbors):
        self.calls.append((gray.shape, scale_factor, min_neighbors))
        return self.faces


class FakeExpressionNet:
    def __init__(self, rows):
        self.rows = np.array(rows, dtype=np.float32)
        self.batches = []

    def predict(self, batch, verbose=0):
        self.batches.append(batch)
        return self.rows[:len(batch)]


class FakeDetector:
    is_loaded = True

    def __init__(self, detections=None, error=None):
        self.detections = detections or []
        self.error = error
        self.frames = []

    def detect_all_faces(self, frame):
        self.frames.append(frame)
        if self.error:
            raise self.error
        return self.detections


class FakeSongsClient:
    def __init__(self, songs=None, error=None):
        self.songs = songs or []
        self.error = error
        self.moods = []

    def get_songs(self, mood):
        self.moods.append(mood)
        if self.error:
            raise self.error
        return list(self.songs)


def scores(**values):
    labels = ["angry", "disgusted", "fearful", "happy", "sad", "surprised", "neutral"]
    return {label: values.get(label, 0.0) for label in labels}


@pytest.fixture
def frame():
    return np.full((120, 160, 3), 128, dtype=np.uint8)


@pytest.fixture
def frame_data_url(frame):
    ok, buf = cv2.imencode(".jpg", frame)
    assert ok
    return "data:image/jpeg;base64," + base64.b64encode(buf.tobytes()).decode("ascii")


@pytest.fixture
def happy_face():
    return FaceDetection(box=(10, 10, 50, 50), expressions=scores(happy=0.9, neutral=0.1))


@pytest.fixture
def songs():
    return [
        Song(title="Walking on Sunshine", artist="Katrina and the Waves", audio="http://cdn/1.mp3"),
        Song(title="Happy", artist="Pharrell Williams", audio="http://cdn/2.mp3"),
        Song(title="Good as Hell", artist="Lizzo", audio="http://cdn/3.mp3"),
    ]
