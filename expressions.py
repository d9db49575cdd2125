"""Face detection and facial-expression scoring for single video frames."""
import os
import base64
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
import cv2
from tensorflow.keras.models import load_model

import config

logger = logging.getLogger(__name__)

# Output order of the expression network (FER2013 class order)
EXPRESSION_LABELS = ["angry", "disgusted", "fearful", "happy", "sad", "surprised", "neutral"]

FACE_SIZE = (48, 48)

MOOD_EMOJIS = {
    "happy": "😄",
    "sad": "😢",
    "angry": "😠",
    "surprised": "😲",
    "disgusted": "🤢",
    "fearful": "😨",
    "neutral": "😐",
}
DEFAULT_EMOJI = "🙂"

ExpressionScores = Dict[str, float]


@dataclass
class FaceDetection:
    box: Tuple[int, int, int, int]
    expressions: ExpressionScores = field(default_factory=dict)


def dominant_expression(scores: ExpressionScores) -> str:
    """Return the expression with the highest probability.

    Ties keep the first label seen; no positive score gives ``""``.
    """
    best_score = 0
    best_label = ""
    for label, score in scores.items():
        if score > best_score:
            best_score = score
            best_label = label
    return best_label


def mood_emoji(mood: Optional[str]) -> str:
    return MOOD_EMOJIS.get(mood, DEFAULT_EMOJI)


def decode_frame(data_url: str) -> np.ndarray:
    """Decode a base64 ``data:`` URL (or bare base64) into a BGR frame."""
    if not isinstance(data_url, str) or not data_url:
        raise ValueError("Image data must be a non-empty string")
    if data_url.startswith("data:"):
        _, sep, payload = data_url.partition(",")
        if not sep:
            raise ValueError("Data URL has no payload")
    else:
        payload = data_url
    try:
        img_data = base64.b64decode(payload, validate=True)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e
    arr = np.frombuffer(img_data, np.uint8)
    frame = cv2.imdecode(arr, cv2.IMREAD_COLOR) if arr.size else None
    if frame is None:
        raise ValueError("Image data could not be decoded")
    return frame


class ExpressionDetector:
    """Haar-cascade face detector paired with a Keras expression network.

    Models are loaded once, on the first call to :meth:`load_models` or
    :meth:`detect_all_faces`.
    """

    def __init__(self, model_path: str = None, cascade_path: str = None,
                 face_detector=None, expression_net=None):
        self.model_path = model_path or config.MODEL_PATH
        self.cascade_path = cascade_path or config.FACE_CASCADE_PATH
        self.face_detector = face_detector
        self.expression_net = expression_net
        self._load_lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self.face_detector is not None and self.expression_net is not None

    def load_models(self) -> None:
        with self._load_lock:
            if self.face_detector is None:
                cascade = cv2.CascadeClassifier(self.cascade_path)
                if cascade.empty():
                    raise IOError(f"Face detector could not be loaded from {self.cascade_path}")
                self.face_detector = cascade
                logger.info(f"Face detector loaded from {self.cascade_path}")
            if self.expression_net is None:
                if not os.path.exists(self.model_path):
                    raise FileNotFoundError(f"Model file not found at {self.model_path}.")
                self.expression_net = load_model(self.model_path)
                logger.info(f"Expression model loaded from {self.model_path}")

    def detect_all_faces(self, frame: np.ndarray) -> List[FaceDetection]:
        if not self.is_loaded:
            self.load_models()

        gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY) if frame.ndim == 3 else frame
        faces = self.face_detector.detectMultiScale(gray, 1.3, 5)
        if len(faces) == 0:
            return []

        boxes = [tuple(int(v) for v in face) for face in faces]
        crops = []
        for (x, y, w, h) in boxes:
            face = gray[y:y+h, x:x+w]
            crops.append(cv2.resize(face, FACE_SIZE).astype("float32") / 255.0)
        batch = np.expand_dims(np.stack(crops), axis=-1)

        predictions = self.expression_net.predict(batch, verbose=0)
        return [
            FaceDetection(box=box, expressions={
                label: float(score) for label, score in zip(EXPRESSION_LABELS, prediction)
            })
            for box, prediction in zip(boxes, predictions)
        ]
