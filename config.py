"""Runtime settings for Moodify, read from the environment."""
import os
import secrets
import logging

import cv2
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

PROJECT_DIR = os.path.dirname(os.path.abspath(__file__))

# ---------------------------
# Models
# ---------------------------
MODEL_PATH = os.environ.get("MODEL_PATH") or os.path.join(PROJECT_DIR, "emotion_model.h5")
FACE_CASCADE_PATH = os.environ.get("FACE_CASCADE_PATH") or (
    cv2.data.haarcascades + "haarcascade_frontalface_default.xml"
)

# ---------------------------
# Songs backend
# ---------------------------
API_BASE_URL = os.environ.get("API_BASE_URL") or "http://localhost:3000"
SONGS_TIMEOUT = float(os.environ.get("SONGS_TIMEOUT", 15))

# ---------------------------
# Camera (local script only)
# ---------------------------
CAMERA_INDEX = int(os.environ.get("CAMERA_INDEX", 0))

# ---------------------------
# Flask
# ---------------------------
IS_PRODUCTION = os.environ.get("FLASK_ENV", "development") == "production"
SECRET_KEY = os.environ.get("FLASK_SECRET_KEY") or secrets.token_hex(32)
DEBUG = os.environ.get("FLASK_DEBUG", "false").lower() == "true"
PORT = int(os.environ.get("PORT", 5000))

if IS_PRODUCTION and not os.environ.get("FLASK_SECRET_KEY"):
    logger.warning("FLASK_SECRET_KEY not set! Using random key (sessions won't persist across restarts)")
