"""Moodify Flask application: webcam mood detection with song recommendations."""
import logging
import secrets
import threading
from collections import OrderedDict

from flask import Flask, request, render_template, jsonify, session

import config
from expressions import ExpressionDetector, decode_frame, mood_emoji, MOOD_EMOJIS, DEFAULT_EMOJI
from mood_session import MoodDetection, WEBCAM_ERROR
from playback import PlaybackState
from songs_client import SongsClient

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# ---------------------------
# App init
# ---------------------------
app = Flask(__name__, static_folder="static", template_folder="templates")
app.secret_key = config.SECRET_KEY
app.config["SESSION_COOKIE_SAMESITE"] = "Strict" if config.IS_PRODUCTION else "Lax"
app.config["SESSION_COOKIE_SECURE"] = config.IS_PRODUCTION

# Models are loaded on first use and shared by all requests
detector = ExpressionDetector()
songs_client = SongsClient()


# ---------------------------
# Playback state helpers
# ---------------------------
# Song lists stay server-side; the session cookie only carries the playlist id
PLAYLIST_LIMIT = 1000
_playlists = OrderedDict()
_playlists_lock = threading.Lock()


def load_playback() -> PlaybackState:
    playlist_id = session.get("playlist_id")
    with _playlists_lock:
        data = _playlists.get(playlist_id) if playlist_id else None
    return PlaybackState.from_dict(data)


def save_playback(playback: PlaybackState) -> None:
    playlist_id = session.get("playlist_id")
    if not playlist_id:
        playlist_id = secrets.token_hex(16)
        session["playlist_id"] = playlist_id
    with _playlists_lock:
        _playlists[playlist_id] = playback.to_dict()
        _playlists.move_to_end(playlist_id)
        while len(_playlists) > PLAYLIST_LIMIT:
            _playlists.popitem(last=False)


def playback_json(playback: PlaybackState):
    return jsonify(playback.to_dict())


# ---------------------------
# Routes
# ---------------------------
@app.route("/")
def index():
    return render_template(
        "index.html",
        mood_emojis=MOOD_EMOJIS,
        default_emoji=DEFAULT_EMOJI,
        webcam_error=WEBCAM_ERROR,
        playback=load_playback(),
    )


@app.route("/health")
def health():
    return jsonify({"status": "ok", "models_loaded": detector.is_loaded})


@app.route("/detect", methods=["POST"])
def detect():
    """Detect the mood in an uploaded webcam frame and fetch matching songs."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict) or not body.get("image"):
        return jsonify({"error": "No image provided"}), 400

    try:
        frame = decode_frame(body["image"])
    except ValueError as e:
        logger.warning(f"Rejected frame: {e}")
        return jsonify({"error": "Invalid image data"}), 400

    playback = load_playback()
    state = MoodDetection(detector, songs_client, set_songs=playback.replace)
    state.detect_mood(frame)
    save_playback(playback)

    mood = state.detected_mood
    return jsonify({
        "mood": mood,
        "emoji": mood_emoji(mood) if mood else None,
        "error": state.error,
        **playback.to_dict(),
    })


@app.route("/songs/state", methods=["GET"])
def songs_state():
    return playback_json(load_playback())


@app.route("/playback/toggle", methods=["POST"])
def playback_toggle():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({"error": "No index provided"}), 400
    playback = load_playback()
    try:
        playback.toggle(body.get("index"))
    except IndexError as e:
        return jsonify({"error": str(e)}), 400
    save_playback(playback)
    return playback_json(playback)


@app.route("/playback/ended", methods=["POST"])
def playback_ended():
    playback = load_playback()
    playback.ended()
    save_playback(playback)
    return playback_json(playback)


@app.errorhandler(500)
def internal_error(e):
    logger.error(f"Unhandled error: {e}")
    return jsonify({"error": "Internal server error"}), 500


# ---------------------------
# Run app
# ---------------------------
if __name__ == "__main__":
    try:
        detector.load_models()
    except OSError as e:
        logger.error(f"Models not loaded at startup: {e}")
    app.run(host="0.0.0.0", port=config.PORT, debug=config.DEBUG, use_reloader=config.DEBUG)
