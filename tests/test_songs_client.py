import pytest
import requests

import config
from songs_client import Song, SongsClient


class FakeResponse:
    def __init__(self, body, status_code=200):
        self.body = body
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        return self.body


@pytest.fixture
def client(monkeypatch):
    client = SongsClient(base_url="http://songs.local/", timeout=3)
    client.calls = []

    def respond_with(body, status_code=200):
        def fake_get(url, params=None, timeout=None):
            client.calls.append((url, params, timeout))
            return FakeResponse(body, status_code)
        monkeypatch.setattr(client.session, "get", fake_get)

    client.respond_with = respond_with
    return client


def test_get_songs_requests_mood(client):
    client.respond_with({"songs": [
        {"title": "Happy", "artist": "Pharrell Williams", "audio": "http://cdn/2.mp3"},
    ]})

    songs = client.get_songs("happy")

    assert songs == [Song(title="Happy", artist="Pharrell Williams", audio="http://cdn/2.mp3")]
    assert client.calls == [("http://songs.local/songs", {"mood": "happy"}, 3)]


def test_get_songs_fills_missing_fields(client):
    client.respond_with({"songs": [{"audio": "http://cdn/x.mp3"}]})
    assert client.get_songs("sad") == [Song(title="Unknown", artist="Unknown", audio="http://cdn/x.mp3")]


@pytest.mark.parametrize("body", [{}, {"songs": None}, {"songs": []}, []])
def test_get_songs_empty_responses(client, body):
    client.respond_with(body)
    assert client.get_songs("neutral") == []


def test_get_songs_raises_on_http_error(client):
    client.respond_with({"error": "boom"}, status_code=500)
    with pytest.raises(requests.HTTPError):
        client.get_songs("angry")


def test_default_base_url_comes_from_config(monkeypatch):
    monkeypatch.setattr(config, "API_BASE_URL", "http://backend:3000/")
    assert SongsClient().base_url == "http://backend:3000"


def test_song_round_trips_through_dict():
    song = Song(title="t", artist="a", audio="u")
    assert Song.from_dict(song.to_dict()) == song
