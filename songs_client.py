"""Client for the songs backend: ``GET /songs?mood=<mood>``."""
from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from typing import List, Optional

import requests

import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Song:
    title: str
    artist: str
    audio: str

    @classmethod
    def from_dict(cls, data: dict) -> "Song":
        return cls(
            title=data.get("title") or "Unknown",
            artist=data.get("artist") or "Unknown",
            audio=data.get("audio") or "",
        )

    def to_dict(self) -> dict:
        return asdict(self)


class SongsClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.SONGS_TIMEOUT
        self.session = requests.Session()

    def get_songs(self, mood: str) -> List[Song]:
        # GET <API_BASE_URL>/songs?mood=happy
        r = self.session.get(f"{self.base_url}/songs", params={"mood": mood}, timeout=self.timeout)
        r.raise_for_status()
        body = r.json()
        songs = body.get("songs") if isinstance(body, dict) else None
        if not songs:
            logger.info(f"No songs returned for mood '{mood}'")
            return []
        return [Song.from_dict(s) for s in songs if isinstance(s, dict)]
