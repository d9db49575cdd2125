"""Single-track play/pause state over the recommended song list."""
from typing import List, Optional

from songs_client import Song


class PlaybackState:
    """At most one song of ``songs`` is playing at a time.

    ``playing`` is either ``None`` or a valid index into ``songs``.
    """

    def __init__(self, songs: Optional[List[Song]] = None, playing: Optional[int] = None):
        self.songs = list(songs or [])
        self.playing = None
        if playing is not None:
            self._check_index(playing)
            self.playing = playing

    def _check_index(self, index: int) -> None:
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self.songs):
            raise IndexError(f"No song at index {index!r}")

    def toggle(self, index: int) -> Optional[int]:
        self._check_index(index)
        self.playing = None if self.playing == index else index
        return self.playing

    def ended(self) -> None:
        self.playing = None

    def replace(self, songs: List[Song]) -> None:
        self.songs = list(songs)
        self.playing = None

    def is_playing(self, index: int) -> bool:
        return self.playing == index

    @property
    def current(self) -> Optional[Song]:
        return self.songs[self.playing] if self.playing is not None else None

    def to_dict(self) -> dict:
        return {"songs": [s.to_dict() for s in self.songs], "playing": self.playing}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "PlaybackState":
        data = data or {}
        songs = [Song.from_dict(s) for s in data.get("songs", [])]
        playing = data.get("playing")
        if not isinstance(playing, int) or not 0 <= playing < len(songs):
            playing = None
        return cls(songs, playing)
