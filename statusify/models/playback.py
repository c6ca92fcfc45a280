"""Playback events reported by the browser userscript."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PlaybackState(str, Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value) -> "PlaybackState":
        """Map any client-reported value onto the enum; anything unexpected is UNKNOWN."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.UNKNOWN


class Platform(str, Enum):
    YOUTUBE = "youtube"
    SPOTIFY = "spotify"
    SOUNDCLOUD = "soundcloud"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value) -> Optional["Platform"]:
        if value is None or value == "":
            return None
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.UNKNOWN


@dataclass
class PlaybackEvent:
    """One scrape tick from the userscript (raw, not yet cleaned)."""
    title: str
    artist: str
    state: PlaybackState
    platform: Optional[Platform] = None
