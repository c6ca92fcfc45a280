"""Clean scraped track text and render it into a status string."""
import re
from string import Template
from typing import Optional

from statusify.models.playback import PlaybackEvent, PlaybackState
from statusify.models.status import NormalizedStatus, StatusKey

UNKNOWN_TRACK = "Unknown Track"
UNKNOWN_ARTIST = "Unknown Artist"
ELLIPSIS = "..."

_ZERO_WIDTH = re.compile("[\u200b-\u200d\u2060\ufeff]")
_WHITESPACE = re.compile(r"\s+")
# SoundCloud prefixes its player title with one of these labels
_LABELS = re.compile(r"^\s*(current\s*track|now\s*playing)\s*:\s*", re.IGNORECASE)
# Applied in order after whitespace has been collapsed
_DECORATIONS = (
    re.compile(r"\s+•\s+.*$"),
    re.compile(r"\s+[\d.,]+\s*[KMB]?\s+views?$", re.IGNORECASE),
    re.compile(r"\s+-\s+YouTube Music$", re.IGNORECASE),
    re.compile(r"^YouTube Music\s+", re.IGNORECASE),
    re.compile(r"(?:^|\s+)By:\s*.*$", re.IGNORECASE),
    re.compile(r"\s+on SoundCloud$", re.IGNORECASE),
)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max(0, max_len - len(ELLIPSIS))] + ELLIPSIS


def collapse_doubled(text: str) -> str:
    """Return one half of a string that is two identical halves ("Song Song" -> "Song")."""
    t = text.strip()
    n = len(t)
    if n < 6:
        return t
    half = n // 2
    if n % 2 == 0 and t[:half] == t[half:]:
        return t[:half].strip()
    if n % 2 == 1 and t[half].isspace() and t[:half] == t[half + 1:]:
        return t[:half].strip()
    return t


def sanitize(text, max_len: int) -> str:
    """Whitespace and invisible-character cleanup only (manual status text)."""
    if not text:
        return ""
    return truncate(collapse_whitespace(_ZERO_WIDTH.sub("", str(text))), max_len)


def clean_text(text, max_len: int) -> str:
    """Strip invisible characters and platform decorations from a scraped title or artist."""
    if not text:
        return ""
    result = _ZERO_WIDTH.sub("", str(text))
    result = _LABELS.sub("", result)
    result = collapse_whitespace(result)
    for pattern in _DECORATIONS:
        result = pattern.sub("", result)
    result = collapse_doubled(result.strip())
    return truncate(result, max_len)


def render(template: str, title: str, artist: str) -> str:
    return Template(template).safe_substitute(
        title=title or UNKNOWN_TRACK,
        artist=artist or UNKNOWN_ARTIST,
    )


def normalize(
    event: Optional[PlaybackEvent], template: str, max_len: int
) -> Optional[NormalizedStatus]:
    """Build the status for a playing event, or None when nothing should be shown."""
    if event is None or event.state is not PlaybackState.PLAYING:
        return None
    title = clean_text(event.title, max_len)
    if not title:
        return None
    artist = clean_text(event.artist, max_len)
    text = truncate(collapse_whitespace(render(template, title, artist)), max_len)
    if not text:
        # blank template still shows the track
        text = title
    return NormalizedStatus(display_text=text, key=StatusKey.for_text(text), platform=event.platform)
