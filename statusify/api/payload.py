"""Lenient request bodies: the userscript may send JSON or text/plain."""
import json
import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from statusify.models.playback import PlaybackEvent, PlaybackState, Platform

logger = logging.getLogger(__name__)


def parse_body(raw: bytes, text_field: Optional[str] = None) -> dict:
    """Decode a JSON object body.

    A body that is not a JSON object is malformed and yields {}, unless text_field
    is given, in which case the raw text becomes that field (plain-text /set).
    """
    if not raw:
        return {}
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Malformed body (not UTF-8)")
        return {}
    try:
        data = json.loads(text)
    except ValueError:
        if text_field:
            return {text_field: text}
        logger.debug("Malformed body (not JSON): %.80r", text)
        return {}
    if isinstance(data, dict):
        return data
    if text_field and isinstance(data, str):
        return {text_field: data}
    return {}


def _as_text(value) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


class NowPlayingBody(BaseModel):
    """Track metadata as scraped by the userscript."""
    model_config = ConfigDict(extra="ignore")

    title: str = ""
    artist: str = ""
    state: PlaybackState = PlaybackState.UNKNOWN
    platform: Optional[Platform] = None
    token: Optional[str] = None

    @field_validator("title", "artist", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return _as_text(v)

    @field_validator("state", mode="before")
    @classmethod
    def _coerce_state(cls, v):
        return PlaybackState.parse(v)

    @field_validator("platform", mode="before")
    @classmethod
    def _coerce_platform(cls, v):
        return Platform.parse(v)

    @field_validator("token", mode="before")
    @classmethod
    def _coerce_token(cls, v):
        return v if isinstance(v, str) else None

    @classmethod
    def from_payload(cls, data: dict) -> Optional["NowPlayingBody"]:
        if not data:
            return None
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            logger.debug("Malformed now-playing payload: %s", e)
            return None

    def to_event(self) -> PlaybackEvent:
        return PlaybackEvent(
            title=self.title,
            artist=self.artist,
            state=self.state,
            platform=self.platform,
        )


class SetStatusBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str = ""
    token: Optional[str] = None

    @field_validator("text", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return _as_text(v)

    @field_validator("token", mode="before")
    @classmethod
    def _coerce_token(cls, v):
        return v if isinstance(v, str) else None
