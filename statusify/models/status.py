"""Normalized status, dedupe key, engine state and decision actions."""
import hashlib
from dataclasses import dataclass
from typing import Optional, Union

from statusify.models.playback import Platform

PLAYING_MARKER = "playing"


@dataclass(frozen=True)
class StatusKey:
    """Dedupe key: playing marker plus a digest of the exact display text."""
    marker: str
    digest: str

    @classmethod
    def for_text(cls, text: str) -> "StatusKey":
        return cls(PLAYING_MARKER, hashlib.sha256(text.encode("utf-8")).hexdigest())

    def __str__(self) -> str:
        return f"{self.marker}|{self.digest[:12]}"


@dataclass(frozen=True)
class NormalizedStatus:
    display_text: str
    key: StatusKey
    platform: Optional[Platform] = None


@dataclass
class EngineState:
    """Last status this process applied to Slack.

    is_set_by_us False always comes with last_applied_key None and empty text.
    """
    last_applied_key: Optional[StatusKey] = None
    last_applied_text: str = ""
    last_applied_at_ms: int = 0
    is_set_by_us: bool = False


@dataclass(frozen=True)
class Apply:
    text: str
    key: StatusKey


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Skip:
    reason: str


Action = Union[Apply, Clear, Skip]
