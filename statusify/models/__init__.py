"""Data models for playback events, statuses and engine state."""
from statusify.models.playback import PlaybackEvent, PlaybackState, Platform
from statusify.models.status import (
    Action,
    Apply,
    Clear,
    EngineState,
    NormalizedStatus,
    Skip,
    StatusKey,
)

__all__ = [
    "Action",
    "Apply",
    "Clear",
    "EngineState",
    "NormalizedStatus",
    "PlaybackEvent",
    "PlaybackState",
    "Platform",
    "Skip",
    "StatusKey",
]
