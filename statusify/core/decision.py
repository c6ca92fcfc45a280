"""Throttle/dedupe decision: apply, clear or skip for each playback event."""
from typing import Optional

from statusify.models.status import Action, Apply, Clear, EngineState, NormalizedStatus, Skip

SKIP_NOT_OURS = "throttled-or-not-ours"
SKIP_DEDUPE = "dedupe-throttle"


def decide(
    normalized: Optional[NormalizedStatus],
    now_ms: int,
    state: EngineState,
    min_interval_ms: int,
) -> Action:
    """Pick the next action against the last applied state. Does not mutate state.

    A missing status (not playing, paused, malformed) only clears a status we set
    ourselves, and only once the interval has passed, so short pauses do not flicker.
    Identical text inside the interval is skipped; after it, the same text is applied
    again and refreshes the timestamp.
    """
    elapsed = now_ms - state.last_applied_at_ms
    if normalized is None:
        if state.is_set_by_us and elapsed > min_interval_ms:
            return Clear()
        return Skip(SKIP_NOT_OURS)
    if normalized.key == state.last_applied_key and elapsed < min_interval_ms:
        return Skip(SKIP_DEDUPE)
    return Apply(text=normalized.display_text, key=normalized.key)


def record_success(state: EngineState, action: Action, now_ms: int) -> None:
    """Update state after Slack accepted the call. Never call this on failure."""
    if isinstance(action, Apply):
        state.is_set_by_us = True
        state.last_applied_key = action.key
        state.last_applied_text = action.text
        state.last_applied_at_ms = now_ms
    elif isinstance(action, Clear):
        reset(state, now_ms)


def reset(state: EngineState, now_ms: int) -> None:
    """Back to idle: nothing on Slack is ours."""
    state.is_set_by_us = False
    state.last_applied_key = None
    state.last_applied_text = ""
    state.last_applied_at_ms = now_ms
