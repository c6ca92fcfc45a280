"""Serialized decide + Slack call + state update, with counters for /health."""
import logging
import threading
import time
from dataclasses import asdict, dataclass
from typing import Callable, Optional

from statusify.config import Settings
from statusify.core.decision import decide, record_success, reset
from statusify.core.normalizer import normalize, sanitize
from statusify.core.slack_client import SlackClient, SlackError
from statusify.models.playback import PlaybackEvent
from statusify.models.status import Action, Apply, Clear, EngineState, Skip, StatusKey

logger = logging.getLogger(__name__)

SKIP_BUSY = "busy"


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class EngineCounters:
    updates_applied: int = 0
    clears_applied: int = 0
    manual_updates: int = 0
    errors: int = 0
    skipped: int = 0
    last_update_at_ms: int = 0


@dataclass
class EngineResult:
    action: Action
    ok: bool
    text: str = ""
    error: Optional[str] = None


class StatusEngine:
    """Owns one EngineState and is the only thing that mutates it.

    Only one Slack call is in flight at a time. Playback events that arrive while
    one is pending are dropped; the next scrape tick re-evaluates.
    """

    def __init__(
        self,
        client: SlackClient,
        settings: Settings,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.client = client
        self.settings = settings
        self.state = EngineState()
        self.counters = EngineCounters()
        self._clock = clock or _now_ms
        # Held for the whole decide + Slack call + update
        self._lock = threading.Lock()
        # Short writes to state/counters; lets snapshot() read while a call is in flight
        self._stats_lock = threading.Lock()

    def _count(self, name: str, now: Optional[int] = None) -> None:
        with self._stats_lock:
            setattr(self.counters, name, getattr(self.counters, name) + 1)
            if now is not None:
                self.counters.last_update_at_ms = now

    def handle_event(self, event: Optional[PlaybackEvent]) -> EngineResult:
        if not self._lock.acquire(blocking=False):
            self._count("skipped")
            logger.debug("Event dropped: Slack call in flight")
            return EngineResult(Skip(SKIP_BUSY), ok=True)
        try:
            return self._handle_locked(event)
        finally:
            self._lock.release()

    def _handle_locked(self, event: Optional[PlaybackEvent]) -> EngineResult:
        now = self._clock()
        settings = self.settings
        normalized = normalize(event, settings.template, settings.max_length)
        action = decide(normalized, now, self.state, settings.min_interval_ms)
        text = normalized.display_text if normalized else ""

        if isinstance(action, Skip):
            self._count("skipped")
            logger.debug("Skip (%s): %r", action.reason, text)
            return EngineResult(action, ok=True, text=text)

        try:
            if isinstance(action, Apply):
                logger.info("Updating Slack status -> %s", action.text)
                self.client.set_status(action.text, self.client.emoji_for(normalized.platform))
            else:
                logger.info("Clearing Slack status (not playing)")
                self.client.clear_status()
        except SlackError as e:
            self._count("errors")
            logger.warning("Slack call failed, state unchanged: %s", e)
            return EngineResult(action, ok=False, text=text, error=str(e))

        with self._stats_lock:
            record_success(self.state, action, now)
        self._count("updates_applied" if isinstance(action, Apply) else "clears_applied", now)
        return EngineResult(action, ok=True, text=text)

    def set_manual(self, text, expiration: int = 0) -> EngineResult:
        """Set arbitrary text (empty clears). Waits for any in-flight call.

        Afterwards the engine is idle: a manual status is not ours to clear.
        """
        with self._lock:
            now = self._clock()
            text = sanitize(text, self.settings.max_length)
            action: Action = Apply(text, StatusKey.for_text(text)) if text else Clear()
            try:
                self.client.set_status(text, self.client.emoji_for(None), expiration)
            except SlackError as e:
                self._count("errors")
                logger.warning("Manual Slack status failed: %s", e)
                return EngineResult(action, ok=False, text=text, error=str(e))
            logger.info("Manual Slack status -> %r", text)
            with self._stats_lock:
                reset(self.state, now)
            self._count("manual_updates", now)
            return EngineResult(action, ok=True, text=text)

    def update_settings(
        self,
        *,
        template: Optional[str] = None,
        min_update_seconds: Optional[float] = None,
        max_length: Optional[int] = None,
        emojis: Optional[dict] = None,
    ) -> Settings:
        """Change runtime settings between decisions."""
        with self._lock:
            if template is not None:
                self.settings.template = template
            if min_update_seconds is not None:
                self.settings.min_update_seconds = min_update_seconds
            if max_length is not None:
                self.settings.max_length = max_length
            if emojis:
                # client.emojis is the same dict
                self.settings.emojis.update(emojis)
            logger.info(
                "Settings updated: template=%r min_update_seconds=%s max_length=%s",
                self.settings.template,
                self.settings.min_update_seconds,
                self.settings.max_length,
            )
            return self.settings

    def current_text(self) -> Optional[str]:
        with self._stats_lock:
            if self.state.is_set_by_us and self.state.last_applied_key is not None:
                return self.state.last_applied_text
            return None

    def snapshot(self) -> dict:
        """Consistent copy of state and counters; does not wait for an in-flight Slack call."""
        with self._stats_lock:
            state = self.state
            return {
                "last_key": str(state.last_applied_key) if state.last_applied_key else "",
                "last_text": state.last_applied_text,
                "last_sent_at": state.last_applied_at_ms,
                "currently_set_by_us": state.is_set_by_us,
                "counters": asdict(self.counters),
            }
