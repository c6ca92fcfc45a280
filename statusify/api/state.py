"""Shared application state (injected into routes)."""
from typing import Callable

from statusify.config import SLACK_API_BASE, SLACK_TIMEOUT_SECONDS, Settings, load_settings
from statusify.core.slack_client import SlackClient
from statusify.core.status_engine import StatusEngine


class AppState:
    def __init__(
        self,
        settings: Settings | None = None,
        slack: SlackClient | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.slack = slack or SlackClient(
            self.settings.slack_token,
            base_url=SLACK_API_BASE,
            timeout=SLACK_TIMEOUT_SECONDS,
            emojis=self.settings.emojis,
        )
        self.engine = StatusEngine(self.slack, self.settings, clock=clock)
        # Filled from auth.test at startup
        self.auth_info: dict | None = None


_state = AppState()


def get_state() -> AppState:
    return _state
