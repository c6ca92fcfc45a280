"""Shared fixtures: settings, a mocked Slack client, a controllable clock."""
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from statusify.api.state import AppState, get_state
from statusify.config import Settings, default_emojis
from statusify.core.slack_client import SlackClient
from statusify.core.status_engine import StatusEngine

API_KEY = "secret"


class FakeClock:
    """Epoch milliseconds, advanced by hand."""

    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def settings():
    return Settings(
        slack_token="xoxp-test",
        api_key=API_KEY,
        template="${title} — ${artist}",
        min_update_seconds=4,
        max_length=100,
        emojis=default_emojis(),
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def slack():
    mock_slack = Mock(spec=SlackClient)
    mock_slack.emoji_for.return_value = ":musical_note:"
    return mock_slack


@pytest.fixture
def engine(slack, settings, clock):
    return StatusEngine(slack, settings, clock=clock)


@pytest.fixture
def app_state(settings, slack, clock):
    return AppState(settings=settings, slack=slack, clock=clock)


@pytest.fixture
def client(app_state):
    """TestClient with the app state swapped for the mocked one (lifespan not run)."""
    from statusify.api.app import app

    app.dependency_overrides[get_state] = lambda: app_state
    yield TestClient(app)
    app.dependency_overrides.clear()
