"""Tests for startup configuration checks."""
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from statusify import main as main_module
from statusify.api import app as app_module
from statusify.config import ConfigError, Settings, default_emojis, load_settings, validate_settings


def test_missing_slack_token_aborts():
    with pytest.raises(ConfigError, match="SLACK_USER_TOKEN"):
        validate_settings(Settings(slack_token="", api_key="secret"))


def test_missing_api_key_aborts():
    with pytest.raises(ConfigError, match="STATUSIFY_API_KEY"):
        validate_settings(Settings(slack_token="xoxp-test", api_key=""))


def test_valid_settings_pass(settings):
    validate_settings(settings)
    assert settings.min_interval_ms == 4000


def test_load_settings_has_every_platform_emoji():
    settings = load_settings()
    assert set(settings.emojis) == {"default", "youtube", "spotify", "soundcloud"}
    assert settings.emojis == default_emojis()
    assert settings.max_length >= 4


def test_main_exits_without_credentials(monkeypatch):
    run = Mock()
    monkeypatch.setattr(main_module, "load_settings", lambda: Settings(slack_token="", api_key="secret"))
    monkeypatch.setattr(main_module.uvicorn, "run", run)
    with pytest.raises(SystemExit, match="SLACK_USER_TOKEN"):
        main_module.main()
    run.assert_not_called()


def test_app_startup_refuses_without_credentials(monkeypatch):
    monkeypatch.setattr(app_module._state.settings, "slack_token", "")
    auth_test = Mock()
    monkeypatch.setattr(app_module._state.slack, "auth_test", auth_test)
    with pytest.raises(ConfigError):
        with TestClient(app_module.app):
            pass
    auth_test.assert_not_called()
