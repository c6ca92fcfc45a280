"""Configuration: env, Slack credentials, template and throttle defaults."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv

# Base paths (project root = parent of statusify package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so SLACK_USER_TOKEN etc. are set
load_dotenv(BASE_DIR / ".env")

# API
API_HOST = os.getenv("STATUSIFY_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("STATUSIFY_API_PORT", "8787"))
# Shared secret the userscript sends with every submission
API_KEY = os.getenv("STATUSIFY_API_KEY", "")

# Slack (user token, xoxp-...)
SLACK_USER_TOKEN = os.getenv("SLACK_USER_TOKEN", "")
SLACK_API_BASE = os.getenv("SLACK_API_BASE", "https://slack.com/api")
SLACK_TIMEOUT_SECONDS = float(os.getenv("SLACK_TIMEOUT_SECONDS", "5"))

# Status text
TEMPLATE = os.getenv("TEMPLATE", "${title} — ${artist}")
MIN_UPDATE_SECONDS = float(os.getenv("MIN_UPDATE_SECONDS", "4"))
MAX_STATUS_LENGTH = int(os.getenv("MAX_STATUS_LENGTH", "100"))  # Slack caps status_text at 100

# Emoji per platform; "default" is used for unknown platforms
EMOJI = os.getenv("EMOJI", ":musical_note:")
EMOJI_YOUTUBE = os.getenv("EMOJI_YOUTUBE", "▶️")
EMOJI_SPOTIFY = os.getenv("EMOJI_SPOTIFY", "🎧")
EMOJI_SOUNDCLOUD = os.getenv("EMOJI_SOUNDCLOUD", "☁️")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class ConfigError(Exception):
    """Required startup configuration is missing."""


@dataclass
class Settings:
    """Runtime settings. Template, interval, length and emojis can be changed via /admin/config."""
    slack_token: str
    api_key: str
    template: str = TEMPLATE
    min_update_seconds: float = MIN_UPDATE_SECONDS
    max_length: int = MAX_STATUS_LENGTH
    emojis: Dict[str, str] = field(default_factory=dict)

    @property
    def min_interval_ms(self) -> int:
        return int(self.min_update_seconds * 1000)


def default_emojis() -> Dict[str, str]:
    return {
        "default": EMOJI,
        "youtube": EMOJI_YOUTUBE,
        "spotify": EMOJI_SPOTIFY,
        "soundcloud": EMOJI_SOUNDCLOUD,
    }


def load_settings() -> Settings:
    return Settings(
        slack_token=SLACK_USER_TOKEN,
        api_key=API_KEY,
        template=TEMPLATE,
        min_update_seconds=max(0.0, MIN_UPDATE_SECONDS),
        max_length=max(4, MAX_STATUS_LENGTH),
        emojis=default_emojis(),
    )


def validate_settings(settings: Settings) -> None:
    """Raise ConfigError when a credential needed to run is absent."""
    if not settings.slack_token:
        raise ConfigError("SLACK_USER_TOKEN is required")
    if not settings.api_key:
        raise ConfigError("STATUSIFY_API_KEY is required")
