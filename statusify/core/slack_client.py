"""Slack Web API client for the user's profile status (users.profile.set)."""
import logging
from typing import Dict, Optional

import requests

from statusify.models.playback import Platform

logger = logging.getLogger(__name__)


# Custom error classes so callers can branch
class SlackError(Exception): ...
class SlackNetworkError(SlackError): ...


class SlackAPIError(SlackError):
    """Slack answered with ok=false."""

    def __init__(self, method: str, code: str):
        super().__init__(f"{method}: {code}")
        self.method = method
        self.code = code


class SlackClient:
    """Thin wrapper over the Slack Web API using a user token."""

    def __init__(
        self,
        token: str,
        base_url: str = "https://slack.com/api",
        timeout: float = 5.0,
        emojis: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.emojis = emojis if emojis is not None else {}
        self.session = session or requests.Session()

    def call(self, method: str, body: dict) -> dict:
        """POST a Web API method and return the decoded JSON. Raises SlackError."""
        try:
            resp = self.session.post(
                f"{self.base_url}/{method}",
                json=body,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json; charset=utf-8",
                },
                timeout=self.timeout,
            )
            # Slack rate limits with HTTP 429 + Retry-After instead of ok=false
            if resp.status_code == 429:
                raise SlackAPIError(method, "ratelimited")
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise SlackNetworkError(f"{method}: {e}") from e
        except ValueError as e:
            raise SlackNetworkError(f"{method}: invalid JSON response") from e
        if not isinstance(data, dict) or not data.get("ok"):
            code = data.get("error", "unknown_error") if isinstance(data, dict) else "unknown_error"
            raise SlackAPIError(method, code)
        return data

    def auth_test(self) -> dict:
        """Return {"user", "team"} for the token, or {"error": ...}. Never raises."""
        try:
            data = self.call("auth.test", {})
        except SlackAPIError as e:
            return {"error": e.code}
        except SlackError as e:
            return {"error": str(e)}
        return {"user": data.get("user"), "team": data.get("team")}

    def emoji_for(self, platform: Optional[Platform]) -> str:
        default = self.emojis.get("default", "")
        if platform is None:
            return default
        return self.emojis.get(platform.value) or default

    def set_status(self, text: str, emoji: str = "", expiration: int = 0) -> None:
        """Set the profile status; empty text clears it (emoji is dropped too)."""
        profile = {
            "status_text": text or "",
            "status_emoji": emoji if text else "",
            "status_expiration": expiration or 0,
        }
        self.call("users.profile.set", {"profile": profile})

    def clear_status(self) -> None:
        self.set_status("")
