"""Core services: normalizer, decision engine, Slack client."""
from statusify.core.slack_client import SlackClient
from statusify.core.status_engine import StatusEngine

__all__ = ["SlackClient", "StatusEngine"]
