"""Shared-secret check for userscript submissions."""
import hmac
from typing import Optional

from fastapi import HTTPException, Request

from statusify.api.state import AppState


def request_token(request: Request, body_token: Optional[str] = None) -> str:
    """Token from the JSON body, else Authorization: Bearer, else ?token=."""
    if isinstance(body_token, str) and body_token:
        return body_token
    header = request.headers.get("authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip()
    return request.query_params.get("token", "")


def check_token(state: AppState, request: Request, body_token: Optional[str] = None) -> None:
    """Raise 401 unless the request carries the configured API key."""
    expected = state.settings.api_key
    given = request_token(request, body_token)
    if not expected or not given or not hmac.compare_digest(given.encode(), expected.encode()):
        raise HTTPException(status_code=401, detail="Unauthorized")
