"""Manual status: set arbitrary text, or a short-lived test status."""
import time

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from statusify.api.auth import check_token
from statusify.api.payload import SetStatusBody, parse_body
from statusify.api.state import AppState, get_state

router = APIRouter()

TEST_STATUS_TEXT = "Test Track — Debugger"
TEST_STATUS_TTL_SEC = 60


async def _manual(request: Request, state: AppState, *, default_text: str = "", ttl_sec: int = 0):
    data = parse_body(await request.body(), text_field="text")
    body = SetStatusBody.model_validate(data)
    check_token(state, request, body.token)
    text = body.text or default_text
    expiration = int(time.time()) + ttl_sec if ttl_sec else 0
    result = await run_in_threadpool(state.engine.set_manual, text, expiration)
    if not result.ok:
        raise HTTPException(status_code=502, detail=f"Slack set failed: {result.error}")
    return {"ok": True, "text": result.text}


@router.post("/set")
async def set_status(request: Request, state: AppState = Depends(get_state)):
    """Set the Slack status to the given text; empty text clears it."""
    return await _manual(request, state)


@router.post("/test")
async def test_status(request: Request, state: AppState = Depends(get_state)):
    """Set a test status that Slack expires after a minute."""
    return await _manual(request, state, default_text=TEST_STATUS_TEXT, ttl_sec=TEST_STATUS_TTL_SEC)
