"""Now-playing submissions from the userscript and the currently applied status."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from statusify.api.auth import check_token
from statusify.api.payload import NowPlayingBody, parse_body
from statusify.api.state import AppState, get_state
from statusify.core.decision import SKIP_NOT_OURS
from statusify.core.status_engine import EngineResult
from statusify.models.status import Apply, Clear

logger = logging.getLogger(__name__)

router = APIRouter()


def _result_response(result: EngineResult) -> dict:
    """Map an engine result to the JSON shape the userscript expects."""
    if not result.ok:
        raise HTTPException(status_code=502, detail=f"Slack set failed: {result.error}")
    action = result.action
    if isinstance(action, Apply):
        return {"ok": True, "status": action.text}
    if isinstance(action, Clear):
        return {"ok": True, "cleared": True}
    if action.reason == SKIP_NOT_OURS:
        return {"ok": True, "cleared": False, "skipped": action.reason}
    return {"ok": True, "skipped": action.reason, "text": result.text}


@router.post("")
async def post_now_playing(request: Request, state: AppState = Depends(get_state)):
    """Feed one scrape tick to the engine. Unparseable bodies count as "not playing"."""
    data = parse_body(await request.body())
    check_token(state, request, data.get("token"))
    body = NowPlayingBody.from_payload(data)
    event = body.to_event() if body else None
    logger.debug("now-playing payload: %s", event)
    # Slack call blocks; keep it off the event loop
    result = await run_in_threadpool(state.engine.handle_event, event)
    return _result_response(result)


@router.get("")
def get_now_playing(state: AppState = Depends(get_state)):
    """Return the status text this server currently has on Slack, if any."""
    snapshot = state.engine.snapshot()
    return {
        "ok": True,
        "status": state.engine.current_text(),
        "last_sent_at": snapshot["last_sent_at"],
        "currently_set_by_us": snapshot["currently_set_by_us"],
    }
