"""Read-only health and engine snapshot."""
from fastapi import APIRouter, Depends

from statusify.api.state import AppState, get_state
from statusify.config import API_PORT

router = APIRouter()


@router.get("")
def health(state: AppState = Depends(get_state)):
    settings = state.settings
    return {
        "ok": True,
        "port": API_PORT,
        "template": settings.template,
        "min_update_ms": settings.min_interval_ms,
        "engine": state.engine.snapshot(),
        "auth_info": state.auth_info,
    }
