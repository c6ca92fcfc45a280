"""Runtime configuration: template, throttle interval, length, emojis."""
from typing import Dict, Optional

from fastapi import APIRouter, Body, Depends, Request
from pydantic import BaseModel, Field, field_validator

from statusify.api.auth import check_token
from statusify.api.state import AppState, get_state

router = APIRouter()


class ConfigUpdate(BaseModel):
    template: Optional[str] = Field(None, min_length=1)
    min_update_seconds: Optional[float] = Field(None, ge=0)
    max_length: Optional[int] = Field(None, ge=4, le=100)
    emojis: Optional[Dict[str, str]] = None
    token: Optional[str] = None

    @field_validator("template")
    @classmethod
    def _template_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("template must contain text")
        return v


def _config(state: AppState) -> dict:
    settings = state.settings
    return {
        "template": settings.template,
        "min_update_seconds": settings.min_update_seconds,
        "max_length": settings.max_length,
        "emojis": dict(settings.emojis),
    }


@router.get("/config")
def get_config(request: Request, state: AppState = Depends(get_state)):
    check_token(state, request)
    return _config(state)


@router.put("/config")
def update_config(
    request: Request,
    body: ConfigUpdate = Body(...),
    state: AppState = Depends(get_state),
):
    """Change settings; omitted fields keep their value."""
    check_token(state, request, body.token)
    state.engine.update_settings(
        template=body.template,
        min_update_seconds=body.min_update_seconds,
        max_length=body.max_length,
        emojis=body.emojis,
    )
    return _config(state)
