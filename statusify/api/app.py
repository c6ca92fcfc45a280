"""FastAPI app, CORS, request logging, and route registration."""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from statusify.config import LOG_LEVEL, validate_settings

# Configure logging in the worker process (so engine INFO logs are visible under uvicorn)
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(levelname)s: %(name)s: %(message)s",
)

from statusify.api.state import AppState, get_state

# Import routes after state to avoid circular imports
from statusify.api.routes import admin, health, now_playing, status

__all__ = ["app", "AppState", "get_state"]

logger = logging.getLogger(__name__)

_state = get_state()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing credentials abort startup
    validate_settings(_state.settings)
    token = _state.settings.slack_token
    logger.info("Token type: %s (expected xoxp)", token[:4])
    _state.auth_info = await run_in_threadpool(_state.slack.auth_test)
    logger.info("Slack auth info: %s", _state.auth_info)
    yield


app = FastAPI(
    title="Statusify API",
    description="Relays browser now-playing metadata to a Slack status",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.monotonic()
    response = await call_next(request)
    ms = (time.monotonic() - start) * 1000
    logger.info("%s %s %s %.0fms", request.method, request.url.path, response.status_code, ms)
    # Chrome blocks public pages from calling localhost without this
    response.headers["Access-Control-Allow-Private-Network"] = "true"
    return response


app.include_router(now_playing.router, prefix="/now-playing", tags=["now-playing"])
app.include_router(status.router, tags=["status"])
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(admin.router, prefix="/admin", tags=["admin"])
