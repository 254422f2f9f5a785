"""
FastAPI application and API routes for calcpad.

The browser front end posts input events or raw key names and redraws from
the snapshot it gets back. Handlers are `async def` so that every engine
call, and the engine's error-recovery timer, runs on the event loop thread.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from calcpad import __version__
from calcpad.config import settings
from calcpad.engine import CalculatorEngine
from calcpad.keymap import translate_key
from calcpad.log import configure_logging
from calcpad.models import DisplaySnapshot, InputEvent, KeyPress
from calcpad.scheduler import AsyncioScheduler

logger = structlog.get_logger()

router = APIRouter()


def get_engine(request: Request) -> CalculatorEngine:
    """Dependency returning the app's calculator engine."""
    return request.app.state.engine


# =============================================================================
# Health Check
# =============================================================================

@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@router.get("/api/v1/config")
async def get_config():
    """Get public configuration."""
    return {
        "app_name": settings.app_name,
        "max_entry_length": settings.max_entry_length,
        "history_size": settings.history_size,
        "error_recovery_delay": settings.error_recovery_delay,
        "sign_toggle_keys": settings.sign_toggle_keys,
    }


# =============================================================================
# Calculator API
# =============================================================================

@router.get("/api/v1/display", response_model=DisplaySnapshot)
async def get_display(engine: CalculatorEngine = Depends(get_engine)):
    """Current display contents."""
    return engine.get_display_snapshot()


@router.get("/api/v1/history", response_model=list[str])
async def get_history(engine: CalculatorEngine = Depends(get_engine)):
    """Completed calculations, most recent first."""
    return engine.get_history()


@router.post("/api/v1/input", response_model=DisplaySnapshot)
async def post_input(
    event: InputEvent,
    engine: CalculatorEngine = Depends(get_engine),
):
    """Apply one input event and return the updated display."""
    engine.on_input(event)
    return engine.get_display_snapshot()


@router.post("/api/v1/keys", response_model=DisplaySnapshot)
async def post_key(
    press: KeyPress,
    engine: CalculatorEngine = Depends(get_engine),
):
    """Translate a key name into an input event and apply it."""
    event = translate_key(press.key)
    if event is None:
        raise HTTPException(status_code=404, detail=f"No binding for key {press.key!r}")
    engine.on_input(event)
    return engine.get_display_snapshot()


# =============================================================================
# Application
# =============================================================================

def create_app(engine: CalculatorEngine | None = None) -> FastAPI:
    """
    Build the application around a single calculator engine.

    Without an explicit engine, one is created at startup with an
    `AsyncioScheduler` bound to the running loop.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        configure_logging(settings.log_level)
        app.state.engine = engine or CalculatorEngine(scheduler=AsyncioScheduler())
        logger.info("Calculator engine ready", app_name=settings.app_name)
        yield

    app = FastAPI(
        title="calcpad",
        description="Browser calculator engine",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app


app = create_app()
