"""FastAPI application entry point."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.api import routes
from backend.config import Settings, get_settings
from backend.errors import (
    InvalidBoardError,
    PlayerNotFoundError,
    PuzzleError,
    PuzzleNotFoundError,
    SessionClosedError,
    SessionNotFoundError,
)
from backend.services import GameService
from backend.storage import JsonStore, PuzzleStore, seed_puzzles
from backend.utils.logger import get_logger

logger = get_logger(__name__)

_STATUS_CODES: dict[type[PuzzleError], int] = {
    InvalidBoardError: 400,
    PlayerNotFoundError: 404,
    SessionNotFoundError: 404,
    PuzzleNotFoundError: 404,
    SessionClosedError: 409,
}


def _status_for(exc: PuzzleError) -> int:
    for cls in type(exc).__mro__:
        if cls in _STATUS_CODES:
            return _STATUS_CODES[cls]
    return 500


async def _puzzle_error_handler(request: Request, exc: PuzzleError) -> JSONResponse:
    status = _status_for(exc)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"error": str(exc)})


async def _value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


def build_service(settings: Settings, store: PuzzleStore | None = None) -> GameService:
    """Wire a service to *store*, or to the JSON store named by *settings*."""
    if store is None:
        store = JsonStore(settings.store_path)
        if store.count_puzzles() == 0 and settings.seed_per_size > 0:
            seed_puzzles(store, per_size=settings.seed_per_size)
    return GameService(
        store,
        default_skill=settings.default_skill,
        fallback_size=settings.fallback_size,
        fallback_difficulty=settings.fallback_difficulty,
    )


def create_app(
    settings: Settings | None = None, service: GameService | None = None
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Adaptive sliding puzzle: generation, scoring and hints",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.service = service or build_service(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(PuzzleError, _puzzle_error_handler)
    app.add_exception_handler(ValueError, _value_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(routes.router)

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "endpoints": {
                "generate": "/api/puzzle/generate",
                "end": "/api/game/end",
                "hint": "/api/magic/hint",
                "check": "/api/puzzle/check",
                "player": "/api/players/{player_id}",
                "docs": "/docs",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.app_version}

    return app
