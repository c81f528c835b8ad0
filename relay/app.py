from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .config import CORS_ORIGINS, STATIC_DIR
from .coordinator import SessionCoordinator
from .logging_config import get_logger
from .routers import health as health_router
from .routers import websockets as ws_router

logger = get_logger(__name__)


# Custom StaticFiles variant that disables caching for the front-end assets.
class NoCacheStaticFiles(StaticFiles):
    async def get_response(self, path: str, scope):  # type: ignore[override]
        response = await super().get_response(path, scope)
        response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response


def create_app(
    coordinator: Optional[SessionCoordinator] = None,
    static_dir: Optional[str] = STATIC_DIR,
) -> FastAPI:
    """Build the relay application around *coordinator* (a fresh one by default)."""
    app = FastAPI(title="Party Relay")
    app.state.coordinator = coordinator if coordinator is not None else SessionCoordinator()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health_router.router)
    app.include_router(ws_router.router)

    # Mount the front-end last so it never shadows the routes above.
    if static_dir and Path(static_dir).is_dir():
        app.mount("/", NoCacheStaticFiles(directory=static_dir, html=True), name="frontend")
        logger.info(f"Serving static files from {static_dir}")

    return app


app = create_app()

__all__ = ["app", "create_app", "NoCacheStaticFiles"]
