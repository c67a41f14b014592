"""FastAPI application factory.

Instantiate with:
    uvicorn postboard.backend.api.app:app --reload --port 8000
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from postboard.backend.api.pages import pages_router
from postboard.backend.api.router import router
from postboard.backend.core.utils.config import resolve_config
from postboard.backend.services import PostStore

logger = logging.getLogger(__name__)

# Configurable via environment; the default allows local dev servers only.
# Override in production:  CORS_ORIGINS="https://your-domain.com"
_CORS_ORIGINS: list[str] = os.getenv(
    "CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"
).split(",")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Postboard ready – %d post(s) loaded",
        len(app.state.store),
    )
    yield


def create_app(config: dict[str, Any] | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Effective configuration; resolved from the YAML file and
            environment when omitted
    """
    config = config if config is not None else resolve_config()
    if config.get("auth", {}).get("secret") == "change-me":
        logger.warning("Using the default session secret; set POSTBOARD_SECRET")

    application = FastAPI(
        title=config.get("site", {}).get("title", "Postboard"),
        version="0.1.0",
        description="Posts list, create-post form and demo sign-in",
        lifespan=lifespan,
    )

    # State lives on the app (not in lifespan) so it exists without a server loop
    application.state.config = config
    application.state.store = PostStore()
    application.state.store.seed(config.get("seed_posts") or [])

    # ── CORS ───────────────────────────────────────────────────────────────
    application.add_middleware(
        CORSMiddleware,
        allow_origins=_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── RPC procedures and auth actions under /api, page at / ──────────────
    application.include_router(router, prefix="/api")
    application.include_router(pages_router)

    _install_access_log_filter()

    return application


class _QuietPollFilter(logging.Filter):
    """Drop uvicorn access-log records for /api/health."""

    _NOISY = ("/api/health",)

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        return not any(path in msg for path in self._NOISY)


def _install_access_log_filter() -> None:
    """Attach the filter to uvicorn's access logger (if it exists)."""
    uvicorn_access = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, _QuietPollFilter) for f in uvicorn_access.filters):
        uvicorn_access.addFilter(_QuietPollFilter())


# Module-level instance used by uvicorn.
app = create_app()
