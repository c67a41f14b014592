"""API route handlers.

RPC procedures live under ``/trpc`` and auth actions under ``/auth``; the
router is included into the FastAPI application in ``app.py`` with the
``/api`` prefix.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from postboard.backend.schemas import (
    HealthOut,
    PostCreateIn,
    PostOut,
    SessionOut,
    SignInIn,
)
from postboard.backend.services import (
    SESSION_COOKIE,
    PostStore,
    UnauthorizedError,
    create_session_token,
    decode_session_token,
    require_user,
    resolve_sign_in_user,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# ── Dependencies ────────────────────────────────────────────────────────────


def get_store(request: Request) -> PostStore:
    return request.app.state.store


def get_auth_config(request: Request) -> dict[str, Any]:
    return request.app.state.config["auth"]


def get_session(request: Request) -> SessionOut | None:
    """Decode the session cookie of the current request, if any."""
    return decode_session_token(request.cookies.get(SESSION_COOKIE), get_auth_config(request))


def set_session_cookie(response: Response, token: str, auth_cfg: dict[str, Any]) -> None:
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=int(auth_cfg.get("session_minutes", 60 * 24 * 30)) * 60,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE, httponly=True, samesite="lax")


# ── Routes ─────────────────────────────────────────────────────────────────


@router.get("/health", response_model=HealthOut, include_in_schema=False)
async def health_check() -> HealthOut:
    """Liveness check (suppressed from access log via log filter)."""
    return HealthOut()


@router.get("/trpc/post.getAll", response_model=list[PostOut])
def get_all_posts(store: PostStore = Depends(get_store)) -> list[PostOut]:
    """Return every post in insertion order."""
    return store.list_posts()


@router.post("/trpc/post.create", response_model=PostOut)
def create_post(
    payload: PostCreateIn,
    store: PostStore = Depends(get_store),
    session: SessionOut | None = Depends(get_session),
) -> PostOut:
    """Create a post authored by the session user."""
    try:
        user = require_user(session)
    except UnauthorizedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return store.create_post(payload, user)


@router.get("/trpc/auth.getSession", response_model=SessionOut | None)
def get_session_procedure(session: SessionOut | None = Depends(get_session)) -> SessionOut | None:
    return session


@router.post("/auth/signin", response_model=SessionOut)
def sign_in(
    response: Response,
    credentials: SignInIn | None = None,
    auth_cfg: dict[str, Any] = Depends(get_auth_config),
) -> SessionOut:
    """Demo credentials provider: sign in as the given (or configured) user."""
    user = resolve_sign_in_user(auth_cfg, credentials)
    token, session = create_session_token(user, auth_cfg)
    set_session_cookie(response, token, auth_cfg)
    logger.info("Signed in %s", user.name)
    return session


@router.post("/auth/signout")
def sign_out(response: Response, session: SessionOut | None = Depends(get_session)) -> dict:
    clear_session_cookie(response)
    if session is not None:
        logger.info("Signed out %s", session.user.name)
    return {"ok": True}
