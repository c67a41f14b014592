"""Services package – re-exports all public service objects."""

from __future__ import annotations

from postboard.backend.services.auth import (
    SESSION_COOKIE,
    UnauthorizedError,
    create_session_token,
    decode_session_token,
    require_user,
    resolve_sign_in_user,
)
from postboard.backend.services.local import LocalBackend
from postboard.backend.services.posts import PostStore

__all__ = [
    "SESSION_COOKIE",
    "LocalBackend",
    "PostStore",
    "UnauthorizedError",
    "create_session_token",
    "decode_session_token",
    "require_user",
    "resolve_sign_in_user",
]
