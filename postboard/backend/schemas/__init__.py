"""Schema package – re-exports all public symbols for convenient imports."""

from __future__ import annotations

from postboard.backend.schemas.post import (
    AuthorOut,
    HealthOut,
    PostCreateIn,
    PostOut,
    SessionOut,
    SignInIn,
    UserOut,
)

__all__ = [
    "AuthorOut",
    "HealthOut",
    "PostCreateIn",
    "PostOut",
    "SessionOut",
    "SignInIn",
    "UserOut",
]
