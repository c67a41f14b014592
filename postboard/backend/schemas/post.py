"""Pydantic schemas for RPC request / response validation."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# ── Request models ──────────────────────────────────────────────────────────


class PostCreateIn(BaseModel):
    """Input of ``post.create``. Empty strings are accepted."""

    title: str
    body: str


class SignInIn(BaseModel):
    """Credentials for the demo sign-in provider; blanks fall back to the configured user."""

    name: str | None = None
    image: str | None = None


# ── Response models ─────────────────────────────────────────────────────────


class AuthorOut(BaseModel):
    name: str
    image: str | None = None


class PostOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    title: str
    body: str
    created_at: datetime = Field(alias="createdAt")
    author: AuthorOut


class UserOut(BaseModel):
    name: str
    image: str | None = None


class SessionOut(BaseModel):
    user: UserOut
    expires: datetime


class HealthOut(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
