"""Session service – signed session cookies for the demo credentials provider.

Sessions are stateless: the cookie carries a JWT signed with the configured
secret, and the session is whatever that token decodes to.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from postboard.backend.schemas import SessionOut, SignInIn, UserOut

logger = logging.getLogger(__name__)

SESSION_COOKIE = "postboard.session-token"


class UnauthorizedError(Exception):
    """Raised when a protected procedure is called without a session."""


def resolve_sign_in_user(auth_cfg: dict[str, Any], credentials: SignInIn | None = None) -> UserOut:
    """Pick the user to sign in: explicit credentials win over the configured demo user."""
    demo = auth_cfg.get("demo_user") or {}
    name = (credentials.name if credentials else None) or demo.get("name") or "Demo User"
    image = (credentials.image if credentials else None) or demo.get("image")
    return UserOut(name=name, image=image)


def create_session_token(user: UserOut, auth_cfg: dict[str, Any]) -> tuple[str, SessionOut]:
    """
    Issue a signed session token for ``user``.

    Args:
        user: The signed-in user
        auth_cfg: The ``auth`` configuration section

    Returns:
        The encoded token and the session it represents
    """
    minutes = int(auth_cfg.get("session_minutes", 60 * 24 * 30))
    # JWT exp has one-second resolution
    expires = (datetime.now(timezone.utc) + timedelta(minutes=minutes)).replace(microsecond=0)
    payload = {
        "sub": user.name,
        "name": user.name,
        "image": user.image,
        "exp": expires,
    }
    token = jwt.encode(
        payload,
        auth_cfg.get("secret", "change-me"),
        algorithm=auth_cfg.get("algorithm", "HS256"),
    )
    return token, SessionOut(user=user, expires=expires)


def decode_session_token(token: str | None, auth_cfg: dict[str, Any]) -> SessionOut | None:
    """Return the session encoded in ``token``, or ``None`` if it is missing, expired or forged."""
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            auth_cfg.get("secret", "change-me"),
            algorithms=[auth_cfg.get("algorithm", "HS256")],
        )
    except jwt.PyJWTError as exc:
        logger.debug("Rejected session token: %s", exc)
        return None
    return SessionOut(
        user=UserOut(name=payload["name"], image=payload.get("image")),
        expires=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def require_user(session: SessionOut | None) -> UserOut:
    """Return the session user or raise :class:`UnauthorizedError`."""
    if session is None:
        raise UnauthorizedError("You must be signed in to do that")
    return session.user
