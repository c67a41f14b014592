"""In-process backend used by the server-rendered page.

Exposes the same coroutine surface as
:class:`~postboard.frontend.client.PostboardClient`, but calls the post store
and session service directly instead of going over HTTP. Session changes
made by ``sign_in`` / ``sign_out`` are recorded so the page route can
update the session cookie on its response.
"""

from __future__ import annotations

import logging
from typing import Any

from postboard.backend.schemas import PostCreateIn, PostOut, SessionOut, SignInIn
from postboard.backend.services.auth import (
    create_session_token,
    require_user,
    resolve_sign_in_user,
)
from postboard.backend.services.posts import PostStore

logger = logging.getLogger(__name__)


class LocalBackend:
    """Request-scoped backend bound to one store and one (optional) session."""

    def __init__(
        self,
        store: PostStore,
        auth_cfg: dict[str, Any],
        session: SessionOut | None = None,
    ) -> None:
        self.store = store
        self.auth_cfg = auth_cfg
        self.session = session
        self.issued_token: str | None = None
        self.signed_out = False

    async def get_all_posts(self) -> list[PostOut]:
        return self.store.list_posts()

    async def create_post(self, payload: PostCreateIn) -> PostOut:
        user = require_user(self.session)
        return self.store.create_post(payload, user)

    async def get_session(self) -> SessionOut | None:
        return self.session

    async def sign_in(self, credentials: SignInIn | None = None) -> SessionOut:
        user = resolve_sign_in_user(self.auth_cfg, credentials)
        self.issued_token, self.session = create_session_token(user, self.auth_cfg)
        self.signed_out = False
        logger.info("Signed in %s", user.name)
        return self.session

    async def sign_out(self) -> None:
        if self.session is not None:
            logger.info("Signed out %s", self.session.user.name)
        self.session = None
        self.issued_token = None
        self.signed_out = True
