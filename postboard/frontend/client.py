"""Typed RPC client for the Postboard API.

Wraps an ``httpx.AsyncClient`` and validates every response into the
pydantic schemas shared with the server. The session cookie set by
``sign_in`` lives in the underlying client's cookie jar, so a single
:class:`PostboardClient` behaves like one browser session.

HTTP errors are raised (``httpx.HTTPStatusError``); the query and mutation
containers turn them into failed states.
"""

from __future__ import annotations

import logging

import httpx

from postboard.backend.schemas import PostCreateIn, PostOut, SessionOut, SignInIn

logger = logging.getLogger(__name__)

RPC_PREFIX = "/api/trpc"
AUTH_PREFIX = "/api/auth"


class PostboardClient:
    """
    Async client exposing the procedures the home page consumes.

    Args:
        base_url: Server root, e.g. ``http://127.0.0.1:8000``
        http: Pre-built ``httpx.AsyncClient`` (takes precedence over
            ``base_url``; useful with ``httpx.ASGITransport`` in tests)
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        *,
        http: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> PostboardClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def get_all_posts(self) -> list[PostOut]:
        response = await self.http.get(f"{RPC_PREFIX}/post.getAll")
        response.raise_for_status()
        return [PostOut.model_validate(item) for item in response.json()]

    async def create_post(self, payload: PostCreateIn) -> PostOut:
        response = await self.http.post(f"{RPC_PREFIX}/post.create", json=payload.model_dump())
        response.raise_for_status()
        return PostOut.model_validate(response.json())

    async def get_session(self) -> SessionOut | None:
        response = await self.http.get(f"{RPC_PREFIX}/auth.getSession")
        response.raise_for_status()
        data = response.json()
        return SessionOut.model_validate(data) if data is not None else None

    async def sign_in(self, credentials: SignInIn | None = None) -> SessionOut:
        body = (credentials or SignInIn()).model_dump()
        response = await self.http.post(f"{AUTH_PREFIX}/signin", json=body)
        response.raise_for_status()
        session = SessionOut.model_validate(response.json())
        logger.debug("Signed in as %s", session.user.name)
        return session

    async def sign_out(self) -> None:
        response = await self.http.post(f"{AUTH_PREFIX}/signout")
        response.raise_for_status()
