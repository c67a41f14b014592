"""
View-model layer for the home page.

Each view unit owns its local state and the queries it reads, and exposes a
``view()`` method returning a frozen description of what to render. Nothing
here knows about HTML; see :mod:`postboard.frontend.render` for that.

The data source is injected as a *backend*: any object exposing the
coroutine methods of :class:`PostboardBackend`. In the server this is a
:class:`~postboard.backend.services.local.LocalBackend`, over the network a
:class:`~postboard.frontend.client.PostboardClient`, and in tests a fake.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Protocol

from postboard.backend.schemas import PostCreateIn, PostOut, SessionOut, SignInIn
from postboard.frontend.query import (
    POSTS_QUERY,
    SESSION_QUERY,
    Mutation,
    MutationState,
    QueryClient,
    QueryState,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_AVATAR_URL = "https://www.w3schools.com/howto/img_avatar.png"
LOADING_TEXT = "Loading..."


class PostboardBackend(Protocol):
    async def get_all_posts(self) -> list[PostOut]: ...

    async def create_post(self, payload: PostCreateIn) -> PostOut: ...

    async def get_session(self) -> SessionOut | None: ...

    async def sign_in(self, credentials: SignInIn | None = None) -> SessionOut: ...

    async def sign_out(self) -> None: ...


def format_created_date(value: datetime) -> str:
    """US-style short date, e.g. ``10/9/2026``."""
    return f"{value.month}/{value.day}/{value.year}"


def session_present(state: QueryState) -> bool:
    return state.is_success and state.data is not None


# ── Post list ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PostCardView:
    key: str
    avatar_src: str
    author_name: str
    created_label: str
    title: str
    body: str
    avatar_alt: str = "Avatar"


@dataclass(frozen=True)
class PostListView:
    is_loading: bool
    cards: tuple[PostCardView, ...] = ()
    error: str | None = None


def post_card(post: PostOut) -> PostCardView:
    return PostCardView(
        key=post.id,
        avatar_src=post.author.image if post.author.image is not None else PLACEHOLDER_AVATAR_URL,
        author_name=post.author.name,
        created_label=format_created_date(post.created_at),
        title=post.title,
        body=post.body,
    )


def post_list_view(state: QueryState) -> PostListView:
    """Map the list query state to a list view (loading, failed, or N cards)."""
    if state.is_error:
        return PostListView(is_loading=False, error=state.error)
    if not state.is_success:
        return PostListView(is_loading=True)
    return PostListView(is_loading=False, cards=tuple(post_card(p) for p in state.data))


class _ViewUnit:
    """Subscribes to the queries a unit reads and forwards changes to ``on_change``."""

    def __init__(self, on_change: Callable[[], Any] | None = None):
        self._on_change = on_change
        self._unsubscribers: list[Callable[[], None]] = []

    def _watch(self, query) -> None:
        self._unsubscribers.append(query.subscribe(self._changed))

    def _changed(self, state: QueryState) -> None:
        if self._on_change is not None:
            self._on_change()

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()


class PostList(_ViewUnit):
    def __init__(self, backend: PostboardBackend, client: QueryClient, on_change=None):
        super().__init__(on_change)
        self.query = client.query(POSTS_QUERY, backend.get_all_posts)
        self._watch(self.query)

    async def load(self) -> QueryState:
        return await self.query.read()

    def view(self) -> PostListView:
        return post_list_view(self.query.state)


# ── Post creation form ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class CreatePostFormView:
    title: str
    body: str
    disabled: bool
    button_label: str
    button_muted: bool
    error: str | None = None
    heading: str = "Create a new post"


class CreatePostForm(_ViewUnit):
    """
    Local title/body fields plus the create mutation.

    The form is disabled until the session query reports a user. A
    successful submit clears both fields and invalidates the post list; a
    failed one leaves the fields as they were and exposes the error.
    """

    def __init__(self, backend: PostboardBackend, client: QueryClient, on_change=None):
        super().__init__(on_change)
        self._client = client
        self.session_query = client.query(SESSION_QUERY, backend.get_session)
        self._watch(self.session_query)
        self.mutation = Mutation(backend.create_post, on_success=self._on_success)
        self.title = ""
        self.body = ""

    def set_title(self, value: str) -> None:
        self.title = value

    def set_body(self, value: str) -> None:
        self.body = value

    @property
    def disabled(self) -> bool:
        return not session_present(self.session_query.state)

    async def submit(self) -> MutationState:
        if self.disabled:
            logger.debug("Ignoring submit without a session")
            return self.mutation.state
        return await self.mutation.mutate(PostCreateIn(title=self.title, body=self.body))

    async def _on_success(self, post: PostOut, payload: PostCreateIn) -> None:
        self.title = ""
        self.body = ""
        await self._client.invalidate(POSTS_QUERY)

    def view(self) -> CreatePostFormView:
        signed_in = session_present(self.session_query.state)
        return CreatePostFormView(
            title=self.title,
            body=self.body,
            disabled=not signed_in,
            button_label="Submit post" if signed_in else "You must be signed in to post",
            button_muted=not signed_in,
            error=self.mutation.state.error if self.mutation.state.is_error else None,
        )


# ── Auth toggle ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AuthButtonView:
    label: str
    action: str
    error: str | None = None


class AuthToggle(_ViewUnit):
    def __init__(self, backend: PostboardBackend, client: QueryClient, on_change=None):
        super().__init__(on_change)
        self._backend = backend
        self._client = client
        self.session_query = client.query(SESSION_QUERY, backend.get_session)
        self._watch(self.session_query)

    @property
    def signed_in(self) -> bool:
        return session_present(self.session_query.state)

    def view(self) -> AuthButtonView:
        state = self.session_query.state
        error = f"Could not load session: {state.error}" if state.is_error else None
        if self.signed_in:
            return AuthButtonView(label="Sign out", action="signout", error=error)
        return AuthButtonView(label="Sign in", action="signin", error=error)

    async def click(self, credentials: SignInIn | None = None) -> None:
        """Sign out when signed in, sign in otherwise; then refresh the session."""
        if self.signed_in:
            await self._backend.sign_out()
        else:
            await self._backend.sign_in(credentials)
        await self._client.invalidate(SESSION_QUERY)


# ── Page ─────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class HomePageView:
    title: str
    description: str
    form: CreatePostFormView
    posts: PostListView
    auth: AuthButtonView


class HomePage:
    """Composition of the three view units sharing one :class:`QueryClient`."""

    def __init__(
        self,
        backend: PostboardBackend,
        client: QueryClient | None = None,
        title: str = "Postboard",
        description: str = "",
        on_change: Callable[[], Any] | None = None,
    ):
        self.client = client or QueryClient()
        self.title = title
        self.description = description
        self.form = CreatePostForm(backend, self.client, on_change)
        self.posts = PostList(backend, self.client, on_change)
        self.auth = AuthToggle(backend, self.client, on_change)

    async def load(self) -> None:
        """Issue the list and session queries concurrently."""
        await asyncio.gather(self.posts.load(), self.form.session_query.read())

    def view(self) -> HomePageView:
        return HomePageView(
            title=self.title,
            description=self.description,
            form=self.form.view(),
            posts=self.posts.view(),
            auth=self.auth.view(),
        )

    def close(self) -> None:
        self.form.close()
        self.posts.close()
        self.auth.close()
