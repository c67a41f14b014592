"""
Asynchronous query and mutation state containers.

A :class:`Query` wraps a zero-argument coroutine function and tracks its
result through three phases (pending, success, error) plus a stale flag.
Queries are registered in a :class:`QueryClient` under a key; invalidating
a key marks the query stale and publishes the change to its subscribers.
Queries with at least one subscriber are considered active and re-issue
their fetch immediately; inactive queries refetch on the next ``read()``.
A fetch that was already running when the key was invalidated leaves the
query stale, so its result is followed by a fresh fetch.

A :class:`Mutation` wraps a one-argument coroutine function and reports
completion through ``on_success`` / ``on_error`` callbacks. Neither
container retries.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

POSTS_QUERY = "post.getAll"
SESSION_QUERY = "auth.getSession"

Fetcher = Callable[[], Awaitable[Any]]
Listener = Callable[["QueryState"], None]


class QueryStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class MutationStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


def _describe(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


@dataclass(frozen=True)
class QueryState:
    """
    Snapshot of a query.

    Attributes:
        status: Current phase
        data: Last successfully fetched value (kept across a failed refetch)
        error: Message of the last failure, ``None`` unless status is ERROR
        is_stale: True once invalidated and not yet refetched
    """

    status: QueryStatus = QueryStatus.PENDING
    data: Any = None
    error: str | None = None
    is_stale: bool = False

    @property
    def is_pending(self) -> bool:
        return self.status is QueryStatus.PENDING

    @property
    def is_success(self) -> bool:
        return self.status is QueryStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.ERROR


@dataclass(frozen=True)
class MutationState:
    status: MutationStatus = MutationStatus.IDLE
    data: Any = None
    error: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status is MutationStatus.PENDING

    @property
    def is_error(self) -> bool:
        return self.status is MutationStatus.ERROR


async def _invoke(callback: Callable[..., Any] | None, *args: Any) -> None:
    """Call ``callback`` and await the result when it is awaitable."""
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class Query:
    """A single keyed query and its current :class:`QueryState`."""

    def __init__(self, key: str, fetcher: Fetcher):
        self.key = key
        self._fetcher = fetcher
        self._listeners: list[Listener] = []
        self._inflight: asyncio.Future | None = None
        self._has_fetched = False
        # bumped by every invalidation; a fetch started before the bump is stale
        self._generation = 0
        self.state = QueryState()

    @property
    def has_subscribers(self) -> bool:
        return bool(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for state changes; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: QueryState) -> None:
        self.state = state
        for listener in list(self._listeners):
            listener(state)

    async def _run(self) -> QueryState:
        generation = self._generation
        try:
            data = await self._fetcher()
        except Exception as exc:
            logger.warning("Query %s failed: %s", self.key, _describe(exc))
            self._set_state(
                QueryState(
                    status=QueryStatus.ERROR,
                    data=self.state.data,
                    error=_describe(exc),
                    is_stale=self._generation != generation,
                )
            )
        else:
            outdated = self._generation != generation
            if outdated:
                logger.debug("Query %s resolved but was invalidated meanwhile", self.key)
            else:
                logger.debug("Query %s resolved", self.key)
            self._set_state(QueryState(status=QueryStatus.SUCCESS, data=data, is_stale=outdated))
        finally:
            self._inflight = None
        self._has_fetched = True
        return self.state

    async def fetch(self) -> QueryState:
        """Issue the fetch now; concurrent callers share one in-flight request."""
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._run())
        return await self._inflight

    async def read(self) -> QueryState:
        """
        Return the current state, fetching first if never fetched or stale.

        A fetch that was already running when the query was invalidated is
        joined and then followed by a fresh one.
        """
        while not self._has_fetched or self.state.is_stale:
            await self.fetch()
        return self.state

    def mark_stale(self) -> None:
        self._generation += 1
        self._set_state(replace(self.state, is_stale=True))


class QueryClient:
    """Registry of queries keyed by procedure name."""

    def __init__(self) -> None:
        self._queries: dict[str, Query] = {}

    def query(self, key: str, fetcher: Fetcher) -> Query:
        """Return the query registered under ``key``, creating it on first use."""
        if key not in self._queries:
            self._queries[key] = Query(key, fetcher)
        return self._queries[key]

    def get(self, key: str) -> Query | None:
        return self._queries.get(key)

    async def invalidate(self, key: str) -> None:
        """Mark ``key`` stale and refetch it now if anything is subscribed."""
        query = self._queries.get(key)
        if query is None:
            logger.debug("Invalidate %s: no such query", key)
            return
        query.mark_stale()
        if query.has_subscribers:
            await query.read()


class Mutation:
    """A create/update request with a single completion callback."""

    def __init__(
        self,
        mutator: Callable[[Any], Awaitable[Any]],
        on_success: Callable[[Any, Any], Any] | None = None,
        on_error: Callable[[BaseException, Any], Any] | None = None,
    ):
        self._mutator = mutator
        self._on_success = on_success
        self._on_error = on_error
        self.state = MutationState()

    async def mutate(self, variables: Any) -> MutationState:
        """
        Run the mutation with ``variables``.

        Failures are captured in the returned state rather than raised.
        """
        self.state = MutationState(status=MutationStatus.PENDING)
        try:
            data = await self._mutator(variables)
        except Exception as exc:
            logger.warning("Mutation failed: %s", _describe(exc))
            self.state = MutationState(status=MutationStatus.ERROR, error=_describe(exc))
            await _invoke(self._on_error, exc, variables)
            return self.state

        self.state = MutationState(status=MutationStatus.SUCCESS, data=data)
        await _invoke(self._on_success, data, variables)
        return self.state

    def reset(self) -> None:
        self.state = MutationState()
