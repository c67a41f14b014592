"""Post service – an in-memory post store.

The store keeps posts in insertion order and is shared by every request
handler, so all access goes through a lock (sync FastAPI handlers run on a
threadpool).
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any

from postboard.backend.schemas import AuthorOut, PostCreateIn, PostOut, UserOut

logger = logging.getLogger(__name__)


class PostStore:
    """Thread-safe, insertion-ordered collection of posts."""

    def __init__(self) -> None:
        self._posts: list[PostOut] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._posts)

    def list_posts(self) -> list[PostOut]:
        """Return a snapshot of all posts, oldest first."""
        with self._lock:
            return list(self._posts)

    def create_post(self, payload: PostCreateIn, author: UserOut | AuthorOut) -> PostOut:
        """
        Create and store a new post.

        Args:
            payload: Title and body, stored as given
            author: The author record attached to the post

        Returns:
            The stored post
        """
        post = PostOut(
            id=uuid.uuid4().hex,
            title=payload.title,
            body=payload.body,
            created_at=datetime.now(timezone.utc),
            author=AuthorOut(name=author.name, image=author.image),
        )
        with self._lock:
            self._posts.append(post)
        logger.info("Created post %s by %s", post.id, post.author.name)
        return post

    def seed(self, items: list[dict[str, Any]]) -> int:
        """Load posts from configuration entries (``title``, ``body``, ``author``)."""
        for item in items:
            author = AuthorOut(**(item.get("author") or {"name": "Anonymous"}))
            self.create_post(
                PostCreateIn(title=item.get("title", ""), body=item.get("body", "")),
                author,
            )
        return len(items)
