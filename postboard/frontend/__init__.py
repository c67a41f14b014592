"""View-model layer: query/mutation state, view units, HTML rendering and the RPC client."""

from __future__ import annotations

from postboard.frontend.client import PostboardClient
from postboard.frontend.query import (
    POSTS_QUERY,
    SESSION_QUERY,
    Mutation,
    MutationState,
    MutationStatus,
    Query,
    QueryClient,
    QueryState,
    QueryStatus,
)
from postboard.frontend.render import render_home_page
from postboard.frontend.views import (
    PLACEHOLDER_AVATAR_URL,
    AuthToggle,
    CreatePostForm,
    HomePage,
    PostList,
    post_card,
    post_list_view,
)

__all__ = [
    "PLACEHOLDER_AVATAR_URL",
    "POSTS_QUERY",
    "SESSION_QUERY",
    "AuthToggle",
    "CreatePostForm",
    "HomePage",
    "Mutation",
    "MutationState",
    "MutationStatus",
    "PostList",
    "PostboardClient",
    "Query",
    "QueryClient",
    "QueryState",
    "QueryStatus",
    "post_card",
    "post_list_view",
    "render_home_page",
]
