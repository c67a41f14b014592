"""
HTML rendering of the home page view.

Pure functions from the frozen views in :mod:`postboard.frontend.views` to
HTML strings. Forms post back to the page routes so the page works without
client-side scripting.
"""

from __future__ import annotations

from html import escape

from postboard.frontend.views import (
    LOADING_TEXT,
    AuthButtonView,
    CreatePostFormView,
    HomePageView,
    PostCardView,
    PostListView,
)


def _attr(value: str) -> str:
    return escape(value, quote=True)


def _error(message: str) -> str:
    return f'<div role="alert" class="text-red-600 text-sm">{escape(message)}</div>'


def render_post_card(card: PostCardView) -> str:
    return "\n".join(
        [
            f'<div class="shadow-xl rounded-lg p-4 w-80 flex flex-col gap-4" data-post-id="{_attr(card.key)}">',
            '  <div class="flex items-center gap-2">',
            f'    <img src="{_attr(card.avatar_src)}" alt="{_attr(card.avatar_alt)}" '
            'width="100" height="100" class="h-16 w-16 rounded-full">',
            "    <div>",
            f'      <h3 class="text-gray-900 font-medium text-lg">{escape(card.author_name)}</h3>',
            f'      <p class="text-gray-500 text-sm">{escape(card.created_label)}</p>',
            "    </div>",
            "  </div>",
            '  <div class="flex flex-col gap-1">',
            f'    <h3 class="text-lg font-medium text-gray-900">{escape(card.title)}</h3>',
            f'    <p class="max-w-2xl text-sm text-gray-500">{escape(card.body)}</p>',
            "  </div>",
            "</div>",
        ]
    )


def render_post_list(view: PostListView) -> str:
    if view.error is not None:
        return _error(f"Could not load posts: {view.error}")
    if view.is_loading:
        return f'<div class="loading">{LOADING_TEXT}</div>'
    cards = "\n".join(render_post_card(card) for card in view.cards)
    return f'<div class="grid grid-cols-3 gap-4 py-8">\n{cards}\n</div>'


def render_create_form(view: CreatePostFormView) -> str:
    disabled = " disabled" if view.disabled else ""
    muted = " bg-purple-100" if view.button_muted else ""
    parts = [
        '<form method="post" action="/posts" class="shadow-xl rounded-lg p-4 flex w-full flex-col gap-4">',
        f'  <h3 class="text-lg font-medium text-gray-900 border-b-[2px]">{escape(view.heading)}</h3>',
        '  <div class="flex gap-4">',
        '    <div class="flex flex-col gap-1 w-1/3">',
        '      <label for="title">Title</label>',
        f'      <input id="title" name="title" class="border border-gray-300 rounded-md p-2" '
        f'value="{_attr(view.title)}"{disabled}>',
        "    </div>",
        '    <div class="flex flex-col gap-1 flex-1">',
        '      <label for="body">Body</label>',
        f'      <input id="body" name="body" class="border border-gray-300 rounded-md p-2" '
        f'value="{_attr(view.body)}"{disabled}>',
        "    </div>",
        "  </div>",
        f'  <button type="submit" class="bg-purple-300 text-white rounded-md p-2{muted}"{disabled}>'
        f"{escape(view.button_label)}</button>",
    ]
    if view.error is not None:
        parts.append("  " + _error(f"Could not create post: {view.error}"))
    parts.append("</form>")
    return "\n".join(parts)


def render_auth_toggle(view: AuthButtonView) -> str:
    parts = [
        '<div class="flex flex-col items-center justify-center gap-2">',
        f'  <form method="post" action="/auth/{view.action}">',
        '    <button type="submit" class="px-4 py-2 border border-black text-xl rounded-md '
        f'bg-violet-50 hover:bg-violet-100 shadow-lg">{escape(view.label)}</button>',
        "  </form>",
    ]
    if view.error is not None:
        parts.append("  " + _error(view.error))
    parts.append("</div>")
    return "\n".join(parts)


def render_home_page(view: HomePageView) -> str:
    """Render the full HTML document for the home page."""
    return "\n".join(
        [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '  <meta charset="utf-8">',
            f"  <title>{escape(view.title)}</title>",
            f'  <meta name="description" content="{_attr(view.description)}">',
            '  <link rel="icon" href="/favicon.ico">',
            '  <script src="https://cdn.tailwindcss.com"></script>',
            "</head>",
            "<body>",
            '<main class="container flex flex-col items-center min-h-screen p-16 mx-auto max-w-6xl">',
            '  <h1 class="text-5xl md:text-[5rem] leading-normal font-extrabold text-gray-700">'
            f"{escape(view.title)}</h1>",
            render_create_form(view.form),
            '<div class="flex items-center justify-center pt-6 text-2xl text-blue-500">',
            render_post_list(view.posts),
            "</div>",
            render_auth_toggle(view.auth),
            "</main>",
            "</body>",
            "</html>",
        ]
    )
