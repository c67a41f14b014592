"""Server-rendered home page.

Each request builds a :class:`~postboard.frontend.views.HomePage` over a
request-scoped :class:`~postboard.backend.services.LocalBackend`, drives
it with the submitted form fields or button click, and renders the result.
Successful actions redirect back to ``/`` (post/redirect/get).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from postboard.backend.api.router import (
    clear_session_cookie,
    get_auth_config,
    get_session,
    get_store,
    set_session_cookie,
)
from postboard.backend.services import LocalBackend
from postboard.frontend.render import render_home_page
from postboard.frontend.views import HomePage

logger = logging.getLogger(__name__)

pages_router = APIRouter(include_in_schema=False)


def _build_page(request: Request) -> tuple[HomePage, LocalBackend]:
    backend = LocalBackend(get_store(request), get_auth_config(request), get_session(request))
    site = request.app.state.config.get("site", {})
    page = HomePage(
        backend,
        title=site.get("title", "Postboard"),
        description=site.get("description", ""),
    )
    return page, backend


def _render(page: HomePage, status_code: int = 200) -> HTMLResponse:
    html = render_home_page(page.view())
    page.close()
    return HTMLResponse(html, status_code=status_code)


def _redirect_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


@pages_router.get("/", response_class=HTMLResponse)
async def home(request: Request) -> HTMLResponse:
    page, _ = _build_page(request)
    await page.load()
    return _render(page)


@pages_router.post("/posts")
async def submit_post(
    request: Request,
    title: str = Form(""),
    body: str = Form(""),
) -> Response:
    """Handle the creation form; missing fields submit as empty strings."""
    page, _ = _build_page(request)
    await page.load()

    page.form.set_title(title)
    page.form.set_body(body)
    if page.form.disabled:
        page.close()
        return _redirect_home()

    state = await page.form.submit()
    if state.is_error:
        return _render(page, status_code=400)
    page.close()
    return _redirect_home()


@pages_router.post("/auth/{action}")
async def toggle_auth(action: str, request: Request) -> Response:
    """Run the auth toggle; a button from a stale page is ignored."""
    page, backend = _build_page(request)
    await page.load()
    if page.auth.view().action == action:
        await page.auth.click()
    else:
        logger.debug("Ignoring stale auth action %s", action)
    page.close()

    response = _redirect_home()
    if backend.issued_token is not None:
        set_session_cookie(response, backend.issued_token, backend.auth_cfg)
    elif backend.signed_out:
        clear_session_cookie(response)
    return response
