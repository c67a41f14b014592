"""
End-to-end tests: the view-model driven through ``PostboardClient`` against
the real application over ``httpx.ASGITransport``.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from postboard.backend.schemas import PostCreateIn, SignInIn
from postboard.frontend.client import PostboardClient
from postboard.frontend.views import HomePage


def run_with_client(app, scenario):
    """Run ``scenario(client)`` with a client whose cookie jar acts as one browser."""

    async def runner():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
            return await scenario(PostboardClient(http=http))

    return asyncio.run(runner())


class TestClientProcedures:
    def test_round_trip(self, app) -> None:
        async def scenario(client: PostboardClient):
            assert await client.get_session() is None
            session = await client.sign_in(SignInIn(name="Ada"))
            created = await client.create_post(PostCreateIn(title="Hello", body="World"))
            posts = await client.get_all_posts()
            await client.sign_out()
            return session, created, posts, await client.get_session()

        session, created, posts, after = run_with_client(app, scenario)
        assert session.user.name == "Ada"
        assert created.author.name == "Ada"
        assert created.created_at.tzinfo is not None
        assert [p.id for p in posts] == [created.id]
        assert after is None

    def test_create_without_session_raises(self, app) -> None:
        async def scenario(client: PostboardClient):
            await client.create_post(PostCreateIn(title="x", body="y"))

        with pytest.raises(httpx.HTTPStatusError) as excinfo:
            run_with_client(app, scenario)
        assert excinfo.value.response.status_code == 401


class TestHomePageFlows:
    def test_anonymous_typing_keeps_submit_disabled(self, app) -> None:
        async def scenario(client: PostboardClient):
            page = HomePage(client)
            await page.load()
            page.form.set_title("Typed while signed out")
            state = await page.form.submit()
            return page.view(), state

        view, state = run_with_client(app, scenario)
        assert view.form.title == "Typed while signed out"
        assert view.form.body == ""
        assert view.form.disabled
        assert view.form.button_label == "You must be signed in to post"
        assert not state.is_error

    def test_signed_in_submit_creates_and_refreshes(self, app) -> None:
        async def scenario(client: PostboardClient):
            await client.sign_in(SignInIn(name="Ada"))
            page = HomePage(client)
            await page.load()
            assert page.view().posts.cards == ()

            page.form.set_title("Hello")
            page.form.set_body("World")
            state = await page.form.submit()
            await page.posts.load()
            return page.view(), state

        view, state = run_with_client(app, scenario)
        assert state.data.title == "Hello"
        assert (view.form.title, view.form.body) == ("", "")
        assert [(c.title, c.body, c.author_name) for c in view.posts.cards] == [("Hello", "World", "Ada")]

    def test_sign_in_flips_toggle_and_enables_form(self, app) -> None:
        async def scenario(client: PostboardClient):
            page = HomePage(client)
            await page.load()
            before = page.view()
            await page.auth.click()
            after_in = page.view()
            await page.auth.click()
            return before, after_in, page.view()

        before, after_in, after_out = run_with_client(app, scenario)
        assert (before.auth.label, before.form.disabled) == ("Sign in", True)
        assert (after_in.auth.label, after_in.form.disabled) == ("Sign out", False)
        assert (after_out.auth.label, after_out.form.disabled) == ("Sign in", True)

    def test_server_failure_keeps_fields(self, app) -> None:
        async def scenario(client: PostboardClient):
            page = HomePage(client)
            await page.load()
            await page.auth.click()
            # session expires server-side between render and submit
            await client.http.post("/api/auth/signout")
            page.form.set_title("Hello")
            page.form.set_body("World")
            await page.form.submit()
            return page.view()

        view = run_with_client(app, scenario)
        assert (view.form.title, view.form.body) == ("Hello", "World")
        assert view.form.error is not None
        assert "401" in view.form.error
