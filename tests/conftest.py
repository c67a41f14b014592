"""Shared pytest fixtures for the test suite.

Import any of these in a test file by simply declaring the fixture name as a
parameter — pytest discovers them automatically from this conftest.py.

Fixture overview
----------------
minimal_config  — default configuration with a fixed secret and no seed posts
app             — FastAPI application built from ``minimal_config``
client          — ``TestClient`` bound to ``app`` (one cookie jar per test)
signed_in       — a ``SessionOut`` for "Ada" with an avatar image
backend         — ``FakeBackend`` with no posts and no session
make_post       — factory for ``PostOut`` records
restore_logging — puts the root logger back after a test reconfigures it
"""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from postboard.backend.api.app import create_app
from postboard.backend.core.utils.config import get_default_config
from postboard.backend.schemas import SessionOut

from tests.fakes import FakeBackend, build_post, build_session

# ── Configuration / application ─────────────────────────────────────────────


@pytest.fixture
def minimal_config() -> dict:
    cfg = get_default_config()
    cfg["auth"]["secret"] = "test-secret"
    cfg["auth"]["demo_user"] = {"name": "Demo User", "image": None}
    cfg["seed_posts"] = []
    return cfg


@pytest.fixture
def app(minimal_config: dict):
    return create_app(minimal_config)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


# ── View-model ──────────────────────────────────────────────────────────────


@pytest.fixture
def signed_in() -> SessionOut:
    return build_session()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def make_post():
    return build_post


# ── Logging ─────────────────────────────────────────────────────────────────


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
