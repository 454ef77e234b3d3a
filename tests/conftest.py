"""Root conftest: test infrastructure for all tests.

Provides:
- An in-memory fake GitHub and an httpx client wired to it
- A transport bound to the fake for pipeline tests
- API client over ASGITransport with the shared GitHub client patched
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from codesyncer.services.github.transport import GitHubTransport
from tests.helpers.fake_github import FakeGitHub

TOKEN = "ghp_test_token_12345"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """The code under test is asyncio-based; run anyio tests on asyncio only."""
    return "asyncio"


# ─────────────────────────────────────────────────────────────────────────────
# Fake GitHub
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Empty GitHub account for user 'octocat'."""
    return FakeGitHub()


@pytest.fixture
async def github_http(fake_github: FakeGitHub):
    """httpx.AsyncClient whose requests are answered by fake_github."""
    async with fake_github.client() as client:
        yield client


@pytest.fixture
def transport(github_http) -> GitHubTransport:
    """Authenticated transport talking to fake_github."""
    return GitHubTransport(TOKEN, client=github_http)


# ─────────────────────────────────────────────────────────────────────────────
# API Client
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
async def api_client(github_http):
    """HTTP client for the app, with all GitHub traffic going to fake_github.

    SAFETY: the shared GitHub client is patched so no test reaches the real API.
    """
    from codesyncer.main import app

    with (
        patch(
            "codesyncer.services.github.transport.get_github_client",
            return_value=github_http,
        ),
        patch(
            "codesyncer.services.github.oauth.get_github_client",
            return_value=github_http,
        ),
    ):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {TOKEN}"}
