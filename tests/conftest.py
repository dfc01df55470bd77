"""Shared fixtures: an in-process fake GitHub API and an app wired to it."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest
from aiohttp import test_utils, web

from repo_view.app.main import create_app
from repo_view.app.settings import AppSettings
from repo_view.github.client import GithubClient
from repo_view.languages.colors import ColorTable

TEST_COLORS = {"Go": "#00ADD8", "Rust": "#dea584", "TypeScript": "#3178c6"}


class FakeGithub:
    """Serves ``/repos/{owner}/{repo}`` and its languages from in-memory data."""

    def __init__(self) -> None:
        self.base_url = ""
        self.repositories: dict[str, dict[str, Any]] = {}
        self.languages: dict[str, Any] = {}
        self.requests: list[web.Request] = []

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/repos/{owner}/{repo}", self.get_repository)
        app.router.add_get("/repos/{owner}/{repo}/languages", self.get_languages)
        app.router.add_get("/slow", self.slow)
        return app

    def add_repository(self, owner: str, repo: str, languages: Any, **fields: Any) -> dict[str, Any]:
        payload = {
            "name": repo,
            "owner": {"login": owner},
            "languages_url": f"{self.base_url}/repos/{owner}/{repo}/languages",
        }
        payload.update(fields)
        self.repositories[f"{owner}/{repo}"] = payload
        self.languages[f"{owner}/{repo}"] = languages
        return payload

    async def get_repository(self, request: web.Request) -> web.Response:
        self.requests.append(request)
        payload = self.repositories.get(self._key(request))
        if payload is None:
            return web.json_response({"message": "Not Found"}, status=404)
        return web.json_response(payload)

    async def get_languages(self, request: web.Request) -> web.Response:
        self.requests.append(request)
        body = self.languages.get(self._key(request))
        if body is None:
            return web.json_response({"message": "Not Found"}, status=404)
        if isinstance(body, str):
            return web.Response(text=body, content_type="application/json")
        return web.json_response(body)

    async def slow(self, request: web.Request) -> web.Response:
        await asyncio.sleep(0.5)
        return web.json_response({})

    @staticmethod
    def _key(request: web.Request) -> str:
        return f"{request.match_info['owner']}/{request.match_info['repo']}"


@pytest.fixture
async def fake_github():
    fake = FakeGithub()
    server = test_utils.TestServer(fake.make_app())
    await server.start_server()
    fake.base_url = str(server.make_url("/")).rstrip("/")
    yield fake
    await server.close()


@pytest.fixture
async def github_client(fake_github):
    client = GithubClient(base_url=fake_github.base_url, user_agent="repo-view-tests", timeout=5.0)
    yield client
    await client.close()


@pytest.fixture
def color_table():
    return ColorTable(TEST_COLORS)


@pytest.fixture
def app_settings():
    return AppSettings()


@pytest.fixture
def app(app_settings, github_client, color_table):
    application = create_app(app_settings)
    application.state.github_client = github_client
    application.state.color_table = color_table
    return application


@pytest.fixture
async def http_client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
