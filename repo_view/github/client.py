from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

from aiohttp import ClientError, ClientResponseError, ClientSession, ClientTimeout

from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, GITHUB_API_BASE_URL, GithubSettings
from .errors import PreconditionError, UpstreamError
from .models import RepositorySummary

logger = logging.getLogger(__name__)


class GithubClient:
    def __init__(
        self,
        *,
        base_url: str = GITHUB_API_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if not user_agent:
            raise ValueError("user_agent must not be empty")
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent,
        }
        self._base_url = base_url.rstrip("/")
        self._session = ClientSession(headers=headers, timeout=ClientTimeout(total=timeout))

    @classmethod
    def from_settings(cls, settings: GithubSettings | None = None) -> "GithubClient":
        settings = settings or GithubSettings()
        return cls(
            base_url=str(settings.api_base_url),
            user_agent=settings.user_agent,
            timeout=settings.timeout,
        )

    async def __aenter__(self) -> "GithubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._session.closed:
            await self._session.close()

    async def fetch_repository(self, owner: str, repo: str) -> tuple[RepositorySummary, str]:
        if not owner or not repo:
            raise UpstreamError(404, "owner and repository name must not be empty")

        url = f"{self._base_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"
        data = await self._make_request(url)
        if not isinstance(data, dict):
            raise UpstreamError(502, f"unexpected repository payload for {owner}/{repo}")
        if data.get("owner") is not None and not isinstance(data["owner"], dict):
            raise UpstreamError(
                502,
                f"unexpected repository payload for {owner}/{repo}: owner is not an object",
            )

        languages_url = data.get("languages_url")
        if not isinstance(languages_url, str) or not languages_url:
            raise PreconditionError(f"repository {owner}/{repo} payload has no languages_url")
        return RepositorySummary.from_payload(data), languages_url

    async def fetch_languages(self, url: str) -> dict[str, int]:
        data = await self._make_request(url)
        if not isinstance(data, dict):
            raise UpstreamError(502, f"unexpected languages payload from {url}")

        languages: dict[str, int] = {}
        for name, size in data.items():
            # bool is an int subclass but never a byte count
            if isinstance(size, bool) or not isinstance(size, int) or size < 0:
                raise UpstreamError(
                    502,
                    f"unexpected languages payload from {url}: {name!r} has size {size!r}",
                )
            languages[name] = size
        return languages

    async def _make_request(self, url: str, method: str = "GET") -> Any:
        logger.debug("%s %s", method, url)
        try:
            async with self._session.request(method, url) as response:
                response.raise_for_status()
                try:
                    return await response.json(content_type=None)
                except ValueError as exc:
                    raise UpstreamError(
                        response.status,
                        f"invalid JSON in response from {url}: {exc}",
                    ) from exc
        except ClientResponseError as exc:
            text = exc.message or "GitHub API request failed"
            raise UpstreamError(exc.status, f"{method} {url} failed: {text}") from exc
        except asyncio.TimeoutError as exc:
            raise UpstreamError(504, f"{method} {url} timed out") from exc
        except ClientError as exc:
            raise UpstreamError(502, f"network error during {method} {url}") from exc
