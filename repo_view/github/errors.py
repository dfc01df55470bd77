from __future__ import annotations


class GithubError(Exception):
    """Base class for failures while talking to the GitHub API."""


class UpstreamError(GithubError):
    """GitHub answered with a non-2xx status or a payload we cannot use."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"GitHub API error {status}: {message}")
        self.status = status
        self.message = message


class PreconditionError(GithubError):
    """A field the request depends on is absent from the upstream payload."""
