from __future__ import annotations

from fastapi import HTTPException, Request, status
from fastapi.templating import Jinja2Templates

from repo_view.github.client import GithubClient
from repo_view.languages.colors import ColorTable


def get_github_client(request: Request) -> GithubClient:
    client = getattr(request.app.state, "github_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="GitHub client is not initialized",
        )
    return client


def get_color_table(request: Request) -> ColorTable:
    table = getattr(request.app.state, "color_table", None)
    # an unloaded table degrades to empty colors
    return table if table is not None else ColorTable()


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates
