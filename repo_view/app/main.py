from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from repo_view.github.client import GithubClient
from repo_view.github.config import GithubSettings
from repo_view.github.errors import PreconditionError, UpstreamError
from repo_view.github.models import LanguageShare, RepositorySummary
from repo_view.languages.aggregator import aggregate
from repo_view.languages.colors import ColorTable

from .dependencies import get_color_table, get_github_client, get_templates
from .settings import AppSettings
from .views import RenderError, build_language_view, build_repository_view, render

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: AppSettings = app.state.settings
    app.state.color_table = ColorTable.load(settings.colors_path)
    logger.info("Loaded %d language colors from %s", len(app.state.color_table), settings.colors_path)

    client = GithubClient.from_settings(GithubSettings())
    app.state.github_client = client
    try:
        yield
    finally:
        await client.close()


async def handle_upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
    logger.warning("Upstream failure for %s: %s", request.url.path, exc)
    status_code = (
        status.HTTP_504_GATEWAY_TIMEOUT
        if exc.status == status.HTTP_504_GATEWAY_TIMEOUT
        else status.HTTP_502_BAD_GATEWAY
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


async def handle_precondition_error(request: Request, exc: PreconditionError) -> JSONResponse:
    logger.warning("Incomplete upstream payload for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})


async def handle_render_error(request: Request, exc: RenderError) -> JSONResponse:
    logger.error("Rendering failed for %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


async def load_repository(
    client: GithubClient,
    colors: ColorTable,
    owner: str,
    repo: str,
) -> tuple[RepositorySummary, list[LanguageShare]]:
    summary, languages_url = await client.fetch_repository(owner, repo)
    raw = await client.fetch_languages(languages_url)
    return summary, aggregate(raw, colors)


async def hello_page(
    templates: Annotated[Jinja2Templates, Depends(get_templates)],
) -> HTMLResponse:
    return HTMLResponse(render(templates, "hello.html", {"name": "world"}))


async def hello() -> PlainTextResponse:
    return PlainTextResponse("Hello!")


async def health() -> dict[str, str]:
    return {"status": "ok"}


async def repository_page(
    owner: str,
    repo: str,
    client: Annotated[GithubClient, Depends(get_github_client)],
    colors: Annotated[ColorTable, Depends(get_color_table)],
    templates: Annotated[Jinja2Templates, Depends(get_templates)],
) -> HTMLResponse:
    summary, languages = await load_repository(client, colors, owner, repo)
    view = build_repository_view(summary, languages)
    return HTMLResponse(render(templates, "repo.html", view))


async def repository_languages(
    owner: str,
    repo: str,
    client: Annotated[GithubClient, Depends(get_github_client)],
    colors: Annotated[ColorTable, Depends(get_color_table)],
) -> list[dict[str, Any]]:
    _, languages = await load_repository(client, colors, owner, repo)
    return [build_language_view(share) for share in languages]


def register_routes(app: FastAPI) -> None:
    app.add_api_route(
        path="/",
        endpoint=hello_page,
        methods=["GET"],
        name="hello_page",
        response_class=HTMLResponse,
    )
    app.add_api_route(path="/health", endpoint=health, methods=["GET"], name="health")

    router = APIRouter(prefix="/api")
    router.add_api_route(
        path="/hello",
        endpoint=hello,
        methods=["GET"],
        name="hello",
        response_class=PlainTextResponse,
    )
    router.add_api_route(
        path="/repo/{owner}/{repo}",
        endpoint=repository_page,
        methods=["GET"],
        name="repository_page",
        response_class=HTMLResponse,
    )
    router.add_api_route(
        path="/repo/{owner}/{repo}/languages",
        endpoint=repository_languages,
        methods=["GET"],
        name="repository_languages",
    )
    app.include_router(router)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UpstreamError, handle_upstream_error)
    app.add_exception_handler(PreconditionError, handle_precondition_error)
    app.add_exception_handler(RenderError, handle_render_error)


def create_app(settings: AppSettings | None = None) -> FastAPI:
    settings = settings or AppSettings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=settings.title, lifespan=lifespan)
    app.state.settings = settings
    app.state.templates = Jinja2Templates(directory=settings.templates_dir)
    app.mount("/assets", StaticFiles(directory=settings.assets_dir), name="assets")
    register_routes(app)
    register_error_handlers(app)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("repo_view.app.main:create_app", factory=True)
