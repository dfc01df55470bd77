from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict
from typing import Any

from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from repo_view.github.models import LanguageShare, RepositorySummary


class RenderError(Exception):
    """Raised when a page template cannot be rendered."""


def build_language_view(share: LanguageShare) -> dict[str, Any]:
    return {
        "name": share.name,
        "percentage": share.percentage,
        "percentage_label": f"{share.percentage:.1f}",
        "color": share.color,
    }


def build_repository_view(
    summary: RepositorySummary,
    languages: Sequence[LanguageShare],
) -> dict[str, Any]:
    return {
        "repository": asdict(summary),
        "languages": [build_language_view(share) for share in languages],
        "total_languages": len(languages),
    }


def render(templates: Jinja2Templates, name: str, context: dict[str, Any]) -> str:
    try:
        return templates.get_template(name).render(context)
    except TemplateError as exc:
        raise RenderError(f"Failed to render {name}: {exc}") from exc
