from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

UNKNOWN: Final[str] = "unknown"
PLACEHOLDER_URL: Final[str] = "/"


@dataclass(slots=True, frozen=True)
class RepositorySummary:
    owner: str
    name: str
    url: str
    avatar_url: str
    open_issues: int
    stars: int
    watchers: int
    forks: int

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "RepositorySummary":
        owner = payload.get("owner")
        if not isinstance(owner, dict):
            owner = {}
        return cls(
            owner=_text(owner.get("login"), UNKNOWN),
            name=_text(payload.get("name"), UNKNOWN),
            url=_text(payload.get("html_url"), PLACEHOLDER_URL),
            avatar_url=_text(owner.get("avatar_url"), PLACEHOLDER_URL),
            open_issues=_count(payload.get("open_issues_count")),
            stars=_count(payload.get("stargazers_count")),
            watchers=_count(payload.get("watchers_count")) or _count(payload.get("watchers")),
            forks=_count(payload.get("forks_count")),
        )


@dataclass(slots=True, frozen=True)
class LanguageShare:
    name: str
    percentage: float
    color: str


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


def _count(value: Any) -> int:
    # bool is an int subclass but never a count
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value
