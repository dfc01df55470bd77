from __future__ import annotations

from collections.abc import Mapping

from repo_view.github.models import LanguageShare

from .colors import ColorTable


def language_percentage(size: int, total: int) -> float:
    if total <= 0:
        raise ValueError("total must be positive")
    return size / total * 100


def aggregate(raw: Mapping[str, int], colors: ColorTable) -> list[LanguageShare]:
    """Turn a ``{language: bytes}`` mapping into display shares.

    Shares are ordered by descending percentage, ties alphabetically. An empty
    mapping or one whose sizes sum to zero yields no shares.
    """
    for name, size in raw.items():
        if size < 0:
            raise ValueError(f"language {name!r} has negative size {size}")

    total = sum(raw.values())
    if total == 0:
        return []

    shares = [
        LanguageShare(
            name=name,
            percentage=language_percentage(size, total),
            color=colors.lookup(name),
        )
        for name, size in raw.items()
    ]
    shares.sort(key=lambda share: (-share.percentage, share.name))
    return shares
