from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)


class ColorTable:
    """Read-only language name to display color mapping.

    Lookups never fail: unknown languages, ``null`` colors and a table that
    could not be loaded all resolve to an empty string.
    """

    def __init__(self, colors: Mapping[str, str] | None = None) -> None:
        self._colors = MappingProxyType(dict(colors or {}))

    @classmethod
    def load(cls, path: str | Path) -> "ColorTable":
        try:
            with open(path, encoding="utf-8") as file:
                document = json.load(file)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load language colors from %s: %s", path, exc)
            return cls()

        if not isinstance(document, dict):
            logger.warning("Language colors in %s are not a JSON object", path)
            return cls()
        return cls({name: _extract_color(value) for name, value in document.items()})

    def lookup(self, name: str) -> str:
        return self._colors.get(name, "")

    def __len__(self) -> int:
        return len(self._colors)


def _extract_color(value: Any) -> str:
    # github-colors style entries: {"color": "#00ADD8", "url": "..."}
    if isinstance(value, dict):
        value = value.get("color")
    return value if isinstance(value, str) else ""
