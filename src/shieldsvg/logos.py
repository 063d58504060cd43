"""Logo lookup and embedding.

A logo is given as a simple-icons slug (``rust``), as inline SVG markup or as
a ready-made ``data:`` URI. SVG logos are recolored and embedded as base64
data URIs so the badge stays a single self-contained file.
"""

from __future__ import annotations

import base64
import logging
from functools import lru_cache
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 128
DEFAULT_LOGO_COLOR = "whitesmoke"
SOCIAL_LOGO_COLOR = "#000000"
DATA_URI_PREFIX = "data:image/svg+xml;base64,"

IconProvider = Callable[[str], "str | None"]


def normalize_slug(name: str) -> str:
    return name.strip().lower().replace(" ", "")


def simple_icon_svg(slug: str) -> str | None:
    """SVG markup for a simple-icons slug, or None if there is no such icon."""
    from simpleicons.all import icons

    icon = icons.get(normalize_slug(slug))
    if icon is None:
        return None
    return icon.svg


def colorize_svg(svg: str, color: str) -> str:
    """Set the fill of the root ``<svg>`` element."""
    return svg.replace("<svg", f'<svg fill="{color}"', 1)


def to_data_uri(svg: str) -> str:
    return DATA_URI_PREFIX + base64.b64encode(svg.encode("utf-8")).decode("ascii")


class LogoResolver:
    """Turns logo inputs into embeddable ``href`` values."""

    def __init__(
        self,
        provider: IconProvider = simple_icon_svg,
        maxsize: int = DEFAULT_CACHE_SIZE,
    ):
        self.provider = provider
        self._cached = lru_cache(maxsize=maxsize)(self._resolve)

    def _resolve(self, logo: str, color: str) -> str:
        if logo.startswith("data:"):
            return logo
        if logo.startswith("<svg"):
            svg = logo
        else:
            svg = self.provider(logo)
            if not svg:
                logger.warning("Unknown logo %r, rendering without it", logo)
                return ""
        return to_data_uri(colorize_svg(svg, color))

    def resolve(self, logo: str | None, color: str) -> str:
        """Return the ``href`` for ``logo``, or "" when there is no logo."""
        if logo is None:
            return ""
        logo = logo.strip()
        if not logo:
            return ""
        return self._cached(logo, color)

    def cache_clear(self) -> None:
        self._cached.cache_clear()
