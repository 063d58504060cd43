"""Badge color parsing, canonicalization and text contrast.

Accepted inputs, in order of precedence:
  - 3 or 6 digit hex, with or without ``#`` (``4c1``, ``#DFB317``)
  - badge color names and their aliases (``brightgreen``, ``critical``)
  - any other CSS Color 4 value in sRGB, HSL or HWB (``white``,
    ``rgb(0 128 0)``, ``rgba(255,0,0,0.5)``, ``hsl(120deg,100%,25%)``,
    ``transparent``)

Hex input is emitted as lowercase hex with its original length, names are
replaced by their hex value and other CSS colors are emitted as written
(trimmed and lowercased). Anything else is reported as unparseable and the
caller's fallback is used instead.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from tinycss2.color4 import Color, parse_color

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 512

DEFAULT_LABEL_COLOR = "#555"
DEFAULT_MESSAGE_COLOR = "#007ec6"

NAMED_COLORS: dict[str, str] = {
    "brightgreen": "#4c1",
    "green": "#97ca00",
    "yellow": "#dfb317",
    "yellowgreen": "#a4a61d",
    "orange": "#fe7d37",
    "red": "#e05d44",
    "blue": "#007ec6",
    "grey": "#555",
    "lightgrey": "#9f9f9f",
}

ALIASES: dict[str, str] = {
    "gray": "grey",
    "lightgray": "lightgrey",
    "critical": "red",
    "important": "orange",
    "success": "brightgreen",
    "informational": "blue",
    "inactive": "lightgrey",
}

LIGHT_TEXT = ("#fff", "#010101")
DARK_TEXT = ("#333", "#ccc")
BRIGHTNESS_THRESHOLD = 0.69

_HEX_RE = re.compile(r"^#?(?:[0-9a-f]{3}|[0-9a-f]{6})$")


@dataclass(frozen=True)
class ResolvedColor:
    svg_color: str
    rgb: tuple[int, int, int]
    text_color: str
    shadow_color: str


def is_valid_hex(value: str) -> bool:
    return bool(_HEX_RE.match(value.lower()))


def parse_rgb(value: str) -> tuple[int, int, int] | None:
    """RGB triple for any supported color string, or None."""
    value = value.strip().lower()
    if not value:
        return None
    if is_valid_hex(value):
        value = "#" + value.lstrip("#")
    else:
        name = ALIASES.get(value, value)
        value = NAMED_COLORS.get(name, value)
    color = parse_color(value)
    if not isinstance(color, Color):
        return None
    try:
        red, green, blue, _alpha = color.to("srgb")
    except NotImplementedError:
        logger.debug("Color space %s has no sRGB conversion: %r", color.space, value)
        return None
    return tuple(round(min(1.0, max(0.0, c)) * 255) for c in (red, green, blue))


def contrast_for(rgb: tuple[int, int, int]) -> tuple[str, str]:
    """(text color, shadow color) legible on a background of ``rgb``."""
    r, g, b = rgb
    brightness = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return LIGHT_TEXT if brightness <= BRIGHTNESS_THRESHOLD else DARK_TEXT


def canonical_svg_color(raw: str) -> str | None:
    """The color string written into the SVG for ``raw``, or None."""
    value = raw.strip().lower()
    if not value:
        return None
    if is_valid_hex(value):
        return "#" + value.lstrip("#")
    if value in NAMED_COLORS:
        return NAMED_COLORS[value]
    if value in ALIASES:
        return NAMED_COLORS[ALIASES[value]]
    if parse_rgb(value) is not None:
        return value
    return None


class ColorResolver:
    """Resolves raw color strings, caching results by the raw input."""

    def __init__(self, maxsize: int = DEFAULT_CACHE_SIZE):
        self.maxsize = maxsize
        self._cached = lru_cache(maxsize=maxsize)(self._resolve)
        logger.debug("Color cache ready (maxsize=%d)", maxsize)

    @staticmethod
    def _resolve(raw: str) -> ResolvedColor | None:
        svg_color = canonical_svg_color(raw)
        if svg_color is None:
            return None
        rgb = parse_rgb(svg_color)
        if rgb is None:
            return None
        text_color, shadow_color = contrast_for(rgb)
        return ResolvedColor(svg_color, rgb, text_color, shadow_color)

    def to_svg_color(self, raw: str | None) -> str | None:
        if raw is None:
            return None
        resolved = self._cached(raw)
        return resolved.svg_color if resolved else None

    def resolve(self, raw: str | None, fallback: str = DEFAULT_LABEL_COLOR) -> ResolvedColor:
        """Resolve ``raw``; unusable input resolves to ``fallback`` instead."""
        resolved = self._cached(raw) if raw is not None else None
        if resolved is None:
            if raw:
                logger.debug("Unrecognised color %r, using %s", raw, fallback)
            resolved = self._cached(fallback)
        if resolved is None:
            raise ValueError(f"Fallback color {fallback!r} is not a valid color")
        return resolved

    def cache_info(self):
        return self._cached.cache_info()

    def cache_clear(self) -> None:
        self._cached.cache_clear()
