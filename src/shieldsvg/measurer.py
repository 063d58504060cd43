"""Text measurement with a bounded per-context cache."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache

from shieldsvg.metrics import Font, get_text_width

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 1024
# Longer strings are measured every time instead of filling the cache.
MAX_CACHED_TEXT = 1024
# Text nodes are drawn at 10x and scaled back down with scale(.1).
FONT_SCALE_UP_FACTOR = 10


def round_up_to_odd(width: float) -> int:
    """Floor ``width``, then bump even results to the next odd integer.

    Odd text lengths keep the text centre on a half pixel.
    """
    rounded = math.floor(width)
    return rounded + 1 if rounded % 2 == 0 else rounded


@dataclass(frozen=True)
class MeasuredText:
    text: str
    font: Font
    width: float  # unrounded pixels
    pixel_width: int

    @property
    def scaled_width(self) -> int:
        return self.pixel_width * FONT_SCALE_UP_FACTOR


def measure_text(text: str, font: Font) -> MeasuredText:
    """Measure without caching."""
    width = get_text_width(text, font)
    pixel_width = round_up_to_odd(width) if text else 0
    return MeasuredText(text=text, font=font, width=width, pixel_width=pixel_width)


class TextMeasurer:
    """Measures strings, remembering the most recently used results."""

    def __init__(self, maxsize: int = DEFAULT_CACHE_SIZE):
        self.maxsize = maxsize
        self._cached = lru_cache(maxsize=maxsize)(self._measure)
        logger.debug("Text width cache ready (maxsize=%d)", maxsize)

    @staticmethod
    def _measure(font: Font, text: str) -> MeasuredText:
        return measure_text(text, font)

    def measure(self, text: str, font: Font) -> MeasuredText:
        if len(text) > MAX_CACHED_TEXT:
            return measure_text(text, font)
        return self._cached(font, text)

    def cache_info(self):
        return self._cached.cache_info()

    def cache_clear(self) -> None:
        self._cached.cache_clear()
