"""Caching context shared by render calls."""

from __future__ import annotations

import threading

from shieldsvg import colors, logos, measurer


class RenderContext:
    """Owns the text, color and logo caches used while rendering.

    Build one per process (or per service instance) and pass it to every
    render call; tests create fresh ones to start from cold caches. The
    caches are safe to share between threads.
    """

    def __init__(
        self,
        text_cache_size: int = measurer.DEFAULT_CACHE_SIZE,
        color_cache_size: int = colors.DEFAULT_CACHE_SIZE,
        icon_provider: logos.IconProvider = logos.simple_icon_svg,
    ):
        self.measurer = measurer.TextMeasurer(maxsize=text_cache_size)
        self.colors = colors.ColorResolver(maxsize=color_cache_size)
        self.logos = logos.LogoResolver(provider=icon_provider)

    @classmethod
    def from_config(cls, config: dict) -> RenderContext:
        """Build a context from config values; missing or null sizes use the defaults."""
        return cls(
            text_cache_size=_cache_size(config, "text_cache_size", measurer.DEFAULT_CACHE_SIZE),
            color_cache_size=_cache_size(config, "color_cache_size", colors.DEFAULT_CACHE_SIZE),
        )

    def clear(self) -> None:
        self.measurer.cache_clear()
        self.colors.cache_clear()
        self.logos.cache_clear()


def _cache_size(config: dict, key: str, default: int) -> int:
    value = config.get(key)
    if value is None:
        return default
    try:
        size = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}") from None
    if size < 0:
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}")
    return size


_default_context: RenderContext | None = None
_default_lock = threading.Lock()


def default_context() -> RenderContext:
    """The process-wide context used when a caller does not pass one."""
    global _default_context
    with _default_lock:
        if _default_context is None:
            _default_context = RenderContext()
        return _default_context
