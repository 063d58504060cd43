"""Fluent construction of badge specs.

    svg = Badge.style("flat").label("build").message("passing").message_color("#4c1").build()
"""

from __future__ import annotations

from dataclasses import replace

from shieldsvg.badge import BadgeSpec, BadgeStyle, render_badge
from shieldsvg.context import RenderContext


class BadgeBuilder:
    """Accumulates badge fields; each setter returns the builder."""

    def __init__(self, style: BadgeStyle | str = BadgeStyle.FLAT):
        self._spec = BadgeSpec(style=BadgeStyle.parse(style))

    @classmethod
    def from_config(cls, config: dict) -> BadgeBuilder:
        """Start from the user's saved defaults (see ``shieldsvg.config``)."""
        builder = cls(config.get("style") or BadgeStyle.FLAT)
        builder._set(
            label_color=config.get("label_color"),
            message_color=config.get("message_color"),
            logo_color=config.get("logo_color"),
        )
        return builder

    def _set(self, **fields) -> BadgeBuilder:
        self._spec = replace(self._spec, **fields)
        return self

    def style(self, style: BadgeStyle | str) -> BadgeBuilder:
        return self._set(style=BadgeStyle.parse(style))

    def label(self, label: str | None) -> BadgeBuilder:
        return self._set(label=label)

    def message(self, message: str) -> BadgeBuilder:
        return self._set(message=message)

    def label_color(self, color: str | None) -> BadgeBuilder:
        return self._set(label_color=color)

    def message_color(self, color: str | None) -> BadgeBuilder:
        return self._set(message_color=color)

    def logo(self, logo: str | None) -> BadgeBuilder:
        return self._set(logo=logo)

    def logo_color(self, color: str | None) -> BadgeBuilder:
        return self._set(logo_color=color)

    def link(self, url: str | None) -> BadgeBuilder:
        return self._set(link=url)

    def extra_link(self, url: str | None) -> BadgeBuilder:
        return self._set(extra_link=url)

    def build_spec(self) -> BadgeSpec:
        return self._spec

    def build(self, context: RenderContext | None = None) -> str:
        return render_badge(self._spec, context)


class Badge:
    """Entry point: ``Badge.style(...)`` starts a new builder."""

    @staticmethod
    def style(style: BadgeStyle | str) -> BadgeBuilder:
        return BadgeBuilder(style)
