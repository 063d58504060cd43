"""SVG badge rendering.

One skeleton per style. Every skeleton is a single line of markup with a
fixed attribute order, so the same spec always renders to the same bytes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable
from xml.sax.saxutils import escape

from shieldsvg.colors import DEFAULT_LABEL_COLOR, DEFAULT_MESSAGE_COLOR, ResolvedColor
from shieldsvg.context import RenderContext, default_context
from shieldsvg.layout import (
    BADGE_HEIGHT,
    FOR_THE_BADGE_HEIGHT,
    LOGO_HEIGHT,
    LOGO_WIDTH,
    PLASTIC_HEIGHT,
    SOCIAL_INTERNAL_HEIGHT,
    LinkMode,
    capitalize,
    layout_flat,
    layout_for_the_badge,
    layout_social,
    link_mode,
)
from shieldsvg.logos import DEFAULT_LOGO_COLOR, SOCIAL_LOGO_COLOR

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
VERDANA_FAMILY = "Verdana,Geneva,DejaVu Sans,sans-serif"
HELVETICA_FAMILY = "Helvetica Neue,Helvetica,Arial,sans-serif"
TRANSPARENT = "rgba(0,0,0,0)"

_ENTITIES = {'"': "&quot;", "'": "&apos;"}


class BadgeStyle(str, Enum):
    FLAT = "flat"
    FLAT_SQUARE = "flat-square"
    PLASTIC = "plastic"
    SOCIAL = "social"
    FOR_THE_BADGE = "for-the-badge"

    @classmethod
    def parse(cls, value: str | BadgeStyle) -> BadgeStyle:
        """Look up a style by name, case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(style.value for style in cls)
            raise ValueError(f"Unknown badge style {value!r} (choose from {choices})") from None


@dataclass(frozen=True)
class BadgeSpec:
    """Everything needed to draw one badge.

    ``label=None`` means no label at all, which differs from ``label=""``
    only in how a lone logo is positioned. Colors, logo and links are raw
    user input; they are resolved at render time and never rejected.
    """

    style: BadgeStyle = BadgeStyle.FLAT
    label: str | None = None
    message: str = ""
    label_color: str | None = None
    message_color: str | None = None
    logo: str | None = None
    logo_color: str | None = None
    link: str | None = None
    extra_link: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "style", BadgeStyle.parse(self.style))
        if self.message is None:
            object.__setattr__(self, "message", "")

    @property
    def link_mode(self) -> LinkMode:
        return link_mode(self.link, self.extra_link)


def xml_escape(text: str) -> str:
    return escape(text, _ENTITIES)


def fmt(value: float) -> str:
    """Format a coordinate: ``595.0`` -> ``595``, ``592.5`` -> ``592.5``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def accessible_text(label: str | None, message: str) -> str:
    if label:
        return f"{label}: {message}"
    return message


def badge_title(spec: BadgeSpec) -> str:
    """The accessible text of a rendered badge, with the label as drawn."""
    label = spec.label
    if spec.style is BadgeStyle.SOCIAL:
        label = capitalize(label or "")
    elif spec.style is BadgeStyle.FOR_THE_BADGE:
        label = (label or "").upper()
    return accessible_text(label, spec.message)


@dataclass(frozen=True)
class _Paint:
    label: ResolvedColor
    message: ResolvedColor
    has_label_color: bool


def _paint(spec: BadgeSpec, context: RenderContext, has_logo: bool) -> _Paint:
    message = context.colors.resolve(spec.message_color, fallback=DEFAULT_MESSAGE_COLOR)
    has_label_color = bool(spec.label_color)
    if has_label_color:
        label = context.colors.resolve(spec.label_color, fallback=DEFAULT_LABEL_COLOR)
    elif not spec.label and not has_logo:
        label = message
    else:
        label = context.colors.resolve(DEFAULT_LABEL_COLOR)
    return _Paint(label=label, message=message, has_label_color=has_label_color)


def _logo_href(spec: BadgeSpec, context: RenderContext, default_color: str) -> str:
    if not spec.logo:
        return ""
    color = context.colors.to_svg_color(spec.logo_color)
    if color is None:
        color = context.colors.to_svg_color(default_color)
    return context.logos.resolve(spec.logo, color)


def _image(href: str, x: int, y: int) -> str:
    if not href:
        return ""
    return (
        f'<image x="{x}" y="{y}" width="{LOGO_WIDTH}" height="{LOGO_HEIGHT}" '
        f'href="{xml_escape(href)}"/>'
    )


def _anchor(href: str, content: str) -> str:
    return f'<a target="_blank" href="{xml_escape(href)}">{content}</a>'


def _link_rect(width: int, height: int, x: int = 0) -> str:
    position = f' x="{x}"' if x else ""
    return f'<rect width="{width}" height="{height}"{position} fill="{TRANSPARENT}"/>'


def _wrap(spec: BadgeSpec, width: int, height: int, title: str, body: str) -> str:
    size = f'xmlns="{SVG_NS}" width="{width}" height="{height}"'
    mode = spec.link_mode
    if mode is LinkMode.SPLIT:
        return f"<svg {size}>{body}</svg>"
    if mode is LinkMode.WHOLE:
        body = _anchor(spec.link, body)
    title = xml_escape(title)
    return f'<svg {size} role="img" aria-label="{title}"><title>{title}</title>{body}</svg>'


def _shadowed_text(
    text: str, x: float, length: int, color: ResolvedColor, shadow_y: int, text_y: int
) -> str:
    text = xml_escape(text)
    return (
        f'<text aria-hidden="true" x="{fmt(x)}" y="{shadow_y}" fill="{color.shadow_color}" '
        f'fill-opacity=".3" transform="scale(.1)" textLength="{length}">{text}</text>'
        f'<text x="{fmt(x)}" y="{text_y}" transform="scale(.1)" fill="{color.text_color}" '
        f'textLength="{length}">{text}</text>'
    )


def _plain_text(text: str, x: float, length: int, color: ResolvedColor, text_y: int) -> str:
    return (
        f'<text x="{fmt(x)}" y="{text_y}" transform="scale(.1)" fill="{color.text_color}" '
        f'textLength="{length}">{xml_escape(text)}</text>'
    )


_FLAT_GRADIENT = (
    '<linearGradient id="s" x2="0" y2="100%">'
    '<stop offset="0" stop-color="#bbb" stop-opacity=".1"/>'
    '<stop offset="1" stop-opacity=".1"/>'
    "</linearGradient>"
)

_PLASTIC_GRADIENT = (
    '<linearGradient id="b" x2="0" y2="100%">'
    '<stop offset="0" stop-color="#fff" stop-opacity=".7"/>'
    '<stop offset=".1" stop-color="#aaa" stop-opacity=".1"/>'
    '<stop offset=".9" stop-opacity=".3"/>'
    '<stop offset="1" stop-opacity=".5"/>'
    "</linearGradient>"
)


@dataclass(frozen=True)
class _FlatSkin:
    height: int
    gradient: str
    gradient_id: str
    radius: int
    shadow_y: int
    text_y: int
    logo_y: int


_FLAT_SKINS: dict[BadgeStyle, _FlatSkin] = {
    BadgeStyle.FLAT: _FlatSkin(BADGE_HEIGHT, _FLAT_GRADIENT, "s", 3, 150, 140, 3),
    BadgeStyle.PLASTIC: _FlatSkin(PLASTIC_HEIGHT, _PLASTIC_GRADIENT, "b", 4, 140, 130, 2),
    # no gradient, no corners, no text shadow
    BadgeStyle.FLAT_SQUARE: _FlatSkin(BADGE_HEIGHT, "", "", 0, 0, 140, 3),
}


def _render_flat_family(spec: BadgeSpec, context: RenderContext) -> str:
    skin = _FLAT_SKINS[spec.style]
    height = skin.height
    logo = _logo_href(spec, context, DEFAULT_LOGO_COLOR)
    paint = _paint(spec, context, has_logo=bool(logo))
    geo = layout_flat(
        spec.label,
        spec.message,
        has_label_color=paint.has_label_color,
        has_logo=bool(logo),
        measurer=context.measurer,
    )

    rects = ""
    if geo.left_width:
        rects += f'<rect width="{geo.left_width}" height="{height}" fill="{paint.label.svg_color}"/>'
    rects += (
        f'<rect x="{geo.left_width}" width="{geo.right_width}" height="{height}" '
        f'fill="{paint.message.svg_color}"/>'
    )
    if skin.gradient:
        background = (
            f"{skin.gradient}"
            f'<clipPath id="r"><rect width="{geo.total_width}" height="{height}" '
            f'rx="{skin.radius}" fill="#fff"/></clipPath>'
            f'<g clip-path="url(#r)">{rects}'
            f'<rect width="{geo.total_width}" height="{height}" fill="url(#{skin.gradient_id})"/></g>'
        )
    else:
        background = f'<g shape-rendering="crispEdges">{rects}</g>'

    def text(value: str, x: float, length: int, color: ResolvedColor) -> str:
        if skin.shadow_y:
            return _shadowed_text(value, x, length, color, skin.shadow_y, skin.text_y)
        return _plain_text(value, x, length, color, skin.text_y)

    label_nodes = ""
    if spec.label:
        label_nodes = text(spec.label, geo.label_x, geo.label_text_length, paint.label)
    message_nodes = ""
    if spec.message:
        message_nodes = text(spec.message, geo.message_x, geo.message_text_length, paint.message)

    if spec.link_mode is LinkMode.SPLIT:
        if spec.link and geo.left_width:
            label_nodes = _anchor(
                spec.link,
                _link_rect(geo.label_link_width, height, geo.label_link_x) + label_nodes,
            )
        message_nodes = _anchor(
            spec.extra_link,
            _link_rect(geo.right_width, height, geo.message_link_x) + message_nodes,
        )

    body = (
        f"{background}"
        f'<g fill="#fff" text-anchor="middle" font-family="{VERDANA_FAMILY}" '
        f'text-rendering="geometricPrecision" font-size="110">'
        f"{_image(logo, 5, skin.logo_y)}{label_nodes}{message_nodes}</g>"
    )
    return _wrap(spec, geo.total_width, height, badge_title(spec), body)


_SOCIAL_DEFS = (
    "<style>a:hover #llink{fill:url(#b);stroke:#ccc}a:hover #rlink{fill:#4183c4}</style>"
    '<linearGradient id="a" x2="0" y2="100%">'
    '<stop offset="0" stop-color="#fcfcfc" stop-opacity="0"/>'
    '<stop offset="1" stop-opacity=".1"/>'
    "</linearGradient>"
    '<linearGradient id="b" x2="0" y2="100%">'
    '<stop offset="0" stop-color="#ccc" stop-opacity=".1"/>'
    '<stop offset="1" stop-opacity=".1"/>'
    "</linearGradient>"
)


def _render_social(spec: BadgeSpec, context: RenderContext) -> str:
    logo = _logo_href(spec, context, SOCIAL_LOGO_COLOR)
    geo = layout_social(
        spec.label, spec.message, has_logo=bool(logo), measurer=context.measurer
    )
    height = BADGE_HEIGHT
    inner = SOCIAL_INTERNAL_HEIGHT
    mode = spec.link_mode

    shapes = (
        f'<rect stroke="none" fill="#fcfcfc" x=".5" y=".5" width="{geo.label_rect_width}" '
        f'height="{inner}" rx="2"/>'
    )
    if geo.has_message:
        main_x = fmt(geo.message_bubble_main_x)
        shapes += (
            f'<rect x="{main_x}" y=".5" width="{geo.message_rect_width}" height="{inner}" '
            f'rx="2" fill="#fafafa"/>'
            f'<rect x="{geo.message_bubble_notch_x}" y="7.5" width=".5" height="5" stroke="#fafafa"/>'
            f'<path d="M{main_x} 6.5 l-3 3v1 l3 3" stroke="#d5d5d5" fill="#fafafa"/>'
        )

    texts = (
        f'<rect id="llink" stroke="#d5d5d5" fill="url(#a)" x=".5" y=".5" '
        f'width="{geo.label_rect_width}" height="{inner}" rx="2"/>'
    )
    if geo.label:
        label = xml_escape(geo.label)
        texts += (
            f'<text aria-hidden="true" x="{fmt(geo.label_text_x)}" y="150" fill="#fff" '
            f'transform="scale(.1)" textLength="{geo.label_text_length}">{label}</text>'
            f'<text x="{fmt(geo.label_text_x)}" y="140" transform="scale(.1)" '
            f'textLength="{geo.label_text_length}">{label}</text>'
        )
    if geo.has_message:
        message = xml_escape(spec.message)
        texts += (
            f'<text aria-hidden="true" x="{fmt(geo.message_text_x)}" y="150" fill="#fff" '
            f'transform="scale(.1)" textLength="{geo.message_text_length}">{message}</text>'
            f'<text id="rlink" x="{fmt(geo.message_text_x)}" y="140" transform="scale(.1)" '
            f'textLength="{geo.message_text_length}">{message}</text>'
        )

    links = ""
    if mode is LinkMode.SPLIT:
        if spec.link:
            links += _anchor(spec.link, _link_rect(geo.left_width, height))
        if geo.has_message:
            links += _anchor(spec.extra_link, _link_rect(geo.right_width, height, geo.left_width))

    aria_hidden = "false" if mode is LinkMode.SPLIT else "true"
    body = (
        f"{_SOCIAL_DEFS}"
        f'<g stroke="#d5d5d5">{shapes}</g>'
        f"{_image(logo, 5, 3)}"
        f'<g aria-hidden="{aria_hidden}" fill="#333" text-anchor="middle" '
        f'font-family="{HELVETICA_FAMILY}" text-rendering="geometricPrecision" '
        f'font-weight="700" font-size="110px" line-height="14px">{texts}</g>'
        f"{links}"
    )
    return _wrap(spec, geo.total_width, height, badge_title(spec), body)


def _render_for_the_badge(spec: BadgeSpec, context: RenderContext) -> str:
    logo = _logo_href(spec, context, DEFAULT_LOGO_COLOR)
    paint = _paint(spec, context, has_logo=bool(logo))
    geo = layout_for_the_badge(
        spec.label,
        spec.message,
        has_logo=bool(logo),
        measurer=context.measurer,
    )
    height = FOR_THE_BADGE_HEIGHT

    rects = ""
    if geo.left_width:
        rects += f'<rect width="{geo.left_width}" height="{height}" fill="{paint.label.svg_color}"/>'
    rects += (
        f'<rect x="{geo.left_width}" width="{geo.right_width}" height="{height}" '
        f'fill="{paint.message.svg_color}"/>'
    )

    label_nodes = ""
    if geo.label:
        label_nodes = (
            f'<text transform="scale(.1)" x="{fmt(geo.label_x)}" y="175" '
            f'textLength="{geo.label_text_length}" fill="{paint.label.text_color}">'
            f"{xml_escape(geo.label)}</text>"
        )
    message_nodes = ""
    if geo.message:
        message_nodes = (
            f'<text transform="scale(.1)" x="{fmt(geo.message_x)}" y="175" '
            f'textLength="{geo.message_text_length}" fill="{paint.message.text_color}" '
            f'font-weight="bold">{xml_escape(geo.message)}</text>'
        )

    if spec.link_mode is LinkMode.SPLIT:
        if spec.link and geo.left_width:
            label_nodes = _anchor(spec.link, _link_rect(geo.left_width, height) + label_nodes)
        message_nodes = _anchor(
            spec.extra_link,
            _link_rect(geo.right_width, height, geo.left_width) + message_nodes,
        )

    body = (
        f'<g shape-rendering="crispEdges">{rects}</g>'
        f'<g fill="#fff" text-anchor="middle" font-family="{VERDANA_FAMILY}" '
        f'text-rendering="geometricPrecision" font-size="100">'
        f"{_image(logo, geo.logo_x, 7)}{label_nodes}{message_nodes}</g>"
    )
    return _wrap(spec, geo.total_width, height, badge_title(spec), body)


Renderer = Callable[[BadgeSpec, RenderContext], str]

_RENDERERS: dict[BadgeStyle, Renderer] = {
    BadgeStyle.FLAT: _render_flat_family,
    BadgeStyle.FLAT_SQUARE: _render_flat_family,
    BadgeStyle.PLASTIC: _render_flat_family,
    BadgeStyle.SOCIAL: _render_social,
    BadgeStyle.FOR_THE_BADGE: _render_for_the_badge,
}


def render_badge(spec: BadgeSpec, context: RenderContext | None = None) -> str:
    """Render ``spec`` to an SVG document string."""
    if context is None:
        context = default_context()
    svg = _RENDERERS[spec.style](spec, context)
    logger.debug("Rendered %s badge (%d bytes)", spec.style.value, len(svg))
    return svg
