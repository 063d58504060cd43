"""Badge geometry for each style.

All region widths are whole pixels. Text anchors are in the 10x coordinate
space the text nodes are drawn in (``transform="scale(.1)"``), so a region
centre at 19.5px is written as 195.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from shieldsvg.measurer import FONT_SCALE_UP_FACTOR, TextMeasurer
from shieldsvg.metrics import Font

BADGE_HEIGHT = 20
PLASTIC_HEIGHT = 18
FOR_THE_BADGE_HEIGHT = 28
HORIZONTAL_PADDING = 5
LOGO_WIDTH = 14
LOGO_HEIGHT = 14
LOGO_PADDING = 3
# x of the label link overlay when a logo sits in front of the label
LOGO_LINK_OFFSET = 19
# logo-only badges without a label are pulled 3px to the left
NO_LABEL_LOGO_OFFSET = -3

SOCIAL_INTERNAL_HEIGHT = 19
SOCIAL_LABEL_PADDING = 5
SOCIAL_MESSAGE_PADDING = 4
SOCIAL_GUTTER = 6

FTB_LETTER_SPACING = 1.25
FTB_TEXT_MARGIN = 12
FTB_LOGO_MARGIN = 9
FTB_LOGO_TEXT_GUTTER = 6


class LinkMode(str, Enum):
    NONE = "none"
    WHOLE = "whole"  # one anchor around the whole badge body
    SPLIT = "split"  # label and message regions anchored separately


def link_mode(link: str | None, extra_link: str | None) -> LinkMode:
    """Pick the anchor structure; empty strings count as no link."""
    if extra_link:
        return LinkMode.SPLIT
    if link:
        return LinkMode.WHOLE
    return LinkMode.NONE


def _logo_reservation(label: str | None, has_logo: bool) -> int:
    if not has_logo:
        return 0
    return LOGO_WIDTH + (0 if label == "" else LOGO_PADDING)


@dataclass(frozen=True)
class FlatLayout:
    """Geometry shared by flat, flat-square and plastic."""

    left_width: int
    right_width: int
    total_width: int
    label_x: float
    label_text_length: int
    message_x: float
    message_text_length: int
    label_link_x: int
    label_link_width: int
    message_link_x: int


def layout_flat(
    label: str | None,
    message: str,
    *,
    has_label_color: bool,
    has_logo: bool,
    measurer: TextMeasurer,
) -> FlatLayout:
    total_logo_width = _logo_reservation(label, has_logo)
    has_label = bool(label) or has_label_color
    label_margin = total_logo_width + 1

    label_width = 0
    if has_label and label is not None:
        label_width = measurer.measure(label, Font.VERDANA_11_NORMAL).pixel_width
    message_width = measurer.measure(message, Font.VERDANA_11_NORMAL).pixel_width

    left_width = 0
    if has_label:
        left_width = label_width + 2 * HORIZONTAL_PADDING + total_logo_width
        if label == "":
            left_width -= 1

    offset = NO_LABEL_LOGO_OFFSET if label is None and has_logo else 0
    left_width += offset

    message_margin = left_width - (1 if message else 0)
    if not has_label:
        message_margin += total_logo_width + HORIZONTAL_PADDING if has_logo else 1

    right_width = message_width + 2 * HORIZONTAL_PADDING
    if has_logo and not has_label:
        right_width += total_logo_width + (HORIZONTAL_PADDING - 1 if message else 0)

    total_width = left_width + right_width
    if not has_label_color:
        right_width += offset

    label_x = (
        FONT_SCALE_UP_FACTOR * (label_margin + 0.5 * label_width + HORIZONTAL_PADDING)
        + offset
    )
    message_x = FONT_SCALE_UP_FACTOR * (
        message_margin + 0.5 * message_width + HORIZONTAL_PADDING
    )

    if has_logo and not has_label:
        message_link_x = total_logo_width + HORIZONTAL_PADDING
    else:
        message_link_x = left_width
    if not has_label:
        message_link_x += offset

    return FlatLayout(
        left_width=max(left_width, 0),
        right_width=right_width,
        total_width=total_width,
        label_x=label_x,
        label_text_length=label_width * FONT_SCALE_UP_FACTOR,
        message_x=message_x,
        message_text_length=message_width * FONT_SCALE_UP_FACTOR,
        label_link_x=LOGO_LINK_OFFSET if has_logo else 0,
        label_link_width=label_width + 2 * HORIZONTAL_PADDING,
        message_link_x=message_link_x,
    )


def capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


@dataclass(frozen=True)
class SocialLayout:
    label: str
    left_width: int
    right_width: int
    total_width: int
    label_rect_width: int
    message_rect_width: int
    message_bubble_main_x: float
    message_bubble_notch_x: int
    label_text_x: float
    label_text_length: int
    message_text_x: float
    message_text_length: int
    has_message: bool


def layout_social(
    label: str | None,
    message: str,
    *,
    has_logo: bool,
    measurer: TextMeasurer,
) -> SocialLayout:
    offset = NO_LABEL_LOGO_OFFSET if label is None and has_logo else 0
    total_logo_width = _logo_reservation(label, has_logo)
    shown_label = capitalize(label or "")

    label_text_width = measurer.measure(shown_label, Font.HELVETICA_11_BOLD).pixel_width
    message_text_width = measurer.measure(message, Font.HELVETICA_11_BOLD).pixel_width

    label_rect_width = (
        label_text_width + total_logo_width + 2 * SOCIAL_LABEL_PADDING + offset
    )
    message_rect_width = message_text_width + 2 * SOCIAL_MESSAGE_PADDING
    has_message = bool(message)

    label_text_x = FONT_SCALE_UP_FACTOR * (
        total_logo_width + label_text_width / 2 + SOCIAL_LABEL_PADDING + offset
    )
    message_text_x = FONT_SCALE_UP_FACTOR * (
        label_rect_width + SOCIAL_GUTTER + message_rect_width / 2
    )

    left_width = label_rect_width + 1
    right_width = SOCIAL_GUTTER + message_rect_width if has_message else 0

    return SocialLayout(
        label=shown_label,
        left_width=left_width,
        right_width=right_width,
        total_width=left_width + right_width,
        label_rect_width=label_rect_width,
        message_rect_width=message_rect_width,
        message_bubble_main_x=label_rect_width + SOCIAL_GUTTER + 0.5,
        message_bubble_notch_x=label_rect_width + SOCIAL_GUTTER,
        label_text_x=label_text_x,
        label_text_length=FONT_SCALE_UP_FACTOR * label_text_width,
        message_text_x=message_text_x,
        message_text_length=FONT_SCALE_UP_FACTOR * message_text_width,
        has_message=has_message,
    )


@dataclass(frozen=True)
class ForTheBadgeLayout:
    label: str
    message: str
    left_width: int
    right_width: int
    total_width: int
    label_x: float
    label_text_length: int
    message_x: float
    message_text_length: int
    logo_x: int


def _spaced_width(text: str, font: Font, measurer: TextMeasurer) -> int:
    if not text:
        return 0
    width = measurer.measure(text, font).width + FTB_LETTER_SPACING * len(text)
    return math.trunc(width)


def layout_for_the_badge(
    label: str | None,
    message: str,
    *,
    has_logo: bool,
    measurer: TextMeasurer,
) -> ForTheBadgeLayout:
    label = (label or "").upper()
    message = message.upper()
    label_text_width = _spaced_width(label, Font.VERDANA_10_NORMAL, measurer)
    message_text_width = _spaced_width(message, Font.VERDANA_10_BOLD, measurer)

    has_label = bool(label)
    no_text = not has_label and not message
    need_label_rect = has_label or has_logo
    gutter = FTB_LOGO_TEXT_GUTTER - FTB_LOGO_MARGIN if no_text else FTB_LOGO_TEXT_GUTTER

    if has_logo:
        logo_x = FTB_LOGO_MARGIN
        label_text_min_x = FTB_LOGO_MARGIN + LOGO_WIDTH + gutter
    else:
        logo_x = 0
        label_text_min_x = FTB_TEXT_MARGIN

    if need_label_rect:
        if has_label:
            label_rect_width = label_text_min_x + label_text_width + FTB_TEXT_MARGIN
        else:
            label_rect_width = 2 * FTB_LOGO_MARGIN + LOGO_WIDTH
        message_text_min_x = label_rect_width + FTB_TEXT_MARGIN
        message_rect_width = 2 * FTB_TEXT_MARGIN + message_text_width
    else:
        label_rect_width = 0
        message_text_min_x = FTB_TEXT_MARGIN
        message_rect_width = 2 * FTB_TEXT_MARGIN + message_text_width

    label_mid_x = label_text_min_x + 0.5 * label_text_width
    message_mid_x = message_text_min_x + 0.5 * message_text_width

    return ForTheBadgeLayout(
        label=label,
        message=message,
        left_width=label_rect_width,
        right_width=message_rect_width,
        total_width=label_rect_width + message_rect_width,
        label_x=FONT_SCALE_UP_FACTOR * label_mid_x,
        label_text_length=FONT_SCALE_UP_FACTOR * label_text_width,
        message_x=FONT_SCALE_UP_FACTOR * message_mid_x,
        message_text_length=FONT_SCALE_UP_FACTOR * message_text_width,
        logo_x=logo_x,
    )
