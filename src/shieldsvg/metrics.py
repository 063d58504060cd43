"""Static glyph advance widths for the fonts badges are laid out in.

Widths are stored per face in font design units under ``fonts/`` and scaled
to pixels by ``size / units_per_em``. The tables are loaded once per process
and never change afterwards.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

FONTS_DIR: Path = Path(__file__).parent / "fonts"

# Character whose advance stands in for anything missing from a table.
EM_GUESS_CHAR = "m"


class MetricsError(RuntimeError):
    """Raised when a bundled width table is missing or malformed."""


class Font(str, Enum):
    VERDANA_11_NORMAL = "verdana-11-normal"
    HELVETICA_11_BOLD = "helvetica-11-bold"
    VERDANA_10_NORMAL = "verdana-10-normal"
    VERDANA_10_BOLD = "verdana-10-bold"

    @property
    def face(self) -> str:
        return _FONT_FACES[self][0]

    @property
    def size(self) -> int:
        return _FONT_FACES[self][1]


_FONT_FACES: dict[Font, tuple[str, int]] = {
    Font.VERDANA_11_NORMAL: ("verdana-normal", 11),
    Font.HELVETICA_11_BOLD: ("helvetica-bold", 11),
    Font.VERDANA_10_NORMAL: ("verdana-normal", 10),
    Font.VERDANA_10_BOLD: ("verdana-bold", 10),
}


def is_control_char(code: int) -> bool:
    """ASCII control characters take no horizontal space."""
    return code <= 31 or code == 127


@dataclass(frozen=True)
class CharWidthTable:
    family: str
    weight: str
    units_per_em: int
    widths: dict[int, float]
    em_width: float

    @classmethod
    def from_ranges(
        cls,
        ranges: list[tuple[int, int, float]],
        units_per_em: int,
        family: str = "",
        weight: str = "",
    ) -> CharWidthTable:
        """Expand ``(first, last, width)`` ranges into a per-code-point table."""
        widths: dict[int, float] = {}
        for lower, upper, width in ranges:
            for code in range(lower, upper + 1):
                widths[code] = float(width)
        em_width = widths.get(ord(EM_GUESS_CHAR), 0.0)
        return cls(family, weight, units_per_em, widths, em_width)

    def width_of_char(self, char: str) -> float | None:
        """Advance of one character in design units, or None if unknown."""
        code = ord(char)
        if is_control_char(code):
            return 0.0
        return self.widths.get(code)

    def width_of(self, text: str) -> float:
        """Sum of advances in design units; unknown characters use the em guess."""
        total = 0.0
        for char in text:
            width = self.width_of_char(char)
            total += self.em_width if width is None else width
        return total


def _parse_face(raw: object, name: str) -> CharWidthTable:
    if not isinstance(raw, dict):
        raise MetricsError(f"{name}: expected a JSON object")
    units_per_em = raw.get("units_per_em")
    entries = raw.get("widths")
    if not isinstance(units_per_em, int) or units_per_em <= 0:
        raise MetricsError(f"{name}: units_per_em must be a positive integer")
    if not isinstance(entries, list):
        raise MetricsError(f"{name}: widths must be a list")
    ranges: list[tuple[int, int, float]] = []
    for entry in entries:
        if (
            not isinstance(entry, list)
            or len(entry) != 3
            or not all(isinstance(v, (int, float)) for v in entry)
        ):
            raise MetricsError(f"{name}: bad width entry {entry!r}")
        lower, upper, width = entry
        ranges.append((int(lower), int(upper), float(width)))
    return CharWidthTable.from_ranges(
        ranges,
        units_per_em,
        family=str(raw.get("family", "")),
        weight=str(raw.get("weight", "")),
    )


@lru_cache(maxsize=None)
def load_width_table(face: str, fonts_dir: Path = FONTS_DIR) -> CharWidthTable:
    """Load and validate one bundled face file."""
    path = fonts_dir / f"{face}.json"
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise MetricsError(f"Unable to load width table {path}: {exc}") from exc
    table = _parse_face(raw, face)
    logger.debug("Loaded width table %s (%d code points)", face, len(table.widths))
    return table


def get_text_width(text: str, font: Font) -> float:
    """Unrounded pixel width of ``text`` set in ``font``."""
    table = load_width_table(font.face)
    return table.width_of(text) * font.size / table.units_per_em
