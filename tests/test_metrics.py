"""Tests for the bundled glyph width tables."""

import json

import pytest

from shieldsvg.metrics import (
    CharWidthTable,
    Font,
    MetricsError,
    get_text_width,
    is_control_char,
    load_width_table,
)


class TestFont:
    def test_faces_and_sizes(self):
        assert Font.VERDANA_11_NORMAL.face == "verdana-normal"
        assert Font.VERDANA_11_NORMAL.size == 11
        assert Font.HELVETICA_11_BOLD.face == "helvetica-bold"
        assert Font.VERDANA_10_BOLD.size == 10

    def test_every_font_has_a_bundled_table(self):
        for font in Font:
            table = load_width_table(font.face)
            assert table.units_per_em > 0
            assert table.em_width > 0


class TestCharWidthTable:
    def test_ranges_expand(self):
        table = CharWidthTable.from_ranges([(97, 99, 10), (109, 109, 20)], 100)
        assert table.width_of_char("b") == 10.0
        assert table.em_width == 20.0

    def test_unknown_char_uses_em_guess(self):
        table = CharWidthTable.from_ranges([(109, 109, 20)], 100)
        assert table.width_of_char("é") is None
        assert table.width_of("é") == 20.0

    def test_control_chars_are_zero_width(self):
        table = CharWidthTable.from_ranges([(97, 97, 10)], 100)
        assert table.width_of("a\ta\x7f") == 20.0

    def test_is_control_char(self):
        assert is_control_char(0)
        assert is_control_char(31)
        assert is_control_char(127)
        assert not is_control_char(32)


class TestLoadWidthTable:
    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(MetricsError):
            load_width_table("nope", tmp_path)

    def test_invalid_json_raises(self, tmp_path):
        (tmp_path / "broken.json").write_text("not json", encoding="utf-8")
        with pytest.raises(MetricsError):
            load_width_table("broken", tmp_path)

    def test_bad_units_raises(self, tmp_path):
        (tmp_path / "zero.json").write_text(
            json.dumps({"units_per_em": 0, "widths": []}), encoding="utf-8"
        )
        with pytest.raises(MetricsError):
            load_width_table("zero", tmp_path)

    def test_bad_entry_raises(self, tmp_path):
        (tmp_path / "short.json").write_text(
            json.dumps({"units_per_em": 1000, "widths": [[32, 278]]}), encoding="utf-8"
        )
        with pytest.raises(MetricsError):
            load_width_table("short", tmp_path)

    def test_loads_custom_table(self, tmp_path):
        (tmp_path / "tiny.json").write_text(
            json.dumps({"family": "Tiny", "units_per_em": 1000, "widths": [[109, 109, 500]]}),
            encoding="utf-8",
        )
        table = load_width_table("tiny", tmp_path)
        assert table.family == "Tiny"
        assert table.width_of("mm") == 1000.0


class TestGetTextWidth:
    def test_empty_string(self):
        assert get_text_width("", Font.VERDANA_11_NORMAL) == 0

    def test_known_word(self):
        # b u i l d = 1260 + 1298 + 562 + 562 + 1260 design units
        assert get_text_width("build", Font.VERDANA_11_NORMAL) == pytest.approx(4942 * 11 / 2048)

    def test_size_scales_width(self):
        small = get_text_width("badge", Font.VERDANA_10_NORMAL)
        large = get_text_width("badge", Font.VERDANA_11_NORMAL)
        assert large == pytest.approx(small * 11 / 10)

    def test_bold_is_wider(self):
        assert get_text_width("PASS", Font.VERDANA_10_BOLD) > get_text_width(
            "PASS", Font.VERDANA_10_NORMAL
        )

    def test_unknown_char_measures_like_m(self):
        for font in Font:
            assert get_text_width("€", font) == get_text_width("m", font)

    @pytest.mark.parametrize("accented, plain", [("é", "e"), ("É", "E"), ("ñ", "n"), ("Ł", "L"), ("ş", "s")])
    def test_accented_letters_measure_like_their_base(self, accented, plain):
        for font in Font:
            assert get_text_width(accented, font) == get_text_width(plain, font)

    def test_latin1_word(self):
        # c a f é = 1067 + 1229 + 720 + 1210 design units
        assert get_text_width("café", Font.VERDANA_11_NORMAL) == pytest.approx(4226 * 11 / 2048)
        assert get_text_width("é", Font.VERDANA_11_NORMAL) != get_text_width("m", Font.VERDANA_11_NORMAL)

    def test_latin_tables_cover_supplement_and_extended_a(self):
        for font in Font:
            table = load_width_table(font.face)
            assert all(code in table.widths for code in range(160, 384))
