"""Tests for CLI commands and display helpers."""

from __future__ import annotations

import json

import pytest

from shieldsvg.cli import (
    build_parser,
    do_config,
    do_measure,
    do_render,
    main,
)
from shieldsvg.metrics import Font


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.json"


# ── Argument Parsing ──────────────────────────────────────────────────────────


class TestArgumentParsing:
    def test_no_args_defaults_to_none_command(self):
        args = build_parser().parse_args([])
        assert args.command is None

    def test_render_command(self):
        args = build_parser().parse_args(
            ["render", "build", "passing", "--style", "plastic", "--color", "green"]
        )
        assert args.command == "render"
        assert args.label == "build"
        assert args.message == "passing"
        assert args.style == "plastic"
        assert args.color == "green"
        assert args.link == []

    def test_render_two_links(self):
        args = build_parser().parse_args(
            ["render", "a", "b", "--link", "https://a.example", "--link", "https://b.example"]
        )
        assert args.link == ["https://a.example", "https://b.example"]

    def test_render_rejects_unknown_style(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["render", "a", "b", "--style", "glossy"])

    def test_measure_command(self):
        args = build_parser().parse_args(["measure", "hello", "--font", "verdana-10-bold"])
        assert args.command == "measure"
        assert args.font == "verdana-10-bold"

    def test_config_set(self):
        args = build_parser().parse_args(["config", "--set", "style", "social"])
        assert args.set == ["style", "social"]

    def test_global_flags(self, tmp_path):
        args = build_parser().parse_args(["--verbose", "--config", str(tmp_path / "c.json"), "config"])
        assert args.verbose
        assert args.config == tmp_path / "c.json"


# ── Commands ──────────────────────────────────────────────────────────────────


class TestDoRender:
    def test_prints_svg(self, capsys, config_path):
        result = do_render("build", "passing", color="brightgreen", config_path=config_path)
        out = capsys.readouterr().out
        assert result["ok"]
        assert out.startswith("<svg")
        assert out.rstrip("\n") == result["svg"]
        assert 'fill="#4c1"' in out

    def test_dash_means_no_label(self, capsys, config_path):
        result = do_render("-", "passing", config_path=config_path)
        assert 'aria-label="passing"' in result["svg"]

    def test_writes_file(self, tmp_path, config_path):
        output = tmp_path / "badge.svg"
        result = do_render(
            "build", "passing", style="for-the-badge", output=str(output), config_path=config_path
        )
        assert output.read_text(encoding="utf-8").startswith("<svg")
        assert result["style"] == "for-the-badge"
        assert result["title"] == "BUILD: passing"
        assert result["name"] == "badge.svg"

    def test_links(self, config_path):
        result = do_render(
            "a", "b", links=["https://a.example", "https://b.example"], config_path=config_path
        )
        assert result["svg"].count("<a ") == 2

    def test_too_many_links(self, config_path):
        with pytest.raises(ValueError):
            do_render("a", "b", links=["1", "2", "3"], config_path=config_path)

    def test_uses_saved_defaults(self, config_path):
        config_path.write_text(json.dumps({"style": "plastic", "message_color": "red"}), encoding="utf-8")
        result = do_render("build", "failing", config_path=config_path)
        assert 'height="18"' in result["svg"]
        assert 'fill="#e05d44"' in result["svg"]

    def test_flags_override_defaults(self, config_path):
        config_path.write_text(json.dumps({"style": "plastic"}), encoding="utf-8")
        result = do_render("build", "ok", style="flat", config_path=config_path)
        assert 'height="20"' in result["svg"]

    def test_null_cache_sizes_in_config(self, config_path):
        config_path.write_text(json.dumps({"text_cache_size": None, "color_cache_size": None}), encoding="utf-8")
        result = do_render("build", "passing", config_path=config_path)
        assert result["ok"]


class TestDoMeasure:
    def test_all_fonts(self, config_path):
        measurements = do_measure("hello", config_path=config_path)
        assert [m.font for m in measurements] == list(Font)

    def test_one_font(self, capsys, config_path):
        measurements = do_measure("build", font="verdana-11-normal", config_path=config_path)
        assert len(measurements) == 1
        assert measurements[0].pixel_width == 27
        assert "Text Widths" in capsys.readouterr().out


class TestDoConfig:
    def test_show(self, capsys, config_path):
        defaults = do_config(None, config_path=config_path)
        assert defaults["style"] == "flat"
        assert "Defaults" in capsys.readouterr().out

    def test_set(self, config_path):
        defaults = do_config(["message_color", "orange"], config_path=config_path)
        assert defaults["message_color"] == "orange"


class TestMain:
    def test_render(self, capsys, config_path):
        main(["--config", str(config_path), "render", "build", "passing"])
        assert capsys.readouterr().out.startswith("<svg")

    def test_no_command_prints_help(self, capsys):
        main([])
        assert "usage" in capsys.readouterr().out

    def test_value_error_exits_1(self, capsys, config_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config_path), "config", "--set", "bogus", "x"])
        assert exc_info.value.code == 1
        assert "Unknown config key" in capsys.readouterr().out

    def test_too_many_links_exits_1(self, config_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config_path), "render", "a", "b",
                  "--link", "1", "--link", "2", "--link", "3"])
        assert exc_info.value.code == 1

    def test_bad_cache_size_in_config_exits_1(self, capsys, config_path):
        config_path.write_text(json.dumps({"text_cache_size": [1]}), encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config_path), "render", "build", "passing"])
        assert exc_info.value.code == 1
        assert "text_cache_size" in capsys.readouterr().out
