"""Tests for the fluent badge builder and render context."""

import pytest

from shieldsvg.badge import BadgeSpec, BadgeStyle, render_badge
from shieldsvg.builder import Badge, BadgeBuilder
from shieldsvg.context import RenderContext, default_context


class TestBadgeBuilder:
    def test_setters_chain(self):
        builder = Badge.style("flat")
        assert builder.label("build") is builder
        assert builder.message("passing").message_color("#4c1") is builder

    def test_build_spec(self):
        spec = (
            Badge.style("for-the-badge")
            .label("building")
            .message("pass")
            .label_color("#555")
            .message_color("#fff")
            .logo("rust")
            .logo_color("blue")
            .link("https://google.com")
            .extra_link("https://example.com")
            .build_spec()
        )
        assert spec == BadgeSpec(
            style=BadgeStyle.FOR_THE_BADGE,
            label="building",
            message="pass",
            label_color="#555",
            message_color="#fff",
            logo="rust",
            logo_color="blue",
            link="https://google.com",
            extra_link="https://example.com",
        )

    def test_defaults(self):
        spec = BadgeBuilder().build_spec()
        assert spec.style is BadgeStyle.FLAT
        assert spec.label is None
        assert spec.message == ""

    def test_style_can_change(self):
        spec = Badge.style("flat").style("plastic").build_spec()
        assert spec.style is BadgeStyle.PLASTIC

    def test_unknown_style_raises(self):
        with pytest.raises(ValueError):
            Badge.style("glossy")

    def test_build_renders_spec(self):
        builder = Badge.style("flat").label("build").message("passing").message_color("#4c1")
        context = RenderContext()
        assert builder.build(context) == render_badge(builder.build_spec(), context)

    def test_from_config(self):
        builder = BadgeBuilder.from_config(
            {"style": "social", "label_color": "red", "message_color": None, "logo_color": "#fff"}
        )
        spec = builder.build_spec()
        assert spec.style is BadgeStyle.SOCIAL
        assert spec.label_color == "red"
        assert spec.message_color is None
        assert spec.logo_color == "#fff"

    def test_from_empty_config(self):
        assert BadgeBuilder.from_config({}).build_spec() == BadgeSpec()


class TestRenderContext:
    def test_from_config(self):
        context = RenderContext.from_config({"text_cache_size": 8, "color_cache_size": 4})
        assert context.measurer.maxsize == 8
        assert context.colors.maxsize == 4

    def test_from_empty_config_uses_defaults(self):
        context = RenderContext.from_config({})
        assert context.measurer.maxsize == 1024
        assert context.colors.maxsize == 512

    def test_null_sizes_use_defaults(self):
        context = RenderContext.from_config({"text_cache_size": None, "color_cache_size": None})
        assert context.measurer.maxsize == 1024
        assert context.colors.maxsize == 512

    def test_string_sizes_are_converted(self):
        assert RenderContext.from_config({"text_cache_size": "16"}).measurer.maxsize == 16

    @pytest.mark.parametrize("value", ["many", -1, [8], {"size": 8}])
    def test_bad_sizes_raise_value_error(self, value):
        with pytest.raises(ValueError, match="text_cache_size"):
            RenderContext.from_config({"text_cache_size": value})

    def test_clear(self):
        context = RenderContext()
        Badge.style("flat").label("a").message("b").build(context)
        assert context.measurer.cache_info().currsize > 0
        context.clear()
        assert context.measurer.cache_info().currsize == 0
        assert context.colors.cache_info().currsize == 0

    def test_default_context_is_shared(self):
        assert default_context() is default_context()
