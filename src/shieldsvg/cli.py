"""CLI commands for shieldsvg."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from shieldsvg.badge import BadgeStyle, badge_title
from shieldsvg.builder import BadgeBuilder
from shieldsvg.config import DEFAULT_CONFIG_PATH, get_defaults, set_default
from shieldsvg.context import RenderContext
from shieldsvg.display import (
    print_badge_result,
    print_config,
    print_error,
    print_measurements,
)
from shieldsvg.metrics import Font

logger = logging.getLogger(__name__)

NO_LABEL = "-"
MAX_LINKS = 2


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="shieldsvg",
        description="Render shields-style SVG badges",
    )
    parser.add_argument("--config", type=Path, default=None, help="Config file path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    render_p = subparsers.add_parser("render", help="Render a badge")
    render_p.add_argument("label", help=f"Left-hand text ('{NO_LABEL}' for none)")
    render_p.add_argument("message", help="Right-hand text")
    render_p.add_argument("--style", "-s", choices=[s.value for s in BadgeStyle], default=None)
    render_p.add_argument("--color", "-c", default=None, help="Message background color")
    render_p.add_argument("--label-color", default=None, help="Label background color")
    render_p.add_argument("--logo", default=None, help="simple-icons slug, SVG markup or data URI")
    render_p.add_argument("--logo-color", default=None)
    render_p.add_argument(
        "--link", action="append", default=[],
        help="Link target; pass twice to link label and message separately",
    )
    render_p.add_argument("--output", "-o", default=None, help="Write SVG to this file")

    measure_p = subparsers.add_parser("measure", help="Show rendered text widths")
    measure_p.add_argument("text")
    measure_p.add_argument("--font", "-f", choices=[f.value for f in Font], default=None)

    config_p = subparsers.add_parser("config", help="Show or change defaults")
    config_p.add_argument("--set", nargs=2, metavar=("KEY", "VALUE"), default=None)
    return parser


def setup_logging(verbose: bool = False) -> None:
    package_logger = logging.getLogger("shieldsvg")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def main(argv: list[str] | None = None) -> None:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    command = args.command
    if command is None:
        parser.print_help()
        return

    try:
        if command == "render":
            do_render(
                label=args.label,
                message=args.message,
                style=args.style,
                color=args.color,
                label_color=args.label_color,
                logo=args.logo,
                logo_color=args.logo_color,
                links=args.link,
                output=args.output,
                config_path=args.config,
            )
        elif command == "measure":
            do_measure(args.text, font=args.font, config_path=args.config)
        elif command == "config":
            do_config(args.set, config_path=args.config)
    except (ValueError, OSError) as exc:
        logger.debug("Command %s failed", command, exc_info=True)
        print_error(str(exc))
        sys.exit(1)


def do_render(
    label: str,
    message: str,
    style: str | None = None,
    color: str | None = None,
    label_color: str | None = None,
    logo: str | None = None,
    logo_color: str | None = None,
    links: list[str] | None = None,
    output: str | None = None,
    config_path: Path | None = None,
) -> dict:
    """Render a badge to stdout or to ``output``."""
    links = links or []
    if len(links) > MAX_LINKS:
        raise ValueError(f"At most {MAX_LINKS} links are supported, got {len(links)}")

    defaults = get_defaults(config_path)
    builder = BadgeBuilder.from_config(defaults)
    if style:
        builder.style(style)
    builder.label(None if label == NO_LABEL else label).message(message)
    if color:
        builder.message_color(color)
    if label_color:
        builder.label_color(label_color)
    if logo_color:
        builder.logo_color(logo_color)
    builder.logo(logo)
    if links:
        builder.link(links[0])
    if len(links) > 1:
        builder.extra_link(links[1])

    spec = builder.build_spec()
    svg = builder.build(RenderContext.from_config(defaults))
    if output is None:
        sys.stdout.write(svg + "\n")
        return {"ok": True, "svg": svg}

    output_path = Path(output)
    output_path.write_text(svg, encoding="utf-8")
    result = {
        "ok": True,
        "output": str(output_path.resolve()),
        "name": output_path.name,
        "style": spec.style.value,
        "title": badge_title(spec),
    }
    logger.info("Wrote %s", output_path)
    print_badge_result(result)
    return result


def do_measure(text: str, font: str | None = None, config_path: Path | None = None) -> list:
    """Measure ``text`` in one font, or in every font."""
    defaults = get_defaults(config_path)
    context = RenderContext.from_config(defaults)
    fonts = [Font(font)] if font else list(Font)
    measurements = [context.measurer.measure(text, f) for f in fonts]
    print_measurements(measurements)
    return measurements


def do_config(assignment: list[str] | None = None, config_path: Path | None = None) -> dict:
    """Show the effective defaults, optionally after changing one."""
    if assignment:
        key, value = assignment
        set_default(key, value, config_path)
    defaults = get_defaults(config_path)
    print_config(defaults, str(config_path or DEFAULT_CONFIG_PATH))
    return defaults
