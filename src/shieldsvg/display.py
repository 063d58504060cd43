"""Rich terminal display for the shieldsvg CLI."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from shieldsvg.measurer import MeasuredText

console = Console()


def print_badge_result(result: dict) -> None:
    """Print badge generation result."""
    lines: list[str] = []
    lines.append("")
    lines.append(f"  Badge saved to: [bold]{escape(result.get('output', ''))}[/]")
    lines.append(f"  Style: {result.get('style', 'flat')}")
    lines.append(f"  Text: {escape(result.get('title', ''))}")
    lines.append("")
    lines.append("  Add to your README:")
    lines.append(f"  ![{escape(result.get('title', 'badge'))}]({escape(result.get('name', ''))})")
    lines.append("")

    content = "\n".join(lines)
    panel = Panel(
        content,
        title="[bold]Badge Generated[/]",
        box=box.ROUNDED,
        border_style="green",
        width=60,
    )
    console.print(panel)


def print_measurements(measurements: list[MeasuredText]) -> None:
    """Print text widths as a table, one row per font."""
    table = Table(
        title="Text Widths",
        box=box.ROUNDED,
        border_style="blue",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Font", style="bold")
    table.add_column("Text")
    table.add_column("Raw px", justify="right")
    table.add_column("Pixels", justify="right")
    table.add_column("textLength", justify="right")

    for measured in measurements:
        table.add_row(
            measured.font.value,
            escape(measured.text),
            f"{measured.width:.3f}",
            str(measured.pixel_width),
            str(measured.scaled_width),
        )
    console.print(table)


def print_config(config: dict, path: str) -> None:
    """Print the effective defaults."""
    table = Table(
        title="Defaults",
        caption=escape(path),
        box=box.ROUNDED,
        border_style="grey50",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key in sorted(config):
        value = config[key]
        table.add_row(key, "[dim]unset[/]" if value is None else escape(str(value)))
    console.print(table)


def print_error(message: str) -> None:
    panel = Panel(
        f"\n  {escape(message)}\n",
        title="[bold]Error[/]",
        box=box.ROUNDED,
        border_style="red",
        width=60,
    )
    console.print(panel)
