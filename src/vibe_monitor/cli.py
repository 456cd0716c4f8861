"""
vibe-monitor CLI - Command-line interface using typer.

Shows Claude Code usage for the current 5-hour cycle and week.
"""
import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from vibe_monitor.aggregation.usage_limits import UsageCalculationError, UsageTracker
from vibe_monitor.config import settings
from vibe_monitor.config.settings import MAX_WIDTH, MIN_WIDTH
from vibe_monitor.config.user_config import load_config
from vibe_monitor.data.credentials import resolve_tier
from vibe_monitor.visualization.usage_bars import render_compact, render_usage


# Create typer app
app = typer.Typer(
    name="vibe-monitor",
    help="Track Claude Code usage against subscription rate limits",
    add_completion=False,
)

# Errors go to stderr so --compact output stays clean for status bars
error_console = Console(stderr=True)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


@app.command()
def show(
    tier: Optional[str] = typer.Option(None, "--tier", help="Subscription tier (free, pro, max_5x, max_20x, auto)"),
    compact: bool = typer.Option(False, "--compact", help="Single-line compact format"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    width: Optional[int] = typer.Option(None, "--width", min=MIN_WIDTH, max=MAX_WIDTH, help="Progress bar width (20-100)"),
    debug: bool = typer.Option(False, "--debug", help="Log skipped files and totals to stderr"),
):
    """Show Claude Code usage for the current 5h cycle and week."""
    _configure_logging(debug)

    # Command line options override the config file
    config = load_config()
    if tier:
        config["tier"] = tier
    if no_color:
        config["no_color"] = True
    if width is not None:
        config["width"] = width

    console = Console(no_color=config["no_color"], highlight=False)
    tracker = UsageTracker(resolve_tier(config["tier"]))

    try:
        usage = tracker.calculate()
    except UsageCalculationError as e:
        error_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if usage.sessions_count == 0:
        console.print("No Claude Code usage data found.")
        console.print(f"Session files: {escape(str(settings.CLAUDE_DATA_DIR))}")
        return

    if compact:
        console.print(render_compact(usage))
    else:
        render_usage(usage, console, width=config["width"])


def main() -> None:
    """
    Main CLI entry point for vibe-monitor.

    Usage:
        vibe-monitor                    Show usage with progress bar
        vibe-monitor --compact          One line, for status bars
        vibe-monitor --tier max_5x      Override the detected tier
    """
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
