#region Imports
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.text import Text

from vibe_monitor.aggregation.usage_limits import UsageData, format_reset_time
from vibe_monitor.config.settings import DEFAULT_WIDTH, MIN_WIDTH
#endregion


#region Constants
CLAUDE_ORANGE = "#CC5500"
COLOR_LOW = "#22C55E"      # Green for 0-50%
COLOR_MID = "#EAB308"      # Yellow for 50-75%
COLOR_HIGH = "#EF4444"     # Red for 75%+
COLOR_UNFILLED = "#9CA3AF"
COLOR_BOX = "#64748B"

INDENT = "    "
#endregion


#region Functions


def get_usage_color(percentage: float) -> str:
    """
    Pick a color for a usage percentage.

    Args:
        percentage: Usage percentage (may exceed 100)

    Returns:
        Hex color string: green below 50%, yellow below 75%, red otherwise
    """
    if percentage < 50:
        return COLOR_LOW
    if percentage < 75:
        return COLOR_MID
    return COLOR_HIGH


def _render_weekly_bar(usage: UsageData, width: int) -> Panel:
    """Boxed weekly progress bar with the reset countdown on top."""
    percentage = usage.weekly_percentage
    total_hours = usage.total_weekly_hours
    max_hours = usage.tier.total_weekly_max
    reset_str = format_reset_time(usage.weekly_reset_in)

    bar = ProgressBar(
        total=100,
        completed=min(percentage, 100.0),
        width=width - 2,  # Panel borders
        style=COLOR_UNFILLED,
        complete_style=CLAUDE_ORANGE,
        finished_style=CLAUDE_ORANGE,
    )

    title = Text.assemble((reset_str, CLAUDE_ORANGE), (" until reset", "dim"))
    subtitle = Text.assemble(
        f"{percentage:.1f}% (",
        (f"{total_hours:.1f}", CLAUDE_ORANGE),
        f" / {max_hours:.1f}h)",
    )

    return Panel(
        bar,
        title=title,
        subtitle=subtitle,
        box=box.SQUARE,
        border_style=COLOR_BOX,
        padding=0,
        width=width,
    )


def render_usage(usage: UsageData, console: Console, width: int = DEFAULT_WIDTH) -> None:
    """
    Render weekly model hours, the 5h cycle and a weekly progress bar.

    Displays:
    - Sonnet: X / Yh
    - Opus:   X / Yh [if the tier has Opus]
    - 5h:     N / M prompts (resets in ...)
    - Weekly progress bar with time until reset

    Args:
        usage: UsageData to display
        console: Rich console for output
        width: Progress bar width including borders

    Common failure modes:
        - Widths below the minimum fall back to the default
        - Percentages over 100% fill the bar completely
    """
    if width < MIN_WIDTH:
        width = DEFAULT_WIDTH

    tier = usage.tier

    console.print()
    console.print(
        f"{INDENT}[bold]Sonnet:[/bold] [{CLAUDE_ORANGE}]{usage.weekly_primary_hours:.1f}[/{CLAUDE_ORANGE}]"
        f" / {tier.weekly_primary_max:.1f}h"
    )

    if tier.has_secondary_access:
        console.print(
            f"{INDENT}[bold]Opus:[/bold]   [{CLAUDE_ORANGE}]{usage.weekly_secondary_hours:.1f}[/{CLAUDE_ORANGE}]"
            f" / {tier.weekly_secondary_max:.1f}h"
        )

    cycle_color = get_usage_color(usage.cycle_percentage)
    cycle_reset = format_reset_time(usage.cycle_reset_in)
    console.print(
        f"{INDENT}[bold]5h:[/bold]     [{cycle_color}]{usage.cycle_prompts}[/{cycle_color}]"
        f" / {tier.cycle_prompts_max} prompts [dim](resets in {cycle_reset})[/dim]"
    )

    console.print()
    console.print(_render_weekly_bar(usage, width))


def render_compact(usage: UsageData) -> Text:
    """
    Build a single-line summary for status bars.

    Format: "Claude: 12.3/315.0h (4%) | 51h 12m" colored by weekly usage.

    Args:
        usage: UsageData to summarize

    Returns:
        Rich Text (print it with a no_color console for plain output)
    """
    percentage = usage.weekly_percentage
    line = (
        f"Claude: {usage.total_weekly_hours:.1f}/{usage.tier.total_weekly_max:.1f}h"
        f" ({percentage:.0f}%) | {format_reset_time(usage.weekly_reset_in)}"
    )
    return Text(line, style=get_usage_color(percentage))


#endregion
