#region Imports
import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from pathlib import Path
from typing import Optional

from vibe_monitor.config.settings import CYCLE_HOURS, get_claude_jsonl_files
from vibe_monitor.data.jsonl_parser import parse_session_file
from vibe_monitor.models.session import SessionSummary
from vibe_monitor.models.tier import TierLimits, get_tier_limits
#endregion


logger = logging.getLogger(__name__)


#region Constants
CYCLE_LENGTH = timedelta(hours=CYCLE_HOURS)
WEEK_LENGTH = timedelta(days=7)
#endregion


#region Exceptions


class UsageCalculationError(Exception):
    """Raised when the session directory cannot be enumerated."""


#endregion


#region Data Classes


@dataclass
class UsageData:
    """
    Usage totals for the current 5h cycle and the current week.

    Attributes:
        cycle_prompts: Prompts in sessions started during the current cycle
        cycle_start: Start of the current 5h cycle (UTC)
        weekly_primary_hours: Sonnet hours in sessions started this week
        weekly_secondary_hours: Opus hours in sessions started this week
        weekly_prompts: Prompts in sessions started this week
        week_start: Monday 00:00 local time of the current week
        cycle_reset_in: Time until the cycle resets (never negative)
        weekly_reset_in: Time until the week resets (never negative)
        tier: Resolved limits of the subscription tier
        tier_name: Tier string the calculation was requested with
        last_updated: The "now" the calculation was made for
        sessions_count: Number of sessions with any activity
    """

    cycle_start: datetime
    week_start: datetime
    tier: TierLimits
    tier_name: str
    last_updated: datetime
    cycle_prompts: int = 0
    weekly_primary_hours: float = 0.0
    weekly_secondary_hours: float = 0.0
    weekly_prompts: int = 0
    cycle_reset_in: timedelta = timedelta(0)
    weekly_reset_in: timedelta = timedelta(0)
    sessions_count: int = 0

    @property
    def total_weekly_hours(self) -> float:
        """Combined Sonnet + Opus hours this week."""
        return self.weekly_primary_hours + self.weekly_secondary_hours

    @property
    def weekly_percentage(self) -> float:
        """Weekly hours as a percentage of the tier's total weekly max."""
        limit = self.tier.total_weekly_max
        if limit <= 0:
            return 0.0
        return self.total_weekly_hours / limit * 100

    @property
    def cycle_percentage(self) -> float:
        """Cycle prompts as a percentage of the tier's max prompts per cycle."""
        limit = self.tier.cycle_prompts_max
        if limit <= 0:
            return 0.0
        return self.cycle_prompts / limit * 100


#endregion


#region Functions


def get_week_start(now: datetime) -> datetime:
    """
    Get Monday 00:00:00 of the week containing `now`, in now's timezone.

    A fixed UTC offset carries no DST rules, so when `now` is in the system's
    local offset, Monday midnight is localized on Monday's own date instead.

    Args:
        now: Current time (timezone-aware)

    Returns:
        Start of the week. If `now` is a Monday, that is today's midnight.
    """
    days_since_monday = now.isoweekday() - 1  # Monday=0 ... Sunday=6
    monday = (now - timedelta(days=days_since_monday)).date()
    midnight = datetime.combine(monday, time.min)

    if isinstance(now.tzinfo, timezone) and now.utcoffset() == now.astimezone().utcoffset():
        return midnight.astimezone()

    return midnight.replace(tzinfo=now.tzinfo)


def get_cycle_start(now: datetime) -> datetime:
    """
    Get the start of the current 5-hour cycle.

    Cycles form a fixed grid counted from the Unix epoch, independent of when
    any session started.

    Args:
        now: Current time (timezone-aware)

    Returns:
        Start of the cycle as a UTC datetime
    """
    cycle_seconds = int(CYCLE_LENGTH.total_seconds())
    cycle_number = int(now.timestamp()) // cycle_seconds
    return datetime.fromtimestamp(cycle_number * cycle_seconds, tz=timezone.utc)


def format_reset_time(delta: timedelta) -> str:
    """
    Format a countdown as "Xh Ym" or "Ym".

    Args:
        delta: Time remaining until a reset

    Returns:
        Human readable countdown, "resetting..." once it has run out
    """
    if delta <= timedelta(0):
        return "resetting..."

    total_minutes = int(delta.total_seconds()) // 60
    hours, minutes = divmod(total_minutes, 60)

    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def _load_sessions(projects_dir: Optional[Path]) -> list[SessionSummary]:
    """
    Discover and parse all session files, dropping the ones that fail.

    Raises:
        UsageCalculationError: If the projects directory cannot be listed
    """
    try:
        session_paths = get_claude_jsonl_files(projects_dir)
    except OSError as e:
        raise UsageCalculationError(f"finding sessions: {e}") from e

    sessions = []
    for path in session_paths:
        try:
            sessions.append(parse_session_file(path))
        except OSError as e:
            logger.debug("Skipping unreadable session %s: %s", path, e)

    return sessions


def _add_session(usage: UsageData, session: SessionSummary) -> None:
    """Fold one session into the usage totals."""
    usage.sessions_count += 1

    # Without a timestamp the session cannot be placed in any window
    if session.start_time is None:
        return

    if session.start_time >= usage.cycle_start:
        usage.cycle_prompts += session.prompt_count

    if session.start_time >= usage.week_start:
        usage.weekly_prompts += session.prompt_count

        total_responses = session.total_responses
        if total_responses > 0:
            usage.weekly_primary_hours += (
                session.duration_hours * session.primary_responses / total_responses
            )
            usage.weekly_secondary_hours += (
                session.duration_hours * session.secondary_responses / total_responses
            )
        else:
            # No model info, count it against Sonnet
            usage.weekly_primary_hours += session.duration_hours


def calculate_usage(
    tier_name: str,
    now: Optional[datetime] = None,
    projects_dir: Optional[Path] = None,
    tier: Optional[TierLimits] = None,
) -> UsageData:
    """
    Calculate usage for the current 5h cycle and week.

    Sessions are attributed whole to the window their first message falls in.
    Session hours are split between Sonnet and Opus by response counts.

    Args:
        tier_name: Tier name, alias or raw rate_limit_tier value
        now: Current time (default: system clock, local timezone)
        projects_dir: Session directory (default: ~/.claude/projects)
        tier: Limits already resolved for tier_name (default: looked up)

    Returns:
        UsageData with totals and reset countdowns

    Raises:
        UsageCalculationError: If the projects directory cannot be listed

    Common failure modes:
        - Missing projects directory returns zero sessions
        - Unreadable files and malformed lines are skipped
        - Unknown tier names use the "pro" limits
    """
    if now is None:
        now = datetime.now().astimezone()
    elif now.tzinfo is None:
        now = now.astimezone()

    week_start = get_week_start(now)
    cycle_start = get_cycle_start(now)

    sessions = _load_sessions(projects_dir)

    usage = UsageData(
        cycle_start=cycle_start,
        week_start=week_start,
        tier=tier or get_tier_limits(tier_name),
        tier_name=tier_name,
        last_updated=now,
    )

    for session in sessions:
        if not session.has_activity:
            continue
        _add_session(usage, session)

    usage.cycle_reset_in = max(cycle_start + CYCLE_LENGTH - now, timedelta(0))
    usage.weekly_reset_in = max(week_start + WEEK_LENGTH - now, timedelta(0))

    logger.debug(
        "Aggregated %d sessions (%d files): cycle prompts=%d, weekly hours=%.2f",
        usage.sessions_count,
        len(sessions),
        usage.cycle_prompts,
        usage.total_weekly_hours,
    )

    return usage


#endregion


#region Classes


class UsageTracker:
    """
    Usage calculator bound to one subscription tier.

    Each call to calculate() re-reads the session files; nothing is cached.
    """

    def __init__(self, tier_name: str, projects_dir: Optional[Path] = None):
        self.tier_name = tier_name
        self.tier = get_tier_limits(tier_name)
        self.projects_dir = projects_dir

    def calculate(self, now: Optional[datetime] = None) -> UsageData:
        """
        Compute current usage statistics.

        Args:
            now: Current time (default: system clock)

        Returns:
            UsageData for this tracker's tier

        Raises:
            UsageCalculationError: If the projects directory cannot be listed
        """
        return calculate_usage(
            self.tier_name, now=now, projects_dir=self.projects_dir, tier=self.tier
        )


#endregion
