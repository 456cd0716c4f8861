#region Imports
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from vibe_monitor.config.settings import DEFAULT_TIER
#endregion


#region Data Classes


@dataclass(frozen=True)
class TierLimits:
    """
    Usage limits of a subscription tier.

    Limits are published as ranges; the max values are used for percentages.

    Attributes:
        tier: Canonical tier name
        cycle_prompts_min: Minimum prompts per 5h cycle
        cycle_prompts_max: Maximum prompts per 5h cycle
        weekly_primary_min: Minimum weekly Sonnet hours
        weekly_primary_max: Maximum weekly Sonnet hours
        weekly_secondary_min: Minimum weekly Opus hours (0 if not available)
        weekly_secondary_max: Maximum weekly Opus hours (0 if not available)
    """

    tier: str
    cycle_prompts_min: int
    cycle_prompts_max: int
    weekly_primary_min: float
    weekly_primary_max: float
    weekly_secondary_min: float = 0.0
    weekly_secondary_max: float = 0.0

    @property
    def has_secondary_access(self) -> bool:
        """Check if the tier includes Opus access."""
        return self.weekly_secondary_max > 0

    @property
    def total_weekly_max(self) -> float:
        """Total weekly hours limit (Sonnet + Opus)."""
        return self.weekly_primary_max + self.weekly_secondary_max
#endregion


#region Constants
TIERS: Mapping[str, TierLimits] = MappingProxyType({
    "free": TierLimits(
        tier="free",
        cycle_prompts_min=10,
        cycle_prompts_max=40,
        weekly_primary_min=40,
        weekly_primary_max=80,
    ),
    "pro": TierLimits(
        tier="pro",
        cycle_prompts_min=10,
        cycle_prompts_max=40,
        weekly_primary_min=40,
        weekly_primary_max=80,
    ),
    "max_5x": TierLimits(
        tier="max_5x",
        cycle_prompts_min=50,
        cycle_prompts_max=200,
        weekly_primary_min=140,
        weekly_primary_max=280,
        weekly_secondary_min=15,
        weekly_secondary_max=35,
    ),
    "max_20x": TierLimits(
        tier="max_20x",
        cycle_prompts_min=200,
        cycle_prompts_max=800,
        weekly_primary_min=240,
        weekly_primary_max=480,
        weekly_secondary_min=24,
        weekly_secondary_max=40,
    ),
})

# Raw rate_limit_tier values from the credentials file -> tier names
RATE_LIMIT_TIER_ALIASES: Mapping[str, str] = MappingProxyType({
    "free": "free",
    "pro": "pro",
    "max5": "max_5x",
    "max5x": "max_5x",
    "max_5x": "max_5x",
    "max20": "max_20x",
    "max20x": "max_20x",
    "max_20x": "max_20x",
    "default_claude_max_5x": "max_5x",
    "default_claude_max_20x": "max_20x",
    "team": "max_5x",  # Team plans sit at the max_5x level
    "enterprise": "max_20x",  # Enterprise plans sit at the max_20x level
})
#endregion


#region Functions


def resolve_tier_name(tier: Optional[str]) -> str:
    """
    Resolve a tier string to a canonical tier name.

    Lookup order: exact tier name, then the rate_limit_tier alias table
    (case and whitespace insensitive), then the default tier.

    Args:
        tier: Tier name, alias or raw rate_limit_tier value

    Returns:
        A key of TIERS
    """
    if tier in TIERS:
        return tier

    if tier:
        mapped = RATE_LIMIT_TIER_ALIASES.get(tier.strip().lower())
        if mapped in TIERS:
            return mapped

    return DEFAULT_TIER


def get_tier_limits(tier: Optional[str]) -> TierLimits:
    """
    Get the limits for a tier, defaulting to "pro" if unknown.

    Args:
        tier: Tier name, alias or raw rate_limit_tier value

    Returns:
        TierLimits for the resolved tier (never raises)
    """
    return TIERS[resolve_tier_name(tier)]


#endregion
