#region Imports
import json
import logging
from pathlib import Path
from typing import Optional

from vibe_monitor.config.settings import CREDENTIALS_PATH, DEFAULT_TIER
#endregion


logger = logging.getLogger(__name__)


#region Constants
# Fields checked in order; the first non-empty one wins
TIER_FIELDS = ("rate_limit_tier", "tier", "plan")

# Newer Claude Code versions nest the OAuth account under this key
_OAUTH_KEY = "claudeAiOauth"
_OAUTH_TIER_FIELDS = ("rateLimitTier", "subscriptionType")
#endregion


#region Functions


def _first_non_empty(data: dict, fields: tuple) -> Optional[str]:
    for field in fields:
        value = data.get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def detect_tier(credentials_path: Optional[Path] = None) -> Optional[str]:
    """
    Detect the subscription tier from the Claude credentials file.

    Args:
        credentials_path: Credentials file (default: ~/.claude/.credentials.json)

    Returns:
        Raw tier string as stored by Claude, or None if no tier was found

    Common failure modes:
        - Missing or unreadable file returns None
        - Invalid JSON returns None
    """
    path = credentials_path or CREDENTIALS_PATH

    try:
        with open(path, "r", encoding="utf-8") as f:
            creds = json.load(f)
    except FileNotFoundError:
        logger.debug("No credentials file at %s", path)
        return None
    except (ValueError, OSError) as e:
        logger.debug("Could not read credentials %s: %s", path, e)
        return None

    if not isinstance(creds, dict):
        return None

    tier = _first_non_empty(creds, TIER_FIELDS)
    if tier:
        return tier

    oauth = creds.get(_OAUTH_KEY)
    if isinstance(oauth, dict):
        return _first_non_empty(oauth, TIER_FIELDS + _OAUTH_TIER_FIELDS)

    return None


def resolve_tier(configured: Optional[str], credentials_path: Optional[Path] = None) -> str:
    """
    Turn a configured tier into the tier string handed to the tracker.

    "auto" or an empty value means: use the credentials file, else "pro".

    Args:
        configured: Tier from config or command line
        credentials_path: Credentials file override (for tests)

    Returns:
        Tier string (may still be a raw alias, resolved later by get_tier_limits)
    """
    if configured and configured.strip().lower() != "auto":
        return configured

    return detect_tier(credentials_path) or DEFAULT_TIER


#endregion
