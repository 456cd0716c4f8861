#region Imports
import json
import logging
from pathlib import Path
from typing import Optional

from vibe_monitor.config.settings import (
    DEFAULT_WIDTH,
    MAX_WIDTH,
    MIN_WIDTH,
)
#endregion


logger = logging.getLogger(__name__)


#region Constants
APP_CONFIG_DIR = Path.home() / ".config" / "vibe-monitor"
_CONFIG_FILENAME = "config.json"
CONFIG_PATH = APP_CONFIG_DIR / _CONFIG_FILENAME
#endregion


#region Functions


def get_default_config() -> dict:
    """
    Get default configuration values.

    Returns:
        Default configuration dictionary
    """
    return {
        "tier": "auto",  # "auto", "free", "pro", "max_5x", "max_20x" or a raw rate_limit_tier
        "no_color": False,
        "width": DEFAULT_WIDTH,
    }


def _is_valid_width(value: object) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_WIDTH <= value <= MAX_WIDTH
    )


def load_config(config_path: Optional[Path] = None) -> dict:
    """
    Load user configuration from disk.

    Values from the file are merged over the defaults. Unknown keys are
    dropped and an out-of-range width is ignored.

    Args:
        config_path: Config file to read (default: ~/.config/vibe-monitor/config.json)

    Returns:
        Configuration dictionary with user preferences

    Common failure modes:
        - Missing file returns defaults
        - Invalid JSON or unreadable file returns defaults
    """
    path = config_path or CONFIG_PATH
    config = get_default_config()

    if not path.exists():
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (ValueError, OSError) as e:
        logger.debug("Ignoring unreadable config %s: %s", path, e)
        return config

    if not isinstance(stored, dict):
        return config

    tier = stored.get("tier")
    if isinstance(tier, str) and tier.strip():
        config["tier"] = tier.strip()

    no_color = stored.get("no_color")
    if isinstance(no_color, bool):
        config["no_color"] = no_color

    width = stored.get("width")
    if _is_valid_width(width):
        config["width"] = width

    return config


def save_config(config: dict, config_path: Optional[Path] = None) -> None:
    """
    Save user configuration to disk.

    Args:
        config: Configuration dictionary to save
        config_path: Destination file (default: ~/.config/vibe-monitor/config.json)

    Raises:
        OSError: If config cannot be written
    """
    path = config_path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)


#endregion
