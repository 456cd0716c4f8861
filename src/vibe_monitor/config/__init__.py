"""Configuration module for vibe-monitor."""

from vibe_monitor.config.settings import (
    CLAUDE_DATA_DIR,
    CREDENTIALS_PATH,
    DEFAULT_TIER,
    DEFAULT_WIDTH,
    get_claude_jsonl_files,
)
from vibe_monitor.config.user_config import (
    get_default_config,
    load_config,
    save_config,
)

__all__ = [
    "CLAUDE_DATA_DIR",
    "CREDENTIALS_PATH",
    "DEFAULT_TIER",
    "DEFAULT_WIDTH",
    "get_claude_jsonl_files",
    "get_default_config",
    "load_config",
    "save_config",
]
