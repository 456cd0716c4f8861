#region Imports
import logging
import os
from pathlib import Path
from typing import Final, Optional
#endregion


logger = logging.getLogger(__name__)


#region Constants
# Claude Code state directory and the session transcripts inside it
CLAUDE_DIR: Final[Path] = Path.home() / ".claude"
CLAUDE_DATA_DIR: Final[Path] = CLAUDE_DIR / "projects"
CREDENTIALS_PATH: Final[Path] = CLAUDE_DIR / ".credentials.json"

SESSION_FILE_SUFFIX: Final[str] = ".jsonl"

# Length of the short usage cycle (hours)
CYCLE_HOURS: Final[int] = 5

# Tier used when nothing is configured or detected
DEFAULT_TIER: Final[str] = "pro"

# Progress bar width bounds
DEFAULT_WIDTH: Final[int] = 42
MIN_WIDTH: Final[int] = 20
MAX_WIDTH: Final[int] = 100
#endregion


#region Functions


def get_claude_jsonl_files(projects_dir: Optional[Path] = None) -> list[Path]:
    """
    Get all JSONL session files from Claude's project data directory.

    Walks every subdirectory of the projects directory. Entries that cannot
    be read are skipped; only a failure to list the root itself is raised.

    Args:
        projects_dir: Directory to search (default: ~/.claude/projects)

    Returns:
        Sorted list of Path objects pointing to JSONL files. Empty if the
        directory does not exist yet (Claude Code never ran).

    Raises:
        OSError: If the projects directory exists but cannot be listed
    """
    root = projects_dir if projects_dir is not None else CLAUDE_DATA_DIR

    if not root.exists():
        logger.debug("Projects directory %s does not exist", root)
        return []

    # Listing the root must succeed, everything below it is best effort
    with os.scandir(root):
        pass

    def _skip_entry(error: OSError) -> None:
        logger.debug("Skipping unreadable entry %s: %s", error.filename, error)

    session_files = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_skip_entry):
        for filename in filenames:
            if filename.endswith(SESSION_FILE_SUFFIX):
                session_files.append(Path(dirpath) / filename)

    return sorted(session_files)


#endregion
