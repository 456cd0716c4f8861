#region Imports
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
#endregion


#region Data Classes


@dataclass(frozen=True)
class SessionSummary:
    """
    Activity summary of a single Claude Code session file.

    Attributes:
        session_id: Session identifier (file name without extension)
        project: Project label (name of the parent directory)
        start_time: Earliest timestamp seen, None if the file had none
        end_time: Latest timestamp seen, None if the file had none
        duration_hours: Span between start_time and end_time in hours
        prompt_count: Number of prompts typed by the user
        primary_responses: Assistant messages from Sonnet models
        secondary_responses: Assistant messages from Opus models
    """

    session_id: str
    project: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration_hours: float = 0.0
    prompt_count: int = 0
    primary_responses: int = 0
    secondary_responses: int = 0

    @property
    def total_responses(self) -> int:
        """Assistant messages attributed to either model family."""
        return self.primary_responses + self.secondary_responses

    @property
    def has_activity(self) -> bool:
        """Check if the session recorded any time span or prompts."""
        return self.duration_hours > 0 or self.prompt_count > 0
#endregion
