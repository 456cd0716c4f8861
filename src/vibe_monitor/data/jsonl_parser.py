#region Imports
import json
import logging
import re
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import NamedTuple, Optional

from vibe_monitor.models.session import SessionSummary
#endregion


logger = logging.getLogger(__name__)


#region Constants
# Markers Claude Code wraps around slash commands and their output
COMMAND_MARKERS = ("<command-name>", "<local-command-stdout>")

PRIMARY_MODEL_KEYWORD = "sonnet"
SECONDARY_MODEL_KEYWORD = "opus"

_TIMESTAMP_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
)
_BASIC_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# strptime's %f takes at most 6 digits
_FRACTION_PATTERN = re.compile(r"\.(\d{7,})")
#endregion


#region Classes


class LineKind(Enum):
    """What a single JSONL line contributes to a session summary."""
    PROMPT = "prompt"
    PRIMARY_RESPONSE = "primary_response"
    SECONDARY_RESPONSE = "secondary_response"
    IRRELEVANT = "irrelevant"
    UNPARSEABLE = "unparseable"


class ParsedLine(NamedTuple):
    kind: LineKind
    timestamp: Optional[datetime] = None


#endregion


#region Functions


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an ISO 8601 / RFC 3339 timestamp from a session log.

    Accepts "2025-10-06T12:34:56Z", "2025-10-06T12:34:56+09:00" and the same
    with fractional seconds of any precision.

    Args:
        value: Timestamp string

    Returns:
        Timezone-aware datetime, or None if the value is not a timestamp
    """
    if not isinstance(value, str) or not value:
        return None

    candidate = _FRACTION_PATTERN.sub(lambda m: "." + m.group(1)[:6], value, count=1)
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(candidate, fmt)
        except ValueError:
            continue

    # Last resort: drop a malformed fraction, e.g. "2025-10-06T12:34:56.x1Z"
    dot = value.find(".")
    if dot > 0 and "Z" in value[dot + 1:]:
        try:
            parsed = datetime.strptime(value[:dot] + "Z", _BASIC_TIMESTAMP_FORMAT)
        except ValueError:
            return None
        return parsed.replace(tzinfo=timezone.utc)

    return None


def is_command_message(content: object) -> bool:
    """
    Check if message content is a local slash-command invocation or its output.

    Args:
        content: Message content, either a string or a list of content blocks

    Returns:
        True if any text carries a command marker
    """
    if isinstance(content, str):
        return any(marker in content for marker in COMMAND_MARKERS)

    if isinstance(content, list):
        for block in content:
            if not isinstance(block, dict):
                continue
            text = block.get("text")
            if isinstance(text, str) and any(marker in text for marker in COMMAND_MARKERS):
                return True

    return False


def classify_line(line: bytes) -> ParsedLine:
    """
    Classify one raw JSONL line.

    Args:
        line: Raw line from a session file

    Returns:
        ParsedLine with the line's kind and its timestamp, if it has a valid one
    """
    if not line.strip():
        return ParsedLine(LineKind.IRRELEVANT)

    try:
        data = json.loads(line)
    except (ValueError, RecursionError):
        # JSONDecodeError, undecodable bytes, or nesting too deep to decode
        return ParsedLine(LineKind.UNPARSEABLE)

    if not isinstance(data, dict):
        return ParsedLine(LineKind.UNPARSEABLE)

    timestamp = parse_timestamp(data.get("timestamp"))

    message = data.get("message")
    if not isinstance(message, dict):
        message = {}

    message_type = data.get("type")

    if (
        message_type == "user"
        and message.get("role") == "user"
        and data.get("isMeta") is not True
        and data.get("userType") == "external"
        and not is_command_message(message.get("content"))
    ):
        return ParsedLine(LineKind.PROMPT, timestamp)

    if message_type == "assistant":
        model = message.get("model")
        model = model.lower() if isinstance(model, str) else ""
        if SECONDARY_MODEL_KEYWORD in model:
            return ParsedLine(LineKind.SECONDARY_RESPONSE, timestamp)
        if PRIMARY_MODEL_KEYWORD in model:
            return ParsedLine(LineKind.PRIMARY_RESPONSE, timestamp)

    return ParsedLine(LineKind.IRRELEVANT, timestamp)


def parse_session_file(file_path: Path) -> SessionSummary:
    """
    Parse a single JSONL session file into a SessionSummary.

    Session files are appended to by Claude Code while we read them, so
    malformed or half-written lines are skipped rather than treated as errors.

    Args:
        file_path: Path to the JSONL file to parse

    Returns:
        SessionSummary with prompt, response and time span totals

    Raises:
        OSError: If the file cannot be opened or read
    """
    prompt_count = 0
    primary_responses = 0
    secondary_responses = 0
    skipped = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    with open(file_path, "rb") as f:
        for line in f:
            parsed = classify_line(line)

            if parsed.kind is LineKind.UNPARSEABLE:
                skipped += 1
                continue

            if parsed.timestamp is not None:
                if start_time is None or parsed.timestamp < start_time:
                    start_time = parsed.timestamp
                if end_time is None or parsed.timestamp > end_time:
                    end_time = parsed.timestamp

            if parsed.kind is LineKind.PROMPT:
                prompt_count += 1
            elif parsed.kind is LineKind.PRIMARY_RESPONSE:
                primary_responses += 1
            elif parsed.kind is LineKind.SECONDARY_RESPONSE:
                secondary_responses += 1

    if skipped:
        logger.debug("Skipped %d malformed lines in %s", skipped, file_path)

    duration_hours = 0.0
    if start_time is not None and end_time is not None:
        duration_hours = (end_time - start_time).total_seconds() / 3600

    return SessionSummary(
        session_id=file_path.stem,
        project=file_path.parent.name,
        start_time=start_time,
        end_time=end_time,
        duration_hours=duration_hours,
        prompt_count=prompt_count,
        primary_responses=primary_responses,
        secondary_responses=secondary_responses,
    )


#endregion
