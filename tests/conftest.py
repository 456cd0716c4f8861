"""Shared test fixtures."""

import json
from pathlib import Path
from typing import Callable, Optional

import pytest


# -- Entry builders ------------------------------------------------------------


def user_entry(text, timestamp: Optional[str] = None, **overrides) -> dict:
    """A prompt typed by the user, as Claude Code logs it."""
    entry = {
        "type": "user",
        "userType": "external",
        "isMeta": False,
        "message": {"role": "user", "content": text},
    }
    if timestamp is not None:
        entry["timestamp"] = timestamp
    entry.update(overrides)
    return entry


def assistant_entry(model: Optional[str], timestamp: Optional[str] = None) -> dict:
    entry = {
        "type": "assistant",
        "message": {
            "role": "assistant",
            "model": model,
            "content": [{"type": "text", "text": "Done."}],
        },
    }
    if timestamp is not None:
        entry["timestamp"] = timestamp
    return entry


# -- Fixtures ------------------------------------------------------------------


@pytest.fixture
def projects_dir(tmp_path: Path) -> Path:
    """Empty fake ~/.claude/projects directory."""
    path = tmp_path / ".claude" / "projects"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def write_session(projects_dir: Path) -> Callable[..., Path]:
    """Write a session JSONL file under projects_dir/<project>/<session_id>.jsonl."""

    def _write(entries: list, project: str = "-home-user-app", session_id: str = "session-001",
               extra_lines: Optional[list[str]] = None) -> Path:
        project_dir = projects_dir / project
        project_dir.mkdir(parents=True, exist_ok=True)
        path = project_dir / f"{session_id}.jsonl"
        lines = [json.dumps(entry) for entry in entries]
        if extra_lines:
            lines.extend(extra_lines)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
