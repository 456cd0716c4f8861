"""vibe-monitor: track Claude Code usage against subscription rate limits."""

__version__ = "0.1.0"
