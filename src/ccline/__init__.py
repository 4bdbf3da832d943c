"""ccline - a segment-based statusline renderer for Claude Code."""

__version__ = "1.0.0"
