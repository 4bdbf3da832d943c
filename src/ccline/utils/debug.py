"""Debug logging utilities."""

import os
import sys
import time

from pathlib import Path

DEBUG_ENV_VAR = "CCLINE_DEBUG"


def _logs_dir() -> Path:
    config_home = os.getenv("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "ccline" / "logs"


def _session_from_transcript(transcript_path: str) -> str:
    filename = os.path.basename(transcript_path)
    if filename.endswith(".jsonl"):
        return filename[:-6]
    return ""


def debug_log(message: str, session_id: str = "", transcript_path: str = "") -> None:
    """Append a debug line to the per-session log file when debugging is enabled.

    Nothing is written unless the CCLINE_DEBUG environment variable is set.

    Args:
        message: Debug message to log
        session_id: Optional session identifier
        transcript_path: Optional transcript path, used to derive a session ID
    """
    if not os.getenv(DEBUG_ENV_VAR):
        return

    effective_session_id = session_id
    if not effective_session_id and transcript_path:
        effective_session_id = _session_from_transcript(transcript_path)
    if not effective_session_id:
        effective_session_id = "unknown"

    logs_dir = _logs_dir()
    log_file = logs_dir / f"ccline_debug_{effective_session_id}.log"
    timestamp = time.strftime("%Y-%m-%d %H:%M:%S")

    session_prefix = f"[{session_id}] " if session_id else ""
    log_message = f"[{timestamp}] {session_prefix}{message}\n"

    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(log_message)
    except OSError:
        print(
            f"DEBUG (couldn't write to {log_file}): {session_prefix}{message}",
            file=sys.stderr,
        )
