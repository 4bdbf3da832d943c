"""Locate the most recent token usage in a Claude Code transcript.

Transcripts are JSONL files stored one per session in a project directory.
Usage is resolved by trying these strategies in order:

1. ``primary``: the transcript file itself. If its last line is a
   ``summary`` entry pointing at a ``leafUuid``, the sibling transcripts are
   searched for that message (``leaf_uuid``); otherwise the file is scanned
   backwards for the newest assistant message carrying usage.
2. ``most_recent_sibling``: when the transcript file does not exist, the most
   recently modified transcript in the same directory is used instead.

The line-level helpers are pure functions over lists of lines.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..utils.debug import debug_log
from .usage import NormalizedUsage, RawUsage

TRANSCRIPT_GLOB = "*.jsonl"


class TranscriptMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    usage: Optional[RawUsage] = None


class TranscriptEntry(BaseModel):
    """One line of a transcript. Only the fields used for usage lookup."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: Optional[str] = None
    uuid: Optional[str] = None
    parent_uuid: Optional[str] = Field(default=None, alias="parentUuid")
    leaf_uuid: Optional[str] = Field(default=None, alias="leafUuid")
    summary: Optional[str] = None
    message: Optional[TranscriptMessage] = None

    @property
    def usage(self) -> Optional[RawUsage]:
        return self.message.usage if self.message else None


@dataclass
class UsageResolution:
    """Usage found in a transcript and how it was found."""

    usage: NormalizedUsage
    strategy: str
    source_path: Path


def parse_entry(line: str) -> Optional[TranscriptEntry]:
    """Parse one transcript line, or None for blank or malformed lines."""
    stripped = line.strip()
    if not stripped:
        return None
    try:
        return TranscriptEntry.model_validate_json(stripped)
    except ValidationError:
        return None


def find_latest_usage(lines: list[str]) -> Optional[NormalizedUsage]:
    """Scan backwards for the newest assistant entry with a usage block."""
    for line in reversed(lines):
        entry = parse_entry(line)
        if entry is None or entry.type != "assistant":
            continue
        if entry.usage is not None:
            return entry.usage.normalize()
    return None


def find_summary_leaf_uuid(lines: list[str]) -> Optional[str]:
    """Return the leafUuid if the last line is a summary entry."""
    for line in reversed(lines):
        if not line.strip():
            continue
        entry = parse_entry(line)
        if entry is not None and entry.type == "summary" and entry.leaf_uuid:
            return entry.leaf_uuid
        return None
    return None


def find_assistant_usage_by_uuid(
    lines: list[str], target_uuid: str
) -> Optional[NormalizedUsage]:
    for line in lines:
        entry = parse_entry(line)
        if (
            entry is not None
            and entry.uuid == target_uuid
            and entry.type == "assistant"
            and entry.usage is not None
        ):
            return entry.usage.normalize()
    return None


def find_usage_by_uuid(lines: list[str], target_uuid: str) -> Optional[NormalizedUsage]:
    """Resolve usage for the message with target_uuid.

    An assistant message yields its own usage. A user message resolves through
    its parentUuid to the assistant message it replied to in the same file.
    """
    for line in lines:
        entry = parse_entry(line)
        if entry is None or entry.uuid != target_uuid:
            continue
        if entry.type == "assistant":
            return entry.usage.normalize() if entry.usage is not None else None
        if entry.type == "user" and entry.parent_uuid:
            return find_assistant_usage_by_uuid(lines, entry.parent_uuid)
        return None
    return None


def read_lines(path: Path) -> Optional[list[str]]:
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.read().splitlines()
    except OSError as e:
        debug_log(f"Failed to read transcript {path}: {e}", transcript_path=str(path))
        return None


def list_transcripts(project_dir: Path) -> list[Path]:
    try:
        return sorted(p for p in project_dir.glob(TRANSCRIPT_GLOB) if p.is_file())
    except OSError:
        return []


def find_usage_by_leaf_uuid(
    leaf_uuid: str, project_dir: Path
) -> Optional[NormalizedUsage]:
    """Search every transcript in project_dir for the leaf message."""
    for path in list_transcripts(project_dir):
        lines = read_lines(path)
        if not lines:
            continue
        usage = find_usage_by_uuid(lines, leaf_uuid)
        if usage is not None:
            debug_log(f"Resolved leafUuid {leaf_uuid} in {path.name}")
            return usage
    return None


def usage_from_transcript_file(path: Path) -> Optional[NormalizedUsage]:
    """Resolve usage from one transcript, following a trailing summary entry."""
    lines = read_lines(path)
    if not lines:
        return None

    leaf_uuid = find_summary_leaf_uuid(lines)
    if leaf_uuid:
        return find_usage_by_leaf_uuid(leaf_uuid, path.parent)

    return find_latest_usage(lines)


def most_recent_transcript(project_dir: Path) -> Optional[Path]:
    """Most recently modified transcript in project_dir."""
    candidates = []
    for path in list_transcripts(project_dir):
        try:
            candidates.append((path.stat().st_mtime, path))
        except OSError:
            continue
    if not candidates:
        return None
    return max(candidates, key=lambda item: item[0])[1]


def _primary_strategy(transcript: Path) -> Optional[tuple[NormalizedUsage, Path]]:
    if not transcript.is_file():
        return None
    usage = usage_from_transcript_file(transcript)
    return (usage, transcript) if usage is not None else None


def _most_recent_sibling_strategy(
    transcript: Path,
) -> Optional[tuple[NormalizedUsage, Path]]:
    if transcript.exists() or not transcript.parent.is_dir():
        return None
    recent = most_recent_transcript(transcript.parent)
    if recent is None:
        return None
    usage = usage_from_transcript_file(recent)
    return (usage, recent) if usage is not None else None


ResolutionStrategy = Callable[[Path], Optional[tuple[NormalizedUsage, Path]]]

RESOLUTION_STRATEGIES: tuple[tuple[str, ResolutionStrategy], ...] = (
    ("primary", _primary_strategy),
    ("most_recent_sibling", _most_recent_sibling_strategy),
)


def resolve_transcript_usage(transcript_path: str) -> Optional[UsageResolution]:
    """Find the most recent usage for a session.

    Args:
        transcript_path: Path to the session's JSONL transcript

    Returns:
        UsageResolution, or None when no strategy found a usage record
    """
    if not transcript_path:
        return None

    transcript = Path(transcript_path)
    for name, strategy in RESOLUTION_STRATEGIES:
        found = strategy(transcript)
        if found is not None:
            usage, source = found
            debug_log(
                f"Usage resolved via {name} from {source}",
                transcript_path=transcript_path,
            )
            return UsageResolution(usage=usage, strategy=name, source_path=source)

    debug_log("No usage found in transcript", transcript_path=transcript_path)
    return None
