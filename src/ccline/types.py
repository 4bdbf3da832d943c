"""Data types for ccline."""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ModelInfo(BaseModel):
    """Model identity reported by Claude Code."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str


class Workspace(BaseModel):
    """Workspace information from the Claude Code payload."""

    model_config = ConfigDict(frozen=True)

    current_dir: str


class CostInfo(BaseModel):
    """Session cost and activity totals. Every field is optional."""

    model_config = ConfigDict(frozen=True)

    total_cost_usd: Optional[float] = None
    total_duration_ms: Optional[int] = None
    total_api_duration_ms: Optional[int] = None
    total_lines_added: Optional[int] = None
    total_lines_removed: Optional[int] = None


class OutputStyle(BaseModel):
    """Active output style."""

    model_config = ConfigDict(frozen=True)

    name: str


class InputData(BaseModel):
    """Statusline payload read once from stdin.

    Unknown top-level keys sent by newer Claude Code versions are ignored.
    """

    model_config = ConfigDict(frozen=True)

    model: ModelInfo
    workspace: Workspace
    transcript_path: str
    cost: Optional[CostInfo] = None
    output_style: Optional[OutputStyle] = None


@dataclass(frozen=True)
class SegmentData:
    """Output of a segment collector.

    Attributes:
        primary: Main text of the segment
        secondary: Auxiliary text, empty string when absent
        metadata: Diagnostic values, never rendered
    """

    primary: str
    secondary: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
