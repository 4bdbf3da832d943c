"""Built-in segments for the status line.

Importing this module registers all built-in segments with the registry.
"""

from .cost import CostSegment
from .directory import DirectorySegment
from .git import GitSegment
from .model import ModelSegment
from .output_style import OutputStyleSegment
from .session import SessionSegment
from .usage import UsageSegment

__all__ = [
    "ModelSegment",
    "DirectorySegment",
    "GitSegment",
    "UsageSegment",
    "CostSegment",
    "SessionSegment",
    "OutputStyleSegment",
]
