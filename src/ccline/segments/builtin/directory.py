"""Working directory segment."""

import os
import re

from typing import Optional

from ...config.options import CaseStyle, DirectorySegmentConfig
from ...config.schema import SegmentId
from ...types import InputData, SegmentData
from ..base import Segment
from ..registry import register_segment

ELLIPSIS = "..."
ROOT_NAME = "root"

_SEPARATORS = re.compile(r"[/\\]")


def _under(path: str, home: str) -> bool:
    if not path.startswith(home):
        return False
    if len(path) == len(home) or home[-1] in "/\\":
        return True
    return path[len(home)] in "/\\"


def abbreviate_home(path: str) -> str:
    """Replace a leading home directory with ``~``."""
    for var in ("HOME", "USERPROFILE"):
        home = os.environ.get(var)
        if home and _under(path, home):
            return "~" + path[len(home):]
    return path


def split_path(path: str) -> list[str]:
    """Split on both Unix and Windows separators, dropping empty parts."""
    return [part for part in _SEPARATORS.split(path) if part]


def truncate_tail(text: str, max_length: int) -> str:
    """Keep the end of text, prefixed with an ellipsis, within max_length."""
    if len(text) <= max_length:
        return text
    if max_length <= len(ELLIPSIS):
        return ELLIPSIS
    return ELLIPSIS + text[len(text) - (max_length - len(ELLIPSIS)):]


def apply_case_style(text: str, case_style: CaseStyle) -> str:
    if case_style == CaseStyle.LOWERCASE:
        return text.lower()
    if case_style == CaseStyle.UPPERCASE:
        return text.upper()
    return text


@register_segment(
    SegmentId.DIRECTORY,
    display_name="Directory",
    description="Current working directory name",
)
class DirectorySegment(Segment):
    """Display the current directory, its parent, or the full path."""

    def __init__(self, options=None):
        super().__init__(options)
        self.config = DirectorySegmentConfig.from_options(self.options)

    def format_path(self, path: str) -> str:
        if self.config.abbreviate_home:
            path = abbreviate_home(path)

        if self.config.show_full_path:
            text = path
        else:
            parts = split_path(path)
            if not parts:
                text = ROOT_NAME
            elif self.config.show_parent and len(parts) >= 2:
                text = f"{parts[-2]}/{parts[-1]}"
            else:
                text = parts[-1]

        return apply_case_style(
            truncate_tail(text, self.config.max_length), self.config.case_style
        )

    def collect(self, input_data: InputData) -> Optional[SegmentData]:
        current_dir = input_data.workspace.current_dir
        config = self.config

        return SegmentData(
            primary=self.format_path(current_dir),
            metadata={
                "full_path": current_dir,
                "max_length": str(config.max_length),
                "show_full_path": str(config.show_full_path).lower(),
                "abbreviate_home": str(config.abbreviate_home).lower(),
                "show_parent": str(config.show_parent).lower(),
                "case_style": config.case_style.value,
            },
        )
