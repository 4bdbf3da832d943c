"""Model name segment."""

import re

from typing import Optional

from ...config.options import ModelDisplayFormat, ModelSegmentConfig
from ...config.schema import SegmentId
from ...types import InputData, SegmentData
from ...utils.models import get_model_registry
from ..base import Segment
from ..registry import register_segment

ABBREVIATIONS = (
    ("claude-", ""),
    ("3-5-", "3.5-"),
    ("sonnet", "Sonnet"),
    ("haiku", "Haiku"),
    ("opus", "Opus"),
    ("gpt-", "GPT-"),
    ("turbo", "Turbo"),
)

_VERSION_RUN = re.compile(r"[0-9.]+")


def abbreviate_model_name(name: str) -> str:
    for old, new in ABBREVIATIONS:
        name = name.replace(old, new)
    return name


def extract_version(model_id: str) -> Optional[str]:
    """Best-effort model version from an id such as ``claude-3-5-sonnet``."""
    if "3-5" in model_id or "3.5" in model_id:
        return "3.5"
    if "4-" in model_id or "4." in model_id:
        return "4"
    if "3-" in model_id:
        return "3"
    match = _VERSION_RUN.search(model_id)
    return match.group(0) if match else None


@register_segment(
    SegmentId.MODEL,
    display_name="Model",
    description="Claude model name (e.g., Sonnet 4.5)",
)
class ModelSegment(Segment):
    """Display the model name from the registry or Claude Code."""

    def __init__(self, options=None):
        super().__init__(options)
        self.config = ModelSegmentConfig.from_options(self.options)

    def format_model_name(self, model_id: str, display_name: str) -> str:
        base_name = get_model_registry().get_display_name(model_id) or display_name
        if self.config.abbreviate_names:
            return abbreviate_model_name(base_name)
        return base_name

    def collect(self, input_data: InputData) -> Optional[SegmentData]:
        model = input_data.model
        primary = self.format_model_name(model.id, model.display_name)
        secondary = ""

        if self.config.display_format == ModelDisplayFormat.FULL and self.config.show_version:
            version = extract_version(model.id)
            if version:
                secondary = f"v{version}"
        elif self.config.display_format == ModelDisplayFormat.CUSTOM:
            primary = self.config.custom_names.get(model.id, primary)

        return SegmentData(
            primary=primary,
            secondary=secondary,
            metadata={
                "model_id": model.id,
                "display_name": model.display_name,
                "formatted_name": primary,
                "display_format": self.config.display_format.value,
            },
        )
