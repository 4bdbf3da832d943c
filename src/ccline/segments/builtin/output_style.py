"""Output style segment."""

from typing import Optional

from ...config.options import OutputStyleDisplayFormat, OutputStyleSegmentConfig
from ...config.schema import SegmentId
from ...types import InputData, SegmentData
from ..base import Segment
from ..registry import register_segment

ABBREVIATED_NAMES = {
    "engineer-professional": "Eng-Pro",
    "creative": "Creative",
    "concise": "Concise",
    "detailed": "Detail",
    "technical": "Tech",
    "casual": "Casual",
    "formal": "Formal",
}

STYLE_DESCRIPTIONS = {
    "engineer-professional": "Professional engineering style",
    "creative": "Creative and expressive style",
    "concise": "Brief and to-the-point style",
    "detailed": "Comprehensive and thorough style",
    "technical": "Technical documentation style",
    "casual": "Informal and conversational style",
    "formal": "Formal business style",
    "academic": "Academic writing style",
    "tutorial": "Step-by-step tutorial style",
}

MAX_UNKNOWN_NAME_LENGTH = 6


def abbreviate_style_name(name: str) -> str:
    known = ABBREVIATED_NAMES.get(name.lower())
    if known:
        return known
    if len(name) <= MAX_UNKNOWN_NAME_LENGTH:
        return name
    return name[:MAX_UNKNOWN_NAME_LENGTH] + "..."


def describe_style(name: str) -> str:
    return STYLE_DESCRIPTIONS.get(name.lower(), f"Custom style: {name}")


@register_segment(
    SegmentId.OUTPUT_STYLE,
    display_name="Output Style",
    description="Active Claude Code output style",
)
class OutputStyleSegment(Segment):
    """Display the active output style name."""

    def __init__(self, options=None):
        super().__init__(options)
        self.config = OutputStyleSegmentConfig.from_options(self.options)

    def format_style_name(self, name: str) -> str:
        config = self.config
        if config.display_format == OutputStyleDisplayFormat.FULL and config.show_description:
            return f"{name} (output style)"
        if (
            config.display_format == OutputStyleDisplayFormat.ABBREVIATED
            and config.abbreviate_names
        ):
            return abbreviate_style_name(name)
        if config.display_format == OutputStyleDisplayFormat.CUSTOM:
            return config.custom_names.get(name, name)
        return name

    def collect(self, input_data: InputData) -> Optional[SegmentData]:
        if input_data.output_style is None:
            return None

        name = input_data.output_style.name
        config = self.config
        show_description = (
            config.show_description and config.display_format == OutputStyleDisplayFormat.FULL
        )

        metadata = {
            "style_name": name,
            "display_format": config.display_format.value,
            "abbreviate_names": str(config.abbreviate_names).lower(),
            "show_description": str(config.show_description).lower(),
        }
        if name in config.custom_names:
            metadata["custom_name"] = config.custom_names[name]

        return SegmentData(
            primary=self.format_style_name(name),
            secondary=describe_style(name) if show_description else "",
            metadata=metadata,
        )
