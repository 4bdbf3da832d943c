"""Context window usage segment."""

from enum import Enum
from typing import Optional

from ...config.options import TokenUnit, UsageDisplayFormat, UsageSegmentConfig
from ...config.schema import SegmentId
from ...parsers.transcript import resolve_transcript_usage
from ...types import InputData, SegmentData
from ...utils.formatting import (
    format_percentage,
    format_tokens_auto,
    format_tokens_k,
    render_progress_bar,
)
from ...utils.models import get_model_registry
from ..base import Segment
from ..registry import register_segment


class UsageLevel(str, Enum):
    NORMAL = "Normal"
    WARNING = "Warning"
    CRITICAL = "Critical"


def usage_level(percentage: float, warning: int, critical: int) -> UsageLevel:
    if percentage >= critical:
        return UsageLevel.CRITICAL
    if percentage >= warning:
        return UsageLevel.WARNING
    return UsageLevel.NORMAL


@register_segment(
    SegmentId.USAGE,
    display_name="Context Usage",
    description="Context window usage as percentage and token count",
)
class UsageSegment(Segment):
    """Display how much of the model's context window is in use."""

    def __init__(self, options=None):
        super().__init__(options)
        self.config = UsageSegmentConfig.from_options(self.options)

    def format_tokens(self, tokens: int) -> str:
        compact = self.config.compact_format
        if self.config.token_unit == TokenUnit.K:
            return format_tokens_k(tokens, compact)
        if self.config.token_unit == TokenUnit.RAW:
            return str(tokens)
        return format_tokens_auto(tokens, compact)

    def format_usage(self, tokens: int, limit: int, percentage: float) -> str:
        config = self.config
        pct_text = format_percentage(percentage)
        tokens_text = self.format_tokens(tokens)
        if config.show_limit:
            tokens_text = f"{tokens_text}/{self.format_tokens(limit)}"

        if config.display_format == UsageDisplayFormat.PERCENTAGE:
            return pct_text
        if config.display_format == UsageDisplayFormat.TOKENS:
            return f"{tokens_text} tokens"
        if config.display_format == UsageDisplayFormat.BAR:
            parts = [render_progress_bar(percentage, config.bar_width)]
            if config.bar_show_percentage:
                parts.append(pct_text)
            if config.bar_show_tokens:
                parts.append(tokens_text)
            return " ".join(parts)
        return f"{pct_text} · {tokens_text} tokens"

    def collect(self, input_data: InputData) -> Optional[SegmentData]:
        resolution = resolve_transcript_usage(input_data.transcript_path)
        if resolution is None:
            return None

        model_id = input_data.model.id
        limit = get_model_registry().get_context_limit(model_id)
        tokens = resolution.usage.display_tokens()
        percentage = tokens / limit * 100
        level = usage_level(
            percentage, self.config.warning_threshold, self.config.critical_threshold
        )

        return SegmentData(
            primary=self.format_usage(tokens, limit, percentage),
            metadata={
                "tokens": str(tokens),
                "limit": str(limit),
                "percentage": f"{percentage:.1f}",
                "level": level.value,
                "model_id": model_id,
                "calculation_source": resolution.usage.calculation_source,
                "usage_source": resolution.strategy,
            },
        )
