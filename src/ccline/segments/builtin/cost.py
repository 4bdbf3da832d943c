"""Session cost segment."""

from typing import Optional

from ...config.options import CostSegmentConfig, CurrencyFormat
from ...config.schema import SegmentId
from ...types import InputData, SegmentData
from ..base import Segment
from ..registry import register_segment


def format_cost(cost: float, currency_format: CurrencyFormat, precision: int = 2) -> str:
    """Format a USD amount.

    Args:
        cost: Amount in dollars
        currency_format: auto, fixed, compact or scientific
        precision: Decimal places for the fixed format

    Returns:
        Formatted amount (e.g., "$0.42", "4¢", "$4.20e-01")
    """
    if currency_format == CurrencyFormat.FIXED:
        return f"${cost:.{precision}f}"
    if currency_format == CurrencyFormat.SCIENTIFIC:
        return f"${cost:.2e}"

    if cost == 0:
        return "$0"

    if currency_format == CurrencyFormat.COMPACT:
        if cost < 0.01:
            return f"{cost * 100:.1f}¢"
        if cost < 1.0:
            return f"{cost * 100:.0f}¢"
        return f"${cost:.1f}"

    if cost < 0.01:
        return f"${cost:.3f}"
    return f"${cost:.2f}"


@register_segment(
    SegmentId.COST,
    display_name="Cost",
    description="Total session cost in USD",
)
class CostSegment(Segment):
    """Display the session's total cost."""

    def __init__(self, options=None):
        super().__init__(options)
        self.config = CostSegmentConfig.from_options(self.options)

    def collect(self, input_data: InputData) -> Optional[SegmentData]:
        cost_info = input_data.cost
        if cost_info is None or cost_info.total_cost_usd is None:
            return None

        cost = cost_info.total_cost_usd
        metadata = {
            "cost": str(cost),
            "currency_format": self.config.currency_format.value,
            "warning_threshold": str(cost >= self.config.threshold_warning).lower(),
        }
        if cost_info.total_duration_ms is not None:
            metadata["duration_ms"] = str(cost_info.total_duration_ms)

        return SegmentData(
            primary=format_cost(cost, self.config.currency_format, self.config.precision),
            metadata=metadata,
        )
