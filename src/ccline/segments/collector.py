"""Segment collection: run each enabled segment in configured order."""

from ..config.schema import Config, SegmentConfig
from ..types import InputData, SegmentData
from ..utils.debug import debug_log
from . import builtin  # noqa: F401
from .registry import get_segment


def collect_all(
    config: Config, input_data: InputData
) -> list[tuple[SegmentConfig, SegmentData]]:
    """Collect data for every enabled segment.

    Disabled segments are skipped without running their collector. Segments
    with no registered collector, or whose collector returns None, are
    left out of the result.

    Args:
        config: Loaded configuration
        input_data: Parsed statusline payload

    Returns:
        (segment config, segment data) pairs in configured order
    """
    results: list[tuple[SegmentConfig, SegmentData]] = []

    for segment_config in config.segments:
        if not segment_config.enabled:
            continue

        segment_class = get_segment(segment_config.id)
        if segment_class is None:
            debug_log(f"No collector registered for segment {segment_config.id.value}")
            continue

        data = segment_class(segment_config.options).collect(input_data)
        if data is not None:
            results.append((segment_config, data))

    return results
