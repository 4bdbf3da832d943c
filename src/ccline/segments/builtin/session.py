"""Session duration segment."""

from typing import Optional

from ...config.options import SessionSegmentConfig, TimeFormat
from ...config.schema import SegmentId
from ...types import CostInfo, InputData, SegmentData
from ...utils.formatting import pluralize
from ..base import Segment
from ..registry import register_segment

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000


def format_duration_auto(
    ms: int, show_milliseconds: bool = False, compact: bool = True
) -> str:
    if show_milliseconds and ms < MS_PER_SECOND:
        return f"{ms}ms"

    if ms < MS_PER_MINUTE:
        seconds = ms // MS_PER_SECOND
        if show_milliseconds and ms % MS_PER_SECOND:
            return f"{seconds}.{(ms % MS_PER_SECOND) // 100}s"
        return f"{seconds}s"

    if ms < MS_PER_HOUR:
        minutes = ms // MS_PER_MINUTE
        seconds = (ms % MS_PER_MINUTE) // MS_PER_SECOND
        if compact:
            return f"{minutes}m{seconds}s" if seconds else f"{minutes}m"
        return f"{minutes} min {seconds} sec" if seconds else f"{minutes} min"

    hours = ms // MS_PER_HOUR
    minutes = (ms % MS_PER_HOUR) // MS_PER_MINUTE
    if compact:
        return f"{hours}h{minutes}m" if minutes else f"{hours}h"
    return f"{hours} hr {minutes} min" if minutes else f"{hours} hr"


def format_duration_short(ms: int) -> str:
    if ms < MS_PER_SECOND:
        return f"{ms}ms"
    if ms < MS_PER_MINUTE:
        return f"{ms // MS_PER_SECOND}s"
    if ms < MS_PER_HOUR:
        return f"{ms // MS_PER_MINUTE}m{(ms % MS_PER_MINUTE) // MS_PER_SECOND}s"
    return f"{ms // MS_PER_HOUR}h{(ms % MS_PER_HOUR) // MS_PER_MINUTE}m"


def format_duration_long(ms: int) -> str:
    if ms < MS_PER_SECOND:
        return f"{ms} milliseconds"
    if ms < MS_PER_MINUTE:
        return pluralize(ms // MS_PER_SECOND, "second")
    if ms < MS_PER_HOUR:
        result = pluralize(ms // MS_PER_MINUTE, "minute")
        seconds = (ms % MS_PER_MINUTE) // MS_PER_SECOND
        return f"{result} {pluralize(seconds, 'second')}" if seconds else result
    result = pluralize(ms // MS_PER_HOUR, "hour")
    minutes = (ms % MS_PER_HOUR) // MS_PER_MINUTE
    return f"{result} {pluralize(minutes, 'minute')}" if minutes else result


def format_duration_digital(ms: int) -> str:
    total_seconds = ms // MS_PER_SECOND
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def format_line_changes(cost_info: CostInfo) -> str:
    added = cost_info.total_lines_added
    removed = cost_info.total_lines_removed

    if added is not None and removed is not None:
        return f"+{added} -{removed}" if added > 0 or removed > 0 else ""
    if added is not None:
        return f"+{added}" if added > 0 else ""
    if removed is not None:
        return f"-{removed}" if removed > 0 else ""
    return ""


@register_segment(
    SegmentId.SESSION,
    display_name="Session",
    description="Session duration and lines changed",
)
class SessionSegment(Segment):
    """Display how long the session has been running."""

    def __init__(self, options=None):
        super().__init__(options)
        self.config = SessionSegmentConfig.from_options(self.options)

    def format_duration(self, ms: int) -> str:
        time_format = self.config.time_format
        if time_format == TimeFormat.SHORT:
            return format_duration_short(ms)
        if time_format == TimeFormat.LONG:
            return format_duration_long(ms)
        if time_format == TimeFormat.DIGITAL:
            return format_duration_digital(ms)
        return format_duration_auto(
            ms, self.config.show_milliseconds, self.config.compact_format
        )

    def collect(self, input_data: InputData) -> Optional[SegmentData]:
        cost_info = input_data.cost
        if cost_info is None or cost_info.total_duration_ms is None:
            return None

        duration_ms = cost_info.total_duration_ms
        metadata = {
            "duration_ms": str(duration_ms),
            "time_format": self.config.time_format.value,
        }
        if cost_info.total_lines_added is not None:
            metadata["lines_added"] = str(cost_info.total_lines_added)
        if cost_info.total_lines_removed is not None:
            metadata["lines_removed"] = str(cost_info.total_lines_removed)

        return SegmentData(
            primary=self.format_duration(duration_ms),
            secondary=format_line_changes(cost_info) if self.config.show_line_changes else "",
            metadata=metadata,
        )
