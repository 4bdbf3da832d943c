"""Base segment interface for status line components."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional

from ..config.schema import SegmentId
from ..types import InputData, SegmentData


class Segment(ABC):
    """Base segment interface - all segments must implement this.

    Segment metadata (segment_id, display_name, description) is set by the
    @register_segment decorator. Each segment parses its own options map into
    a typed option object on construction.
    """

    # Class attributes set by @register_segment decorator
    segment_id: ClassVar[Optional[SegmentId]] = None
    display_name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    def __init__(self, options: Optional[dict[str, Any]] = None):
        self.options: dict[str, Any] = dict(options or {})

    @abstractmethod
    def collect(self, input_data: InputData) -> Optional[SegmentData]:
        """Collect segment content.

        Args:
            input_data: Parsed statusline payload

        Returns:
            SegmentData, or None to omit the segment
        """
        pass
