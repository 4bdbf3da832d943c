"""Segment registry for looking up collectors by segment id."""

from typing import Callable, Optional

from ..config.schema import SegmentId
from .base import Segment

# Global registry of segment id -> segment class
_SEGMENT_REGISTRY: dict[SegmentId, type[Segment]] = {}


def register_segment(
    segment_id: SegmentId,
    display_name: str = "",
    description: str = "",
) -> Callable[[type[Segment]], type[Segment]]:
    """Decorator to register segment classes with metadata.

    Usage:
        @register_segment(SegmentId.MODEL, display_name="Model",
                          description="Claude model name")
        class ModelSegment(Segment):
            def collect(self, input_data):
                ...

    Args:
        segment_id: Segment identifier used in the config file
        display_name: Human-readable name (defaults to formatted id)
        description: Description of what the segment displays
    """

    def decorator(cls: type[Segment]) -> type[Segment]:
        cls.segment_id = segment_id
        cls.display_name = display_name or segment_id.value.replace("_", " ").title()
        cls.description = description

        _SEGMENT_REGISTRY[segment_id] = cls
        return cls

    return decorator


def get_segment(segment_id: SegmentId) -> Optional[type[Segment]]:
    """Get segment class by id.

    Args:
        segment_id: Segment identifier

    Returns:
        Segment class or None if no collector is registered
    """
    return _SEGMENT_REGISTRY.get(segment_id)

