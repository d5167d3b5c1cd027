"""Domain services (pure logic, no database or network access)."""

from studycompanion.domain.services.time_tracking_metrics import (
    DailyTime,
    TimeBreakdownItem,
    TimeTrackingMetrics,
    format_duration,
)

__all__ = [
    "DailyTime",
    "TimeBreakdownItem",
    "TimeTrackingMetrics",
    "format_duration",
]
