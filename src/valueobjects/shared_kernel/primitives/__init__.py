"""
Shared Kernel primitives.

This package re-exports the value objects so that callers can import them
from one place:

    from valueobjects.shared_kernel.primitives import DateRange, DateTimeRange
"""

from .date_range import DateRange
from .date_time_range import DateTimeRange
from .instant_granularity import (
    CALENDAR_DAY,
    UTC_SECOND,
    CalendarDayGranularity,
    InstantGranularity,
    WallClockSecondGranularity,
)
from .ip_address import IpAddress
from .mac_address import MacAddress
from .money import CurrencyFormatter, Money, PlainCurrencyFormatter
from .range_bounds import RangeBounds
from .range_series import is_contiguous, series_end, series_start, sort_ranges
from .temporal_range import RangeBoundedness, TemporalRange

__all__ = [
    "CALENDAR_DAY",
    "CalendarDayGranularity",
    "CurrencyFormatter",
    "DateRange",
    "DateTimeRange",
    "InstantGranularity",
    "IpAddress",
    "MacAddress",
    "Money",
    "PlainCurrencyFormatter",
    "RangeBoundedness",
    "RangeBounds",
    "TemporalRange",
    "UTC_SECOND",
    "WallClockSecondGranularity",
    "is_contiguous",
    "series_end",
    "series_start",
    "sort_ranges",
]
