from __future__ import annotations

from datetime import date

from .instant_granularity import CALENDAR_DAY
from .temporal_range import TemporalRange


class DateRange(TemporalRange[date]):
    """
    DateRange — closed range of calendar dates.

    Rules:
    - unit of `gap`/`diff` arithmetic is one day
    - serialization: `YYYY-MM-DD/YYYY-MM-DD`, empty range -> ""
    - datetimes passed as bounds are truncated to their date
    """

    __slots__ = ()

    granularity = CALENDAR_DAY

    # Far-past / far-future ISO-8601 dates standing in for unbounded sides.
    PAST = "1000-01-01"
    FUTURE = "9999-01-01"
