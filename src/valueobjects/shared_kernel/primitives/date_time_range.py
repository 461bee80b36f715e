from __future__ import annotations

from datetime import datetime

from .instant_granularity import UTC_SECOND
from .temporal_range import TemporalRange


class DateTimeRange(TemporalRange[datetime]):
    """
    DateTimeRange — closed range of timezone-aware instants.

    Rules:
    - unit of `gap`/`diff` arithmetic is one second
    - naive datetimes are pinned to UTC, bare dates become UTC midnight
    - serialization: ISO-8601 with numeric offset, e.g.
      `2006-09-06T06:09:06+00:00/2006-09-15T06:09:15+00:00`
    """

    __slots__ = ()

    granularity = UTC_SECOND

    PAST = "1000-01-01 00:00:00"
    FUTURE = "9999-12-31 23:59:59"
