"""
Inbound adapter turning loosely-typed records into typed range bounds.

Related: valueobjects.shared_kernel.primitives.range_bounds,
  valueobjects.shared_kernel.primitives.temporal_range
"""

from __future__ import annotations

import logging
from collections.abc import Set
from datetime import date, datetime, tzinfo
from numbers import Number
from typing import Any, Mapping, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from valueobjects.platform.config import ValueObjectsConfig
from valueobjects.platform.errors import FormatError
from valueobjects.shared_kernel.primitives import (
    DateRange,
    DateTimeRange,
    InstantGranularity,
    RangeBounds,
    TemporalRange,
)

log = logging.getLogger(__name__)

RangeT = TypeVar("RangeT", bound=TemporalRange[Any])

_DEFAULT_START_KEY = "start"
_DEFAULT_END_KEY = "end"


class LooseRangePayload(BaseModel):
    """
    LooseRangePayload — validated shape of the two optional range members.

    Each member is either an already-typed instant or text for the instant parser.
    Strict mode keeps numbers and other types out (no implicit epoch conversion).
    """

    model_config = ConfigDict(strict=True, frozen=True)

    start: datetime | date | str | None = None
    end: datetime | date | str | None = None


def bounds_from_loose_data(
    granularity: InstantGranularity[Any],
    record: Any,
    start_key: str = _DEFAULT_START_KEY,
    end_key: str = _DEFAULT_END_KEY,
    *,
    default_tz: tzinfo | None = None,
) -> RangeBounds[Any]:
    """
    Read optional start/end members of a mapping or object into `RangeBounds`.

    Args:
        granularity: Granularity used to parse text members.
        record: Mapping or attribute-bearing object.
        start_key: Key or attribute name of the start member.
        end_key: Key or attribute name of the end member.
        default_tz: Zone attached to naive text members.
    Returns:
        RangeBounds[Any]: Typed optional pair; missing or `None` members stay absent.
    Assumptions:
        Typed members are used as-is, the range constructor coerces them.
    Raises:
        TypeError: If `record` is neither a mapping nor an attribute-bearing object.
        FormatError: If a member has an unsupported type or unparsable text.
    Side Effects:
        None.
    """
    raw_members = _read_members(record=record, start_key=start_key, end_key=end_key)
    try:
        payload = LooseRangePayload.model_validate(raw_members)
    except ValidationError as error:
        raise FormatError(
            "range members must be dates, datetimes or instant strings",
            details={"start_key": start_key, "end_key": end_key},
        ) from error

    return RangeBounds(
        start=_resolve_member(payload.start, granularity=granularity, default_tz=default_tz),
        end=_resolve_member(payload.end, granularity=granularity, default_tz=default_tz),
    )


def range_from_loose_data(
    range_cls: type[RangeT],
    record: Any,
    start_key: str = _DEFAULT_START_KEY,
    end_key: str = _DEFAULT_END_KEY,
    *,
    default_tz: tzinfo | None = None,
) -> RangeT:
    """
    Build a range of `range_cls` from a loosely-typed record.

    Args:
        range_cls: Concrete range class, e.g. `DateRange`.
        record: Mapping or attribute-bearing object.
        start_key: Key or attribute name of the start member.
        end_key: Key or attribute name of the end member.
        default_tz: Zone attached to naive text members.
    Returns:
        RangeT: `infinite()` without members, `up_to`/`starting_on` with one, else `[start, end]`.
    Assumptions:
        Sentinel resolution is done by `range_cls.from_bounds`.
    Raises:
        TypeError: If `record` is neither a mapping nor an attribute-bearing object.
        FormatError: If a member has an unsupported type or unparsable text.
    Side Effects:
        None.
    """
    bounds = bounds_from_loose_data(
        range_cls.granularity,
        record,
        start_key,
        end_key,
        default_tz=default_tz,
    )
    if not bounds.has_start() or not bounds.has_end():
        log.debug(
            "loose %s data without %s: sentinel bound applied",
            range_cls.__name__,
            "start" if not bounds.has_start() else "end",
        )
    return range_cls.from_bounds(bounds)


def date_range_from_loose_data(
    record: Any,
    start_key: str = _DEFAULT_START_KEY,
    end_key: str = _DEFAULT_END_KEY,
) -> DateRange:
    return range_from_loose_data(DateRange, record, start_key, end_key)


def date_time_range_from_loose_data(
    record: Any,
    start_key: str = _DEFAULT_START_KEY,
    end_key: str = _DEFAULT_END_KEY,
    *,
    default_tz: tzinfo | None = None,
    config: ValueObjectsConfig | None = None,
) -> DateTimeRange:
    """Date-time range from a loose record; naive members fall back to `config.naive_timezone`."""
    if default_tz is None and config is not None:
        default_tz = config.naive_tzinfo()
    return range_from_loose_data(
        DateTimeRange,
        record,
        start_key,
        end_key,
        default_tz=default_tz,
    )


def _read_members(*, record: Any, start_key: str, end_key: str) -> dict[str, Any]:
    if isinstance(record, Mapping):
        return {"start": record.get(start_key), "end": record.get(end_key)}
    if record is None or isinstance(
        record,
        (str, bytes, bytearray, Number, Sequence, Set, date),
    ):
        raise TypeError(
            "expected a mapping or an object with attributes, "
            f"got {type(record).__name__}"
        )
    return {
        "start": getattr(record, start_key, None),
        "end": getattr(record, end_key, None),
    }


def _resolve_member(
    value: datetime | date | str | None,
    *,
    granularity: InstantGranularity[Any],
    default_tz: tzinfo | None,
) -> date | None:
    if value is None:
        return None
    if isinstance(value, str):
        return granularity.parse(value, default_tz=default_tz)
    if isinstance(value, datetime) and value.tzinfo is None and default_tz is not None:
        return value.replace(tzinfo=default_tz)
    return value


__all__ = [
    "LooseRangePayload",
    "bounds_from_loose_data",
    "date_range_from_loose_data",
    "date_time_range_from_loose_data",
    "range_from_loose_data",
]
