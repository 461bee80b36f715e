from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Generic

from .instant_granularity import InstantT


@dataclass(frozen=True, slots=True)
class RangeBounds(Generic[InstantT]):
    """
    RangeBounds — optional start/end pair, the typed input of `from_bounds`.

    Absent side means unbounded; the range classes resolve it to their
    PAST/FUTURE sentinel. Inbound adapters build this from loose records.
    """

    start: InstantT | None = None
    end: InstantT | None = None

    def __post_init__(self) -> None:
        for name in ("start", "end"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, date):
                raise TypeError(
                    f"RangeBounds.{name} must be a date/datetime or None, "
                    f"got {type(value).__name__}"
                )

    def has_start(self) -> bool:
        return self.start is not None

    def has_end(self) -> bool:
        return self.end is not None
