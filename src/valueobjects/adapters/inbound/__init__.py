from .loose_range_data import (
    LooseRangePayload,
    bounds_from_loose_data,
    date_range_from_loose_data,
    date_time_range_from_loose_data,
    range_from_loose_data,
)

__all__ = [
    "LooseRangePayload",
    "bounds_from_loose_data",
    "date_range_from_loose_data",
    "date_time_range_from_loose_data",
    "range_from_loose_data",
]
