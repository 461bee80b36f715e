from .value_object_error import (
    AddressError,
    EmptySeriesError,
    FormatError,
    MoneyError,
    RangeError,
    ValueObjectError,
)

__all__ = [
    "AddressError",
    "EmptySeriesError",
    "FormatError",
    "MoneyError",
    "RangeError",
    "ValueObjectError",
]
