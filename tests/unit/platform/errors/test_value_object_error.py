from __future__ import annotations

from datetime import date

import pytest

from valueobjects.platform.errors import (
    AddressError,
    EmptySeriesError,
    FormatError,
    MoneyError,
    RangeError,
    ValueObjectError,
)


def test_value_object_error_payload_is_deterministic() -> None:
    """
    Verify payload shape and sorted/normalized details.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Non-JSON detail values are stringified.
    Raises:
        AssertionError: If payload layout differs from the contract.
    Side Effects:
        None.
    """
    error = RangeError(
        " argument must overlap this range ",
        details={"range": "2006-07-01/2006-07-10", "at": date(2006, 7, 1), "items": (1, 2)},
    )

    assert str(error) == "argument must overlap this range"
    assert error.payload() == {
        "error": {
            "code": "range_error",
            "message": "argument must overlap this range",
            "details": {
                "at": "2006-07-01",
                "items": [1, 2],
                "range": "2006-07-01/2006-07-10",
            },
        }
    }
    assert list(error.details) == ["at", "items", "range"]


@pytest.mark.parametrize(
    ("error_type", "code"),
    [
        (FormatError, "format_error"),
        (RangeError, "range_error"),
        (EmptySeriesError, "empty_series"),
        (AddressError, "address_error"),
        (MoneyError, "money_error"),
    ],
)
def test_value_object_error_subclasses_have_stable_codes(
    error_type: type[ValueObjectError],
    code: str,
) -> None:
    error = error_type("boom")

    assert error.code == code
    assert error.details == {}
    assert isinstance(error, ValueError)


def test_value_object_error_accepts_explicit_code() -> None:
    assert FormatError("bad", code="interval_format").code == "interval_format"


def test_value_object_error_rejects_blank_fields() -> None:
    with pytest.raises(ValueError):
        ValueObjectError("   ")

    with pytest.raises(ValueError):
        ValueObjectError("message", code=" ")

    with pytest.raises(TypeError):
        ValueObjectError("message", details=[("a", 1)])  # type: ignore[arg-type]
