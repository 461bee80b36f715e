from __future__ import annotations

from typing import Any, Mapping, Sequence


class ValueObjectError(ValueError):
    """
    ValueObjectError — base deterministic error for value-object construction and operations.

    Related:
      - src/valueobjects/shared_kernel/primitives/temporal_range.py
      - src/valueobjects/shared_kernel/primitives/money.py
      - src/valueobjects/adapters/inbound/loose_range_data.py
    """

    default_code = "value_object_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Initialize stable error attributes with normalized details payload.

        Args:
            message: Human-readable deterministic message.
            code: Machine-readable error code, defaults to class `default_code`.
            details: Optional mapping with extra diagnostic values.
        Returns:
            None.
        Assumptions:
            Details values are JSON-like; anything else is stringified.
        Raises:
            ValueError: If `code` or `message` are blank.
            TypeError: If `details` is not mapping-compatible when provided.
        Side Effects:
            None.
        """
        normalized_message = message.strip()
        normalized_code = (code if code is not None else self.default_code).strip()
        if not normalized_message:
            raise ValueError("ValueObjectError.message must be non-empty")
        if not normalized_code:
            raise ValueError("ValueObjectError.code must be non-empty")
        if details is not None and not isinstance(details, Mapping):
            raise TypeError("ValueObjectError.details must be a mapping when provided")

        super().__init__(normalized_message)
        self.code = normalized_code
        self.message = normalized_message
        self.details: Mapping[str, Any] = (
            _normalize_payload_value(value=dict(details)) if details is not None else {}
        )

    def payload(self) -> dict[str, Any]:
        """
        Build deterministic error payload representation.

        Args:
            None.
        Returns:
            dict[str, Any]: `{"error": {"code", "message", "details"}}` payload.
        Assumptions:
            `details` payload is already normalized during initialization.
        Raises:
            None.
        Side Effects:
            None.
        """
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": dict(self.details),
            }
        }


class FormatError(ValueObjectError):
    """Malformed interval string or unparsable instant text."""

    default_code = "format_error"


class RangeError(ValueObjectError):
    """Illegal range operation, e.g. `diff` of non-overlapping or bisecting ranges."""

    default_code = "range_error"


class EmptySeriesError(ValueObjectError):
    """Series helper invoked on an empty collection of ranges."""

    default_code = "empty_series"


class AddressError(ValueObjectError):
    """Invalid IP/MAC address text or network parameters."""

    default_code = "address_error"


class MoneyError(ValueObjectError):
    """Invalid money amount, currency, or arithmetic operand."""

    default_code = "money_error"


def _normalize_payload_value(*, value: Any) -> Any:
    """
    Normalize nested payload values into deterministic plain-Python structures.

    Args:
        value: Any JSON-compatible value.
    Returns:
        Any: Normalized scalar/list/dict representation.
    Assumptions:
        Non-JSON values are stringified for safe deterministic error payloads.
    Raises:
        None.
    Side Effects:
        None.
    """
    if isinstance(value, Mapping):
        normalized_mapping: dict[str, Any] = {}
        sorted_items = sorted(value.items(), key=lambda item: str(item[0]))
        for raw_key, raw_value in sorted_items:
            normalized_mapping[str(raw_key)] = _normalize_payload_value(value=raw_value)
        return normalized_mapping

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [_normalize_payload_value(value=item) for item in value]

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value

    return str(value)
