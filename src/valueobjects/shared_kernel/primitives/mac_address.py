from __future__ import annotations

import re
from dataclasses import dataclass

from valueobjects.platform.errors import AddressError

_NON_HEX_RE = re.compile(r"[^0-9A-Fa-f]")
_EUI48_HEX_DIGITS = 12


@dataclass(frozen=True, slots=True)
class MacAddress:
    """
    MacAddress — EUI-48 address.

    Rules:
    - any delimiter style is accepted, only hex digits are kept
    - canonical form: 12 lowercase hex digits without delimiters
    """

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self.normalize(self.value))

    @staticmethod
    def normalize(raw: str) -> str:
        if not isinstance(raw, str):
            raise AddressError(f"MAC address must be a string, got {type(raw).__name__}")
        digits = _NON_HEX_RE.sub("", raw)
        if len(digits) != _EUI48_HEX_DIGITS:
            raise AddressError(f"invalid MAC address: {raw!r}")
        return digits.lower()

    def format(self, *, upper: bool = False, delimiter: str = ":", group_length: int = 2) -> str:
        """
        Render the address with configurable case and grouping.

        Args:
            upper: Upper-case hex digits.
            delimiter: Separator placed between groups.
            group_length: Digits per group, 0 disables grouping.
        Returns:
            str: Formatted address, e.g. `00:1a:2b:3c:4d:5e`.
        Assumptions:
            Trailing short group is kept when 12 is not a multiple of `group_length`.
        Raises:
            ValueError: If `group_length` is negative.
        Side Effects:
            None.
        """
        if group_length < 0:
            raise ValueError(f"group_length must be >= 0, got {group_length}")

        formatted = self.value.upper() if upper else self.value
        if group_length > 0:
            groups = [
                formatted[index:index + group_length]
                for index in range(0, len(formatted), group_length)
            ]
            formatted = delimiter.join(groups)
        return formatted

    def __str__(self) -> str:
        return self.value
