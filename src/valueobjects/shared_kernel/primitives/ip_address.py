from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Sequence, Union

from valueobjects.platform.errors import AddressError

_IPV4_MAPPED_MARKER = 0x0000FFFF
_WORD_MASK = 0xFFFFFFFF
_WORD_COUNT = 4

_AnyAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass(frozen=True, slots=True)
class IpAddress:
    """
    IpAddress — IPv4 or IPv6 address.

    Rules:
    - any textual form accepted by the stdlib `ipaddress` parser
    - marshals to four unsigned 32-bit integers, most significant first;
      IPv4 is stored as `[0, 0, 0xffff, address]`
    """

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", str(_parse(self.value)))

    @classmethod
    def from_integer_array(cls, integers: Sequence[int]) -> IpAddress:
        """
        Build an address from four 32-bit integers, most significant first.

        Args:
            integers: Exactly four unsigned 32-bit integers.
        Returns:
            IpAddress: IPv4 when the array is `[0, 0, 0xffff, x]`, IPv6 otherwise.
        Assumptions:
            Arrays come from `to_integer_array` or an equivalent storage layout.
        Raises:
            AddressError: If the array size or any word is out of range.
        Side Effects:
            None.
        """
        words = list(integers)
        if len(words) != _WORD_COUNT:
            raise AddressError(
                f"wrong number of integers; expected {_WORD_COUNT}, got {len(words)}"
            )
        for word in words:
            if isinstance(word, bool) or not isinstance(word, int) or not 0 <= word <= _WORD_MASK:
                raise AddressError(f"integer word out of 32-bit range: {word!r}")

        i4, i3, i2, i1 = words
        if i4 == 0 and i3 == 0 and i2 == _IPV4_MAPPED_MARKER:
            return cls(str(ipaddress.IPv4Address(i1)))

        packed = (i4 << 96) | (i3 << 64) | (i2 << 32) | i1
        return cls(str(ipaddress.IPv6Address(packed)))

    @property
    def version(self) -> int:
        return _parse(self.value).version

    def to_integer_array(self) -> list[int]:
        address = _parse(self.value)
        if address.version == 4:
            return [0, 0, _IPV4_MAPPED_MARKER, int(address)]
        packed = int(address)
        return [(packed >> shift) & _WORD_MASK for shift in (96, 64, 32, 0)]

    def is_in_network(self, base: IpAddress, prefixlen: int) -> bool:
        """
        Test membership in the network `base/prefixlen`.

        Args:
            base: Network base address, same IP version as this one.
            prefixlen: Prefix length, 0..32 for IPv4 and 0..128 for IPv6.
        Returns:
            bool: True when the masked address equals the masked base.
        Assumptions:
            Host bits of `base` are ignored.
        Raises:
            AddressError: On negative/oversized prefix or version mismatch.
        Side Effects:
            None.
        """
        if prefixlen < 0:
            raise AddressError("prefix length cannot be negative")
        if base.version != self.version:
            raise AddressError("address version does not match supplied network base version")

        max_prefix = 32 if self.version == 4 else 128
        if prefixlen > max_prefix:
            raise AddressError(
                f"address version ({self.version}) was not supplied a correct prefix length",
                details={"prefixlen": prefixlen, "max_prefixlen": max_prefix},
            )

        network = ipaddress.ip_network(f"{base.value}/{prefixlen}", strict=False)
        return _parse(self.value) in network

    def format(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


def _parse(raw: str) -> _AnyAddress:
    if not isinstance(raw, str):
        raise AddressError(f"IP address must be a string, got {type(raw).__name__}")
    try:
        return ipaddress.ip_address(raw.strip())
    except ValueError as error:
        raise AddressError(f"invalid IP address: {raw!r}") from error
