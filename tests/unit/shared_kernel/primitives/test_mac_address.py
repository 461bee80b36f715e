import pytest

from valueobjects.platform.errors import AddressError
from valueobjects.shared_kernel.primitives import MacAddress


def test_mac_address_normalizes_any_delimiter_style() -> None:
    assert str(MacAddress("00-1A-2B-3C-4D-5E")) == "001a2b3c4d5e"
    assert str(MacAddress("001a.2b3c.4d5e")) == "001a2b3c4d5e"
    assert MacAddress("00:1a:2b:3c:4d:5e") == MacAddress("001A2B3C4D5E")


def test_mac_address_format_options() -> None:
    mac = MacAddress("00-1A-2B-3C-4D-5E")

    assert mac.format() == "00:1a:2b:3c:4d:5e"
    assert mac.format(upper=True, delimiter="-") == "00-1A-2B-3C-4D-5E"
    assert mac.format(delimiter=".", group_length=4) == "001a.2b3c.4d5e"
    assert mac.format(group_length=0) == "001a2b3c4d5e"


@pytest.mark.parametrize("raw", ["00:1A:2B", "00:1A:2B:3C:4D:5E:6F", ""])
def test_mac_address_rejects_wrong_digit_count(raw: str) -> None:
    with pytest.raises(AddressError):
        MacAddress(raw)
