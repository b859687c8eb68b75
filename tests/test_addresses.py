"""Tests for address validation and checksum normalization."""

import pytest

from anyone_staking.core.addresses import checksum_address, same_address, try_checksum_address
from anyone_staking.core.errors import InvalidAddressError

VITALIK = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


@pytest.mark.parametrize("value", [VITALIK, VITALIK.lower(), "0x" + VITALIK[2:].upper()])
def test_checksum_any_case(value):
    """Every casing of an address normalizes to the same checksum form."""
    assert checksum_address(value) == VITALIK


def test_checksum_binary_address():
    """20-byte binary addresses are accepted."""
    assert checksum_address(bytes.fromhex(VITALIK[2:])) == VITALIK


@pytest.mark.parametrize(
    "value",
    ["", "0x", "0x1234", VITALIK + "00", "d8dA6BF26964aF9D7eEd9e03E53415D37aA9604", 42, None, b"\x00"],
)
def test_invalid_addresses(value):
    """Malformed input raises InvalidAddressError."""
    with pytest.raises(InvalidAddressError):
        checksum_address(value)
    assert try_checksum_address(value) is None


def test_invalid_address_error_keeps_value():
    """The rejected value is kept on the error."""
    with pytest.raises(InvalidAddressError) as exc_info:
        checksum_address("0xnope")
    assert exc_info.value.address == "0xnope"
    assert isinstance(exc_info.value, ValueError)


def test_same_address():
    """Comparison ignores case and the 0x prefix."""
    assert same_address(VITALIK, VITALIK.lower())
    assert same_address(VITALIK, VITALIK[2:])
    assert same_address(VITALIK, bytes.fromhex(VITALIK[2:]))
    assert not same_address(VITALIK, "0x0000000000000000000000000000000000000000")


def test_same_address_malformed_never_matches():
    """Malformed addresses match nothing, not even themselves."""
    assert not same_address("0x1234", "0x1234")
    assert not same_address(VITALIK, None)
    assert not same_address(None, None)
