"""Account address validation and checksum normalization."""

from typing import Any

from eth_utils import is_binary_address, is_hex_address, to_checksum_address

from anyone_staking.core.errors import InvalidAddressError


def try_checksum_address(value: Any) -> str | None:
    """
    Checksum-normalize an address-like value.

    Parameters
    ----------
    value : Any
        Hex string (any case) or 20-byte binary address

    Returns
    -------
    str | None
        EIP-55 checksummed address, or None if the value is not an address

    """
    if isinstance(value, str):
        if not is_hex_address(value):
            return None
    elif isinstance(value, (bytes, bytearray)):
        if not is_binary_address(bytes(value)):
            return None
        value = bytes(value)
    else:
        return None
    return to_checksum_address(value)


def checksum_address(value: Any) -> str:
    """
    Checksum-normalize an address, rejecting malformed input.

    Parameters
    ----------
    value : Any
        Address to normalize

    Returns
    -------
    str
        EIP-55 checksummed address

    Raises
    ------
    InvalidAddressError
        If the value is not a syntactically valid account address

    """
    address = try_checksum_address(value)
    if address is None:
        raise InvalidAddressError(value)
    return address


def same_address(left: Any, right: Any) -> bool:
    """Compare two addresses ignoring case, checksum and the ``0x`` prefix; malformed input never matches."""
    left_address = try_checksum_address(left)
    return left_address is not None and left_address == try_checksum_address(right)
