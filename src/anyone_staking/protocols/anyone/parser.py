"""Anyone stake parsing: pure functions turning raw stakes into positions."""

from collections.abc import Callable, Iterable, Mapping, Sequence
from decimal import Decimal
from enum import StrEnum
from typing import Any

from anyone_staking.core.addresses import try_checksum_address
from anyone_staking.core.models import (
    PositionRecord,
    ProtocolTokenBalance,
    StakeEntry,
    TokenDescriptor,
    TokenType,
    UnderlyingBalance,
)

OPERATOR_FIELD = ("operator", 0)
AMOUNT_FIELD = ("amount", 1)


class DropReason(StrEnum):
    """Why a raw stake did not become a stake entry."""

    MISSING_FIELD = "missing_field"
    INVALID_OPERATOR = "invalid_operator"
    INVALID_AMOUNT = "invalid_amount"
    ZERO_AMOUNT = "zero_amount"


OnDrop = Callable[[Any, DropReason], None]

_MISSING = object()


def extract_field(raw: Any, name: str, index: int) -> Any:
    """
    Read one field of a raw stake tuple.

    The named field is tried first, then the positional one.

    Parameters
    ----------
    raw : Any
        Mapping, named tuple or positional sequence
    name : str
        Field name
    index : int
        Field position

    Returns
    -------
    Any
        Field value, or a sentinel when neither rule applies

    """
    if isinstance(raw, Mapping):
        if name in raw:
            return raw[name]
        if index in raw:
            return raw[index]
        return _MISSING

    if isinstance(raw, tuple) and hasattr(raw, "_fields"):
        if name in raw._fields:
            return raw[raw._fields.index(name)]

    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes, bytearray)):
        if len(raw) > index:
            return raw[index]

    return _MISSING


def parse_amount(value: Any) -> int | None:
    """
    Coerce a raw amount to a non-negative integer.

    Parameters
    ----------
    value : Any
        Integer, whole-number float or Decimal, or a value whose string form is a
        base-10 integer

    Returns
    -------
    int | None
        Parsed amount, None if it is not a non-negative integer

    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        amount = value
    elif isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        amount = int(value)
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        amount = int(value)
    else:
        text = str(value).strip()
        if "_" in text:
            return None
        try:
            amount = int(text, 10)
        except ValueError:
            return None
    return amount if amount >= 0 else None


def _is_missing(value: Any) -> bool:
    return value is _MISSING or value is None or value == ""


def normalize_stakes(raw_stakes: Iterable[Any], on_drop: OnDrop | None = None) -> list[StakeEntry]:
    """
    Decode raw stake tuples into stake entries.

    Malformed tuples and zero amounts are dropped without raising. Order is
    preserved and duplicate operators are kept.

    Parameters
    ----------
    raw_stakes : Iterable[Any]
        Raw ``(operator, amount)`` records as returned by the contract
    on_drop : OnDrop | None
        Called with the raw tuple and the reason for every dropped tuple

    Returns
    -------
    list[StakeEntry]
        Entries with checksummed operators and positive amounts

    """
    entries = []

    for raw in raw_stakes:
        operator_raw = extract_field(raw, *OPERATOR_FIELD)
        amount_raw = extract_field(raw, *AMOUNT_FIELD)

        if _is_missing(operator_raw) or _is_missing(amount_raw):
            reason = DropReason.MISSING_FIELD
        elif (operator := try_checksum_address(operator_raw)) is None:
            reason = DropReason.INVALID_OPERATOR
        elif (amount := parse_amount(amount_raw)) is None:
            reason = DropReason.INVALID_AMOUNT
        elif amount == 0:
            reason = DropReason.ZERO_AMOUNT
        else:
            entries.append(StakeEntry(operator=operator, amount=amount))
            continue

        if on_drop is not None:
            on_drop(raw, reason)

    return entries


def build_position_id(token_address: str, operator: str) -> str:
    """Composite position key ``<token_address>:<operator>``."""
    return f"{token_address}:{operator}"


def assemble_positions(
    entries: Iterable[StakeEntry],
    protocol_token: TokenDescriptor,
    *,
    protocol_id: str,
    product_id: str,
    chain_id: int,
) -> list[PositionRecord]:
    """
    Build one position record per stake entry.

    Underlying tokens carry the same raw balance as the stake, since staked
    tokens are backed 1:1.

    Parameters
    ----------
    entries : Iterable[StakeEntry]
        Normalized stakes
    protocol_token : TokenDescriptor
        Staking token the positions are denominated in
    protocol_id : str
        Protocol identifier
    product_id : str
        Product identifier
    chain_id : int
        Chain ID

    Returns
    -------
    list[PositionRecord]
        Positions in entry order

    """
    positions = []

    for entry in entries:
        balance_raw = str(entry.amount)
        positions.append(
            PositionRecord(
                id=build_position_id(protocol_token.address, entry.operator),
                type=TokenType.PROTOCOL,
                protocol_id=protocol_id,
                product_id=product_id,
                chain_id=chain_id,
                token_address=protocol_token.address,
                name=protocol_token.name,
                symbol=protocol_token.symbol,
                decimals=protocol_token.decimals,
                balance_raw=balance_raw,
                tokens=[
                    ProtocolTokenBalance(
                        address=protocol_token.address,
                        name=protocol_token.name,
                        symbol=protocol_token.symbol,
                        decimals=protocol_token.decimals,
                        balance_raw=balance_raw,
                    )
                ],
                underlying=[
                    UnderlyingBalance(
                        address=token.address,
                        name=token.name,
                        symbol=token.symbol,
                        decimals=token.decimals,
                        balance_raw=balance_raw,
                    )
                    for token in protocol_token.underlying_tokens
                ],
                metadata={"operator": entry.operator},
            )
        )

    return positions
