"""Tests for stake normalization and position assembly."""

from collections import namedtuple
from decimal import Decimal

import pytest
from conftest import OPERATOR_A, OPERATOR_B, OPERATOR_C

from anyone_staking.core.models import StakeEntry, TokenType
from anyone_staking.data.tokens import ANYONE, STAKED_ANYONE
from anyone_staking.protocols.anyone.parser import (
    DropReason,
    assemble_positions,
    build_position_id,
    extract_field,
    normalize_stakes,
    parse_amount,
)

MAX_UINT128 = "340282366920938463463374607431768211455"

Stake = namedtuple("Stake", ["operator", "amount"])


def _assemble(entries):
    return assemble_positions(
        entries,
        STAKED_ANYONE,
        protocol_id="anyone",
        product_id="staking",
        chain_id=1,
    )


def test_extract_field_shapes():
    """Fields are read from mappings, named tuples and positional sequences."""
    assert extract_field({"operator": OPERATOR_A, "amount": 5}, "amount", 1) == 5
    assert extract_field([OPERATOR_A, 5], "amount", 1) == 5
    assert extract_field((OPERATOR_A, 5), "operator", 0) == OPERATOR_A
    assert extract_field(Stake(OPERATOR_A, 7), "amount", 1) == 7
    assert extract_field({0: OPERATOR_A, 1: 9}, "amount", 1) == 9


def test_extract_field_prefers_name():
    """The named field wins over the positional one."""
    assert extract_field({"amount": 3, 1: 4}, "amount", 1) == 3


def test_parse_amount_accepts_integers():
    """Integers and their exact decimal representations are accepted."""
    assert parse_amount(100) == 100
    assert parse_amount("100") == 100
    assert parse_amount(" 7 ") == 7
    assert parse_amount(MAX_UINT128) == int(MAX_UINT128)
    assert parse_amount(Decimal("42")) == 42


def test_parse_amount_accepts_integral_floats():
    """Floats holding a whole number are accepted."""
    assert parse_amount(100.0) == 100
    assert parse_amount(0.0) == 0


@pytest.mark.parametrize(
    "value",
    ["abc", "1.5", "", "0x10", "1_000", True, -1, "-5", 1.5, float("nan"), float("inf"), Decimal("NaN"), object()],
)
def test_parse_amount_rejects(value):
    """Anything that is not a non-negative base-10 integer is rejected."""
    assert parse_amount(value) is None


def test_normalize_valid_stakes():
    """Named and positional stakes become checksummed entries."""
    assert normalize_stakes([{"operator": OPERATOR_A.lower(), "amount": 100}]) == [
        StakeEntry(operator=OPERATOR_A, amount=100)
    ]
    assert normalize_stakes([(OPERATOR_B.lower(), "250")]) == [StakeEntry(operator=OPERATOR_B, amount=250)]


def test_normalize_binary_operator():
    """Raw 20-byte operators are checksummed."""
    entries = normalize_stakes([(bytes.fromhex(OPERATOR_A[2:]), 1)])

    assert entries[0].operator == OPERATOR_A


def test_normalize_float_amount():
    """A whole-number float amount yields an entry."""
    entries = normalize_stakes([{"operator": OPERATOR_A, "amount": 100.0}])

    assert entries == [StakeEntry(operator=OPERATOR_A, amount=100)]


def test_normalize_drops_zero_amount():
    """Zero stakes are skipped."""
    entries = normalize_stakes(
        [
            {"operator": OPERATOR_A, "amount": 100},
            {"operator": OPERATOR_B, "amount": 0},
        ]
    )

    assert [e.operator for e in entries] == [OPERATOR_A]


@pytest.mark.parametrize(
    "raw",
    [
        {"amount": 100},
        {"operator": OPERATOR_A},
        {"operator": None, "amount": 100},
        {"operator": "", "amount": 100},
        {"operator": OPERATOR_A, "amount": None},
        (OPERATOR_A,),
        (),
        "not a stake",
        None,
    ],
)
def test_normalize_drops_missing_fields(raw):
    """Tuples without both fields are skipped."""
    assert normalize_stakes([raw]) == []


def test_normalize_drops_invalid_values():
    """Bad operators and non-numeric amounts are skipped."""
    assert normalize_stakes([{"operator": "0x1234", "amount": 1}]) == []
    assert normalize_stakes([{"operator": 12345, "amount": 1}]) == []
    assert normalize_stakes([{"operator": OPERATOR_A, "amount": "lots"}]) == []
    assert normalize_stakes([{"operator": OPERATOR_A, "amount": "1_000"}]) == []


def test_normalize_keeps_order_and_duplicates():
    """Contract order is kept and repeated operators are not merged."""
    raw = [
        {"operator": OPERATOR_C, "amount": 3},
        {"operator": OPERATOR_A, "amount": 1},
        {"operator": OPERATOR_C, "amount": 7},
    ]

    entries = normalize_stakes(raw)

    assert [(e.operator, e.amount) for e in entries] == [
        (OPERATOR_C, 3),
        (OPERATOR_A, 1),
        (OPERATOR_C, 7),
    ]


def test_normalize_large_amount_is_exact():
    """Amounts at the uint128 limit survive without precision loss."""
    entries = normalize_stakes([(OPERATOR_A, MAX_UINT128)])

    assert str(entries[0].amount) == MAX_UINT128


def test_normalize_reports_drop_reasons():
    """The drop hook receives one reason per discarded tuple."""
    dropped = []
    raw = [
        {"amount": 1},
        {"operator": "0xnothex", "amount": 1},
        {"operator": OPERATOR_A, "amount": "x"},
        {"operator": OPERATOR_A, "amount": 0},
        {"operator": OPERATOR_A, "amount": 5},
    ]

    entries = normalize_stakes(raw, on_drop=lambda stake, reason: dropped.append(reason))

    assert len(entries) == 1
    assert dropped == [
        DropReason.MISSING_FIELD,
        DropReason.INVALID_OPERATOR,
        DropReason.INVALID_AMOUNT,
        DropReason.ZERO_AMOUNT,
    ]


def test_normalize_empty_input():
    """No raw stakes means no entries."""
    assert normalize_stakes([]) == []


def test_assemble_position_fields():
    """A position carries the token, balance and operator of its stake."""
    (position,) = _assemble([StakeEntry(operator=OPERATOR_A, amount=100)])

    assert position.id == f"{STAKED_ANYONE.address}:{OPERATOR_A}"
    assert position.token_address == STAKED_ANYONE.address
    assert position.balance_raw == "100"
    assert position.metadata == {"operator": OPERATOR_A}
    assert position.type == TokenType.PROTOCOL
    assert position.symbol == "stANYONE"
    assert position.chain_id == 1
    assert [(t.address, t.balance_raw) for t in position.tokens] == [(STAKED_ANYONE.address, "100")]


def test_assemble_underlying_balance():
    """The underlying token carries the same raw balance as the stake."""
    (position,) = _assemble([StakeEntry(operator=OPERATOR_A, amount=100)])

    assert len(position.underlying) == 1
    underlying = position.underlying[0]
    assert underlying.address == ANYONE.address
    assert underlying.symbol == "ANYONE"
    assert underlying.type == TokenType.UNDERLYING
    assert underlying.balance_raw == "100"


def test_assemble_large_amount_is_exact():
    """Balances are exact decimal strings."""
    (position,) = _assemble([StakeEntry(operator=OPERATOR_A, amount=int(MAX_UINT128))])

    assert position.balance_raw == MAX_UINT128
    assert position.underlying[0].balance_raw == MAX_UINT128


def test_assemble_ids_per_operator():
    """Ids differ across operators and repeat for a repeated operator."""
    positions = _assemble(
        [
            StakeEntry(operator=OPERATOR_A, amount=1),
            StakeEntry(operator=OPERATOR_B, amount=1),
            StakeEntry(operator=OPERATOR_A, amount=2),
        ]
    )

    assert positions[0].id != positions[1].id
    assert positions[0].id == positions[2].id


def test_assemble_empty_entries():
    """No entries means no positions."""
    assert _assemble([]) == []


def test_build_position_id():
    """Position ids join token and operator with a colon."""
    assert build_position_id("0xToken", "0xOperator") == "0xToken:0xOperator"
