"""Tests for the adapter registry and the token registry."""

import pytest

from anyone_staking.core.errors import NotFoundError
from anyone_staking.core.registry import AdapterRegistry, ProtocolAdapterInterface, create_adapter
from anyone_staking.core.tokens import TokenRegistry
from anyone_staking.data.tokens import ANYONE, HODLER_PROXY, STAKED_ANYONE, STAKING_TOKENS


def test_adapter_registration():
    """Test that adapters auto-register on import."""
    # Import triggers registration
    from anyone_staking import protocols  # noqa: F401

    registered = AdapterRegistry.list_products()

    assert ("anyone", "staking") in registered


def test_get_adapter():
    """Test retrieving adapter by protocol and product."""
    from anyone_staking.protocols import AnyoneStakingAdapter

    assert AdapterRegistry.get_adapter("anyone", "staking") is AnyoneStakingAdapter
    assert AdapterRegistry.get_adapter("anyone", "lending") is None
    assert AdapterRegistry.get_adapters_for_protocol("anyone") == [AnyoneStakingAdapter]


def test_create_adapter():
    """Registered adapters can be instantiated by identity."""
    from anyone_staking import protocols  # noqa: F401

    adapter = create_adapter("anyone", "staking", chain_id=1)

    assert isinstance(adapter, ProtocolAdapterInterface)
    assert adapter.protocol_id == "anyone"
    assert adapter.chain_id == 1

    with pytest.raises(KeyError):
        create_adapter("nonexistent", "staking")


def test_register_requires_identity():
    """Classes without protocol and product ids are rejected."""

    class Anonymous:
        protocol_id = "x"

    with pytest.raises(ValueError, match="must define"):
        AdapterRegistry.register(Anonymous)


def test_token_registry_lists_table():
    """The registry exposes exactly the configured protocol tokens."""
    registry = TokenRegistry(STAKING_TOKENS)

    assert registry.list_protocol_tokens() == [STAKED_ANYONE]
    assert registry.list_protocol_tokens()[0].underlying_tokens == (ANYONE,)
    assert len(registry) == 1


@pytest.mark.parametrize(
    "address",
    [HODLER_PROXY, HODLER_PROXY.lower(), "0x" + HODLER_PROXY[2:].upper(), HODLER_PROXY[2:]],
)
def test_token_registry_resolves_any_case(address):
    """Lookup ignores case, checksum and the 0x prefix."""
    assert TokenRegistry(STAKING_TOKENS).resolve_by_address(address) == STAKED_ANYONE


@pytest.mark.parametrize("address", [ANYONE.address, "0x0000000000000000000000000000000000000000", "", None])
def test_token_registry_unknown_address(address):
    """Anything other than a protocol token address is not found."""
    with pytest.raises(NotFoundError):
        TokenRegistry(STAKING_TOKENS).resolve_by_address(address)


def test_token_registry_listing_is_a_copy():
    """Mutating a returned list does not change the registry."""
    registry = TokenRegistry(STAKING_TOKENS)

    registry.list_protocol_tokens().clear()

    assert len(registry.list_protocol_tokens()) == 1


def test_interface_rejects_incomplete_adapters():
    """Objects missing an adapter operation do not satisfy the interface."""

    class PositionsOnly:
        protocol_id = "anyone"
        product_id = "staking"

        async def get_positions(self, user_address):
            return []

    assert not isinstance(PositionsOnly(), ProtocolAdapterInterface)
