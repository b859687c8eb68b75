"""Pytest configuration for anyone-staking tests."""

from typing import Any

import pytest
from eth_utils import to_checksum_address

from anyone_staking.protocols.anyone import AnyoneStakingAdapter

USER = to_checksum_address("0xd8da6bf26964af9d7eed9e03e53415d37aa96045")
OPERATOR_A = to_checksum_address("0x" + "a" * 39 + "1")
OPERATOR_B = to_checksum_address("0x" + "b" * 39 + "2")
OPERATOR_C = to_checksum_address("0x" + "c" * 39 + "3")


def pytest_configure(config):
    """Disable ape plugin during tests."""
    # Unregister ape pytest plugin to avoid network connection issues
    config.pluginmanager.set_blocked("ape_test")


class FakeChainQuery:
    """Chain query double returning a canned result and recording calls."""

    def __init__(self, result: Any = None, error: BaseException | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, dict[str, Any], list[Any]]] = []

    async def call(self, contract_address: str, function_abi: dict[str, Any], args: list[Any]) -> Any:
        self.calls.append((contract_address, function_abi, args))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture()
def make_adapter():
    """Build an adapter whose chain query returns the given raw stakes."""

    def _make(result: Any = None, error: BaseException | None = None, **kwargs: Any) -> AnyoneStakingAdapter:
        return AnyoneStakingAdapter(chain_query=FakeChainQuery(result, error), **kwargs)

    return _make
