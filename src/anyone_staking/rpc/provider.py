"""Chain query provider using Ape's network management."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from ape import Contract, networks

from anyone_staking.data import get_network_choice
from anyone_staking.rpc.retry import RetryConfig, retry_call

logger = logging.getLogger(__name__)


def to_plain(value: Any) -> Any:
    """
    Convert decoded Ape return values into plain Python containers.

    Structs become dicts keyed by field name, arrays become lists, and scalar
    values are returned unchanged.

    Parameters
    ----------
    value : Any
        Decoded contract return value

    Returns
    -------
    Any
        Value built from dict, list and scalar types only

    """
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (str, bytes, bytearray)):
        return value
    # Ape structs expose their fields through items()
    items = getattr(value, "items", None)
    if callable(items):
        return {key: to_plain(item) for key, item in items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


class ApeRPCProvider:
    """
    Read-only contract call provider using Ape's network management system.

    Ape picks the RPC endpoint from its configuration, which uses Infura
    when configured via environment variables.

    Parameters
    ----------
    chain : str
        Chain name (e.g., 'ethereum')
    network : str | None
        Network name. Defaults to the chain's network in contracts.yaml.
    retry_config : RetryConfig | None
        Retry configuration for contract calls

    """

    def __init__(
        self,
        chain: str,
        network: str | None = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        self.chain = chain
        self.network = network
        self._network_context = None
        self._provider = None
        self.retry_config = retry_config or RetryConfig(
            max_retries=3,
            base_delay=1.0,
            max_delay=30.0,
            exponential_base=2.0,
        )

    @property
    def network_choice(self) -> str:
        """Ape network choice string, e.g. ``ethereum:mainnet``."""
        if self.network:
            return f"{self.chain}:{self.network}"
        return get_network_choice(self.chain)

    @property
    def is_connected(self) -> bool:
        """Whether connect() has succeeded and disconnect() was not called."""
        return self._provider is not None

    def connect(self) -> None:
        """Connect to the network using Ape's network management."""
        try:
            self._network_context = networks.parse_network_choice(self.network_choice)
            self._network_context.__enter__()
            self._provider = networks.provider
        except Exception as e:
            error_msg = f"Failed to connect to {self.network_choice}: {e}"
            raise RuntimeError(error_msg) from e
        logger.debug("Connected to %s", self.network_choice)

    def disconnect(self) -> None:
        """Disconnect from the network."""
        if self._network_context:
            try:
                self._network_context.__exit__(None, None, None)
            except Exception as e:
                logger.debug("Error during network context cleanup: %s", e)
            self._network_context = None
        self._provider = None

    def call_sync(self, contract_address: str, function_abi: dict[str, Any], args: list[Any]) -> Any:
        """
        Call a view function, retrying failures with exponential backoff.

        Parameters
        ----------
        contract_address : str
            Contract address
        function_abi : dict[str, Any]
            JSON ABI fragment of the function
        args : list[Any]
            Positional call arguments

        Returns
        -------
        Any
            Decoded return value as plain Python containers

        Raises
        ------
        RuntimeError
            If provider is not connected
        Exception
            If all retry attempts fail

        """
        if not self._provider:
            error_msg = "Provider not connected. Call connect() first."
            raise RuntimeError(error_msg)

        method_name = function_abi["name"]

        def _call() -> Any:
            contract = Contract(contract_address, abi=[function_abi])
            return getattr(contract, method_name)(*args)

        result = retry_call(
            _call,
            config=self.retry_config,
            description=f"{method_name} on {contract_address}",
        )
        return to_plain(result)

    async def call(self, contract_address: str, function_abi: dict[str, Any], args: list[Any]) -> Any:
        """
        Call a view function without blocking the event loop.

        Parameters
        ----------
        contract_address : str
            Contract address
        function_abi : dict[str, Any]
            JSON ABI fragment of the function
        args : list[Any]
            Positional call arguments

        Returns
        -------
        Any
            Decoded return value as plain Python containers

        """
        return await asyncio.to_thread(self.call_sync, contract_address, function_abi, args)

    def __enter__(self) -> "ApeRPCProvider":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Context manager exit."""
        self.disconnect()
