"""Protocol adapter registry with auto-registration pattern."""

from typing import Any, Protocol, runtime_checkable

from anyone_staking.core.models import PositionRecord, TokenDescriptor, UnwrapExchangeRate


@runtime_checkable
class ProtocolAdapterInterface(Protocol):
    """
    Interface that all protocol adapters must implement.

    Attributes
    ----------
    protocol_id : str
        Unique protocol identifier (e.g., 'anyone')
    product_id : str
        Product of the protocol (e.g., 'staking')

    Methods
    -------
    list_protocol_tokens()
        Describe the protocol tokens of the product
    get_positions(user_address)
        Fetch all positions for a user
    unwrap(protocol_token_address)
        Exchange rate of a protocol token to its underlying tokens

    """

    protocol_id: str
    product_id: str

    def list_protocol_tokens(self) -> list[TokenDescriptor]: ...

    async def get_positions(self, user_address: str) -> list[PositionRecord]: ...

    def unwrap(self, protocol_token_address: str) -> UnwrapExchangeRate: ...


class AdapterRegistry:
    """
    Registry for protocol adapters with auto-registration.

    Adapters register themselves using the @AdapterRegistry.register decorator
    and are keyed by ``(protocol_id, product_id)``.

    """

    _adapters: dict[tuple[str, str], type[ProtocolAdapterInterface]] = {}

    @classmethod
    def register(cls, adapter_class: type) -> type:
        """
        Decorator to register a protocol adapter.

        Parameters
        ----------
        adapter_class : type
            Adapter class to register

        Returns
        -------
        type
            The adapter class (for decorator chaining)

        Examples
        --------
        >>> @AdapterRegistry.register
        ... class AnyoneStakingAdapter:
        ...     protocol_id = "anyone"
        ...     product_id = "staking"

        """
        protocol_id = getattr(adapter_class, "protocol_id", "")
        product_id = getattr(adapter_class, "product_id", "")
        if not protocol_id or not product_id:
            msg = f"Adapter {adapter_class.__name__} must define 'protocol_id' and 'product_id'"
            raise ValueError(msg)

        cls._adapters[(protocol_id, product_id)] = adapter_class
        return adapter_class

    @classmethod
    def get_adapter(cls, protocol_id: str, product_id: str) -> type[ProtocolAdapterInterface] | None:
        """
        Get adapter class by protocol and product.

        Parameters
        ----------
        protocol_id : str
            Protocol identifier
        product_id : str
            Product identifier

        Returns
        -------
        type[ProtocolAdapterInterface] | None
            Adapter class or None if not found

        """
        return cls._adapters.get((protocol_id, product_id))

    @classmethod
    def get_adapters_for_protocol(cls, protocol_id: str) -> list[type[ProtocolAdapterInterface]]:
        """
        Get all adapters of one protocol.

        Parameters
        ----------
        protocol_id : str
            Protocol identifier

        Returns
        -------
        list[type[ProtocolAdapterInterface]]
            Adapter classes of every registered product of the protocol

        """
        return [adapter for (protocol, _), adapter in cls._adapters.items() if protocol == protocol_id]

    @classmethod
    def clear(cls) -> None:
        """Clear all registered adapters (useful for testing)."""
        cls._adapters.clear()

    @classmethod
    def list_products(cls) -> list[tuple[str, str]]:
        """
        Get all registered ``(protocol_id, product_id)`` pairs.

        Returns
        -------
        list[tuple[str, str]]
            Registered adapter keys

        """
        return list(cls._adapters.keys())


def create_adapter(protocol_id: str, product_id: str, **kwargs: Any) -> ProtocolAdapterInterface:
    """
    Instantiate a registered adapter.

    Parameters
    ----------
    protocol_id : str
        Protocol identifier
    product_id : str
        Product identifier
    **kwargs : Any
        Constructor arguments of the adapter

    Returns
    -------
    ProtocolAdapterInterface
        Adapter instance

    Raises
    ------
    KeyError
        If no adapter is registered for the pair

    """
    adapter_class = AdapterRegistry.get_adapter(protocol_id, product_id)
    if adapter_class is None:
        msg = f"No adapter registered for {protocol_id}/{product_id}"
        raise KeyError(msg)
    return adapter_class(**kwargs)
