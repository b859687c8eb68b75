"""Capabilities the adapters consume from their host."""

from typing import Any, Protocol

CacheKey = tuple[str, str, int]


class ChainQuery(Protocol):
    """Read-only contract call capability."""

    async def call(self, contract_address: str, function_abi: dict[str, Any], args: list[Any]) -> Any:
        """
        Call a view function and return its decoded result.

        Parameters
        ----------
        contract_address : str
            Checksummed contract address
        function_abi : dict[str, Any]
            JSON ABI fragment of the function, including its outputs
        args : list[Any]
            Positional call arguments

        Returns
        -------
        Any
            Decoded return value

        """
        ...


class MetadataStore(Protocol):
    """Key-value store memoizing adapter metadata by (protocol, product, chain)."""

    def get(self, key: CacheKey) -> Any | None: ...

    def set(self, key: CacheKey, value: Any) -> None: ...
