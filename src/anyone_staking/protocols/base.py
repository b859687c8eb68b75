"""Base protocol adapter class with common functionality."""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from anyone_staking.core.models import (
    AdapterSettings,
    PositionRecord,
    ProtocolDetails,
    TokenDescriptor,
    TokenType,
    UnwrapExchangeRate,
    UnwrappedTokenExchangeRate,
)
from anyone_staking.core.tokens import TokenRegistry
from anyone_staking.rpc.interfaces import CacheKey, ChainQuery, MetadataStore

logger = logging.getLogger(__name__)


def unwrap_one_to_one(
    protocol_token: TokenDescriptor,
    underlying_tokens: tuple[TokenDescriptor, ...],
) -> UnwrapExchangeRate:
    """
    Build the exchange rate of a token that unwraps 1:1 into its underlying.

    Parameters
    ----------
    protocol_token : TokenDescriptor
        Wrapped or staked token
    underlying_tokens : tuple[TokenDescriptor, ...]
        Tokens backing ``protocol_token``; must hold exactly one element

    Returns
    -------
    UnwrapExchangeRate
        One whole protocol token to one whole underlying token

    Raises
    ------
    ValueError
        If the protocol token does not have exactly one underlying token

    """
    if len(underlying_tokens) != 1:
        msg = f"Cannot unwrap {protocol_token.symbol} 1:1 with {len(underlying_tokens)} underlying tokens"
        raise ValueError(msg)

    underlying_token = underlying_tokens[0]
    return UnwrapExchangeRate(
        address=protocol_token.address,
        name=protocol_token.name,
        symbol=protocol_token.symbol,
        decimals=protocol_token.decimals,
        type=TokenType.PROTOCOL,
        base_rate=1,
        tokens=[
            UnwrappedTokenExchangeRate(
                address=underlying_token.address,
                name=underlying_token.name,
                symbol=underlying_token.symbol,
                decimals=underlying_token.decimals,
                type=TokenType.UNDERLYING,
                underlying_rate_raw=10**protocol_token.decimals,
            )
        ],
    )


class BaseProtocolAdapter(ABC):
    """
    Abstract base class for protocol adapters.

    All protocol adapters should inherit from this class, declare their
    identity and token table, and implement ``get_protocol_details`` and
    ``get_positions``.

    Attributes
    ----------
    protocol_id : str
        Unique protocol identifier (must be set in subclass)
    product_id : str
        Product identifier within the protocol (must be set in subclass)
    protocol_tokens : tuple[TokenDescriptor, ...]
        Static protocol token table (must be set in subclass)
    adapter_settings : AdapterSettings
        Host feature flags

    """

    protocol_id: ClassVar[str] = ""
    product_id: ClassVar[str] = ""
    protocol_tokens: ClassVar[tuple[TokenDescriptor, ...]] = ()
    adapter_settings: ClassVar[AdapterSettings] = AdapterSettings()

    def __init__(
        self,
        chain_query: ChainQuery | None = None,
        chain_id: int = 1,
        metadata_cache: MetadataStore | None = None,
    ) -> None:
        """
        Initialize the protocol adapter.

        Parameters
        ----------
        chain_query : ChainQuery | None
            Read-only contract call capability
        chain_id : int
            Numeric chain ID the adapter reads from
        metadata_cache : MetadataStore | None
            Optional store memoizing the protocol token list

        """
        if not self.protocol_id:
            msg = f"{self.__class__.__name__} must define 'protocol_id' attribute"
            raise ValueError(msg)
        if not self.product_id:
            msg = f"{self.__class__.__name__} must define 'product_id' attribute"
            raise ValueError(msg)
        self.chain_query = chain_query
        self.chain_id = chain_id
        self.metadata_cache = metadata_cache
        self.token_registry = TokenRegistry(self.protocol_tokens)

    @property
    def cache_key(self) -> CacheKey:
        """Metadata cache key ``(protocol_id, product_id, chain_id)``."""
        return (self.protocol_id, self.product_id, self.chain_id)

    @abstractmethod
    def get_protocol_details(self) -> ProtocolDetails:
        """Describe the protocol product."""
        ...

    def list_protocol_tokens(self) -> list[TokenDescriptor]:
        """
        List the protocol tokens of this product.

        The metadata cache, when configured, is consulted first and filled on
        a miss. Results are identical with or without a cache.

        Returns
        -------
        list[TokenDescriptor]
            Protocol tokens with their underlying tokens nested

        """
        if self.metadata_cache is not None:
            cached = self.metadata_cache.get(self.cache_key)
            if cached is not None:
                return list(cached)

        tokens = self.token_registry.list_protocol_tokens()
        if self.metadata_cache is not None:
            logger.debug("Caching %d protocol tokens under %s", len(tokens), self.cache_key)
            self.metadata_cache.set(self.cache_key, tuple(tokens))
        return tokens

    def get_protocol_token_by_address(self, protocol_token_address: str) -> TokenDescriptor:
        """
        Resolve a protocol token of this product.

        Parameters
        ----------
        protocol_token_address : str
            Protocol token address, any case

        Returns
        -------
        TokenDescriptor
            Matching protocol token

        Raises
        ------
        NotFoundError
            If the address is not a protocol token of this product

        """
        return TokenRegistry(self.list_protocol_tokens()).resolve_by_address(protocol_token_address)

    @abstractmethod
    async def get_positions(self, user_address: str) -> list[PositionRecord]:
        """
        Fetch all positions for a user on this product.

        Must be implemented by subclasses.

        Parameters
        ----------
        user_address : str
            User wallet address

        Returns
        -------
        list[PositionRecord]
            Positions found, empty if none

        """
        ...

    def unwrap(self, protocol_token_address: str) -> UnwrapExchangeRate:
        """
        Exchange rate of a protocol token to its underlying token.

        Default implementation is a static 1:1 rate. Override for tokens whose
        rate has to be read from chain.

        Parameters
        ----------
        protocol_token_address : str
            Protocol token address

        Returns
        -------
        UnwrapExchangeRate
            Conversion rate to the underlying token

        Raises
        ------
        NotFoundError
            If the address is not a protocol token of this product

        """
        protocol_token = self.get_protocol_token_by_address(protocol_token_address)
        return unwrap_one_to_one(protocol_token, protocol_token.underlying_tokens)

    def _require_chain_query(self) -> ChainQuery:
        if self.chain_query is None:
            msg = f"Chain query not configured for {self.protocol_id}/{self.product_id}"
            raise RuntimeError(msg)
        return self.chain_query
