"""Core functionality including models, errors, token lookup, and adapter registry."""

from anyone_staking.core.errors import (
    AdapterError,
    InvalidAddressError,
    NotFoundError,
    UpstreamQueryError,
)
from anyone_staking.core.models import (
    AdapterSettings,
    PositionRecord,
    PositionType,
    ProtocolDetails,
    ProtocolTokenBalance,
    StakeEntry,
    TokenDescriptor,
    TokenType,
    UnderlyingBalance,
    UnwrapExchangeRate,
    UnwrappedTokenExchangeRate,
)
from anyone_staking.core.registry import AdapterRegistry, ProtocolAdapterInterface, create_adapter
from anyone_staking.core.tokens import TokenRegistry

__all__ = [
    "AdapterError",
    "AdapterRegistry",
    "AdapterSettings",
    "InvalidAddressError",
    "NotFoundError",
    "PositionRecord",
    "PositionType",
    "ProtocolAdapterInterface",
    "ProtocolDetails",
    "ProtocolTokenBalance",
    "StakeEntry",
    "TokenDescriptor",
    "TokenRegistry",
    "TokenType",
    "UnderlyingBalance",
    "UnwrapExchangeRate",
    "UnwrappedTokenExchangeRate",
    "UpstreamQueryError",
    "create_adapter",
]
