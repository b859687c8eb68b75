"""Data loading and configuration management."""

from anyone_staking.data.addresses import PROTOCOL_ADDRESSES
from anyone_staking.data.loader import (
    get_all_supported_chains,
    get_chain_config,
    get_chain_id,
    get_network_choice,
    get_protocol_addresses,
    load_contracts,
)

__all__ = [
    # Centralized address constants
    "PROTOCOL_ADDRESSES",
    "get_all_supported_chains",
    "get_chain_config",
    "get_chain_id",
    "get_network_choice",
    "get_protocol_addresses",
    # Loader functions
    "load_contracts",
]
