"""Chain and contract address configuration loader."""

from pathlib import Path
from typing import Any

import yaml

from anyone_staking.data.addresses import PROTOCOL_ADDRESSES


def load_contracts() -> dict[str, Any]:
    """
    Load chain configuration from contracts.yaml.

    Returns
    -------
    dict[str, Any]
        Contract configuration keyed by ``chains``

    """
    path = Path(__file__).parent / "contracts.yaml"
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def get_chain_config(chain: str) -> dict[str, Any]:
    """
    Get configuration for a specific chain.

    Parameters
    ----------
    chain : str
        Chain name (e.g., 'ethereum')

    Returns
    -------
    dict[str, Any]
        Chain configuration including chain ID and Ape network name

    Raises
    ------
    KeyError
        If chain is not found in configuration

    """
    contracts = load_contracts()
    return contracts["chains"][chain]


def get_protocol_addresses(chain: str, protocol: str) -> dict[str, str]:
    """
    Get all contract addresses for a protocol on a chain.

    Parameters
    ----------
    chain : str
        Chain name
    protocol : str
        Protocol name (e.g., 'anyone')

    Returns
    -------
    dict[str, str]
        Mapping of contract names to addresses, empty if unknown

    """
    return dict(PROTOCOL_ADDRESSES.get(protocol, {}).get(chain, {}))


def get_all_supported_chains() -> list[str]:
    """
    Get list of all supported chain names.

    Returns
    -------
    list[str]
        List of chain names

    """
    contracts = load_contracts()
    return list(contracts["chains"].keys())


def get_chain_id(chain: str) -> int:
    """
    Get numeric chain ID.

    Parameters
    ----------
    chain : str
        Chain name

    Returns
    -------
    int
        Chain ID

    """
    return get_chain_config(chain)["chain_id"]


def get_network_choice(chain: str) -> str:
    """
    Get the Ape network choice string for a chain.

    Parameters
    ----------
    chain : str
        Chain name

    Returns
    -------
    str
        Network choice such as ``ethereum:mainnet``

    """
    network = get_chain_config(chain).get("network", "mainnet")
    return f"{chain}:{network}"
