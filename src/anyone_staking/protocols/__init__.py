"""Protocol adapters."""

# Import all adapters to trigger auto-registration
from anyone_staking.protocols.anyone import AnyoneStakingAdapter
from anyone_staking.protocols.base import BaseProtocolAdapter, unwrap_one_to_one

__all__ = [
    "AnyoneStakingAdapter",
    "BaseProtocolAdapter",
    "unwrap_one_to_one",
]
