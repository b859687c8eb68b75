"""Anyone Protocol staking."""

from anyone_staking.protocols.anyone.adapter import AnyoneStakingAdapter
from anyone_staking.protocols.anyone.parser import (
    DropReason,
    assemble_positions,
    build_position_id,
    normalize_stakes,
)

__all__ = [
    "AnyoneStakingAdapter",
    "DropReason",
    "assemble_positions",
    "build_position_id",
    "normalize_stakes",
]
