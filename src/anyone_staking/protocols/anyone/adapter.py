"""Anyone Protocol staking adapter (HodlerV5)."""

import logging
from typing import Any, ClassVar

from anyone_staking.core.addresses import checksum_address
from anyone_staking.core.errors import UpstreamQueryError
from anyone_staking.core.models import AdapterSettings, PositionRecord, PositionType, ProtocolDetails
from anyone_staking.core.registry import AdapterRegistry
from anyone_staking.data.tokens import GET_STAKES_ABI, HODLER_PROXY, STAKING_TOKENS
from anyone_staking.protocols.anyone.parser import OnDrop, assemble_positions, normalize_stakes
from anyone_staking.protocols.base import BaseProtocolAdapter
from anyone_staking.rpc.interfaces import ChainQuery, MetadataStore

logger = logging.getLogger(__name__)


@AdapterRegistry.register
class AnyoneStakingAdapter(BaseProtocolAdapter):
    """
    Adapter for ANYONE stakes delegated to relay operators.

    A user may stake with several operators at once; each nonzero stake is
    reported as its own stANYONE position, unwrapping 1:1 into ANYONE.

    """

    protocol_id = "anyone"
    product_id = "staking"
    protocol_tokens = STAKING_TOKENS
    adapter_settings: ClassVar[AdapterSettings] = AdapterSettings(
        include_in_unwrap=False,
        user_event=False,
    )

    hodler_address: ClassVar[str] = HODLER_PROXY

    def __init__(
        self,
        chain_query: ChainQuery | None = None,
        chain_id: int = 1,
        metadata_cache: MetadataStore | None = None,
        on_drop: OnDrop | None = None,
    ) -> None:
        """
        Initialize the adapter.

        Parameters
        ----------
        chain_query : ChainQuery | None
            Read-only contract call capability
        chain_id : int
            Numeric chain ID (Ethereum mainnet by default)
        metadata_cache : MetadataStore | None
            Optional store memoizing the protocol token list
        on_drop : OnDrop | None
            Called for every raw stake discarded during normalization

        """
        super().__init__(chain_query=chain_query, chain_id=chain_id, metadata_cache=metadata_cache)
        self.on_drop = on_drop

    def get_protocol_details(self) -> ProtocolDetails:
        """Describe the Anyone staking product."""
        return ProtocolDetails(
            protocol_id=self.protocol_id,
            product_id=self.product_id,
            chain_id=self.chain_id,
            name="Anyone",
            description="Anyone Protocol staking position (HodlerV5)",
            site_url="https://anyone.io",
            icon_url="https://docs.anyone.io/img/logo.png",
            position_type=PositionType.SUPPLY,
        )

    async def fetch_stakes(self, user_address: str) -> list[Any]:
        """
        Read the raw stakes of a user from the HodlerV5 contract.

        Parameters
        ----------
        user_address : str
            User wallet address, any case

        Returns
        -------
        list[Any]
            Raw ``(operator, amount)`` records, empty if the user has none

        Raises
        ------
        InvalidAddressError
            If the user address is malformed
        UpstreamQueryError
            If the contract call fails

        """
        address = checksum_address(user_address)
        chain_query = self._require_chain_query()

        try:
            result = await chain_query.call(self.hodler_address, GET_STAKES_ABI, [address])
        except Exception as e:
            msg = f"getStakes({address}) failed: {e}"
            raise UpstreamQueryError(msg) from e

        if not result:
            return []
        return list(result)

    async def get_positions(self, user_address: str) -> list[PositionRecord]:
        """
        Fetch the staking positions of a user, one per operator stake.

        Parameters
        ----------
        user_address : str
            User wallet address

        Returns
        -------
        list[PositionRecord]
            Positions in contract order, empty if there are no valid stakes

        Raises
        ------
        InvalidAddressError
            If the user address is malformed
        UpstreamQueryError
            If the contract call fails

        """
        raw_stakes = await self.fetch_stakes(user_address)
        if not raw_stakes:
            return []

        entries = normalize_stakes(raw_stakes, on_drop=self.on_drop)
        logger.debug("Normalized %d of %d raw stakes", len(entries), len(raw_stakes))

        protocol_token = self.get_protocol_token_by_address(self.hodler_address)
        return assemble_positions(
            entries,
            protocol_token,
            protocol_id=self.protocol_id,
            product_id=self.product_id,
            chain_id=self.chain_id,
        )
