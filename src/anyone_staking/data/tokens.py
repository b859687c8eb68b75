"""Token descriptors of the Anyone staking product."""

from anyone_staking.core.addresses import checksum_address
from anyone_staking.core.models import TokenDescriptor
from anyone_staking.data.addresses import PROTOCOL_ADDRESSES

HODLER_PROXY = checksum_address(PROTOCOL_ADDRESSES["anyone"]["ethereum"]["hodler_proxy"])
ANYONE_TOKEN = checksum_address(PROTOCOL_ADDRESSES["anyone"]["ethereum"]["anyone_token"])

ANYONE = TokenDescriptor(
    address=ANYONE_TOKEN,
    name="Anyone",
    symbol="ANYONE",
    decimals=18,
)

STAKED_ANYONE = TokenDescriptor(
    address=HODLER_PROXY,
    name="Staked ANYONE",
    symbol="stANYONE",
    decimals=18,
    underlying_tokens=(ANYONE,),
)

# Protocol tokens exposed by the staking product, in listing order
STAKING_TOKENS: tuple[TokenDescriptor, ...] = (STAKED_ANYONE,)

# HodlerV5.getStakes(address) -> (address operator, uint256 amount)[]
GET_STAKES_ABI = {
    "type": "function",
    "name": "getStakes",
    "stateMutability": "view",
    "inputs": [{"internalType": "address", "name": "_address", "type": "address"}],
    "outputs": [
        {
            "name": "",
            "type": "tuple[]",
            "components": [
                {"internalType": "address", "name": "operator", "type": "address"},
                {"internalType": "uint256", "name": "amount", "type": "uint256"},
            ],
        }
    ],
}
