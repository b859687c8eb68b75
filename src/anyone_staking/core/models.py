"""Data models for protocol tokens, stakes, positions, and exchange rates."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from anyone_staking.core.addresses import checksum_address


class TokenType(StrEnum):
    """Role of a token inside a position."""

    PROTOCOL = "protocol"
    UNDERLYING = "underlying"


class PositionType(StrEnum):
    """Type of DeFi position."""

    SUPPLY = "supply"
    BORROW = "borrow"
    REWARD = "reward"
    STAKED = "staked"


class TokenDescriptor(BaseModel):
    """
    Immutable token description.

    Attributes
    ----------
    address : str
        Token contract address, always checksummed
    name : str
        Full token name
    symbol : str
        Token symbol (e.g., 'stANYONE')
    decimals : int
        Number of decimal places
    underlying_tokens : tuple[TokenDescriptor, ...]
        Tokens backing this one; empty for leaf tokens

    """

    model_config = ConfigDict(frozen=True)

    address: str
    name: str
    symbol: str
    decimals: int = Field(ge=0)
    underlying_tokens: tuple["TokenDescriptor", ...] = ()

    @field_validator("address", mode="before")
    @classmethod
    def _checksum(cls, value: str) -> str:
        return checksum_address(value)


class StakeEntry(BaseModel):
    """
    A validated stake of the queried account with one operator.

    Attributes
    ----------
    operator : str
        Checksummed operator address the stake is delegated to
    amount : int
        Staked amount in raw token units, always positive

    """

    model_config = ConfigDict(frozen=True)

    operator: str
    amount: int = Field(gt=0)

    @field_validator("operator", mode="before")
    @classmethod
    def _checksum(cls, value: str) -> str:
        return checksum_address(value)


class UnderlyingBalance(BaseModel):
    """Underlying token annotated with the raw balance backing a position."""

    address: str
    name: str
    symbol: str
    decimals: int
    type: TokenType = TokenType.UNDERLYING
    balance_raw: str


class ProtocolTokenBalance(BaseModel):
    """Protocol token annotated with the raw balance of a position."""

    address: str
    name: str
    symbol: str
    decimals: int
    type: TokenType = TokenType.PROTOCOL
    balance_raw: str


class PositionRecord(BaseModel):
    """
    One staking position of an account with a single operator.

    Attributes
    ----------
    id : str
        Composite key ``<token_address>:<operator>``
    token_address : str
        Protocol token address
    balance_raw : str
        Exact decimal string of the staked amount
    underlying : list[UnderlyingBalance]
        Underlying tokens, each carrying the same raw balance
    metadata : dict[str, str]
        Protocol-specific data; holds the ``operator`` address

    """

    id: str
    type: TokenType = TokenType.PROTOCOL
    protocol_id: str
    product_id: str
    chain_id: int
    token_address: str
    name: str
    symbol: str
    decimals: int
    balance_raw: str
    tokens: list[ProtocolTokenBalance] = Field(default_factory=list)
    underlying: list[UnderlyingBalance] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)


class UnwrappedTokenExchangeRate(BaseModel):
    """Underlying token with the raw amount received per whole protocol token."""

    address: str
    name: str
    symbol: str
    decimals: int
    type: TokenType = TokenType.UNDERLYING
    underlying_rate_raw: int


class UnwrapExchangeRate(BaseModel):
    """
    Exchange rate from a protocol token to its underlying tokens.

    Attributes
    ----------
    base_rate : int
        Protocol token amount the rates refer to (always one whole token)
    tokens : list[UnwrappedTokenExchangeRate]
        Per-underlying conversion rates

    """

    address: str
    name: str
    symbol: str
    decimals: int
    type: TokenType = TokenType.PROTOCOL
    base_rate: int = 1
    tokens: list[UnwrappedTokenExchangeRate]


class ProtocolDetails(BaseModel):
    """Static description of a protocol product on a chain."""

    protocol_id: str
    product_id: str
    chain_id: int
    name: str
    description: str
    site_url: str
    icon_url: str
    position_type: PositionType


class AdapterSettings(BaseModel):
    """Flags telling a host which generic features an adapter takes part in."""

    model_config = ConfigDict(frozen=True)

    include_in_unwrap: bool = False
    user_event: bool = False
