"""Read-only lookup over a fixed table of protocol tokens."""

from collections.abc import Iterable

from anyone_staking.core.addresses import same_address
from anyone_staking.core.errors import NotFoundError
from anyone_staking.core.models import TokenDescriptor


class TokenRegistry:
    """
    Immutable registry of the protocol tokens an adapter exposes.

    Parameters
    ----------
    tokens : Iterable[TokenDescriptor]
        Protocol token descriptors, each with its underlying tokens nested

    """

    def __init__(self, tokens: Iterable[TokenDescriptor]) -> None:
        self._tokens: tuple[TokenDescriptor, ...] = tuple(tokens)

    def list_protocol_tokens(self) -> list[TokenDescriptor]:
        """
        List all protocol tokens.

        Returns
        -------
        list[TokenDescriptor]
            Protocol tokens in table order

        """
        return list(self._tokens)

    def resolve_by_address(self, address: str) -> TokenDescriptor:
        """
        Find a protocol token by address, ignoring case, checksum and ``0x`` prefix.

        Parameters
        ----------
        address : str
            Protocol token address

        Returns
        -------
        TokenDescriptor
            Matching protocol token

        Raises
        ------
        NotFoundError
            If no protocol token has this address

        """
        for token in self._tokens:
            if same_address(token.address, address):
                return token
        raise NotFoundError(address)

    def __len__(self) -> int:
        return len(self._tokens)
