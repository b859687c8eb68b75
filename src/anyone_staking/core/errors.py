"""Exception taxonomy for adapter queries."""


class AdapterError(Exception):
    """Base class for all errors raised by protocol adapters."""


class InvalidAddressError(AdapterError, ValueError):
    """
    Raised when an input address is not a syntactically valid account address.

    Parameters
    ----------
    address : object
        The rejected value

    """

    def __init__(self, address: object) -> None:
        self.address = address
        super().__init__(f"Invalid account address: {address!r}")


class NotFoundError(AdapterError, LookupError):
    """
    Raised when a token address is unknown to the token registry.

    Parameters
    ----------
    address : str
        The address that was looked up

    """

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"Protocol token not found: {address}")


class UpstreamQueryError(AdapterError):
    """Raised when the chain query transport fails to answer a contract call."""
