"""Contract addresses per protocol and chain."""

PROTOCOL_ADDRESSES: dict[str, dict[str, dict[str, str]]] = {
    "anyone": {
        "ethereum": {
            # HodlerV5 proxy; also the stANYONE protocol token address
            "hodler_proxy": "0x0d9a1ca7Bc756AE009672Db626CdE3c9BEF583EF",
            "anyone_token": "0xFeAc2Eae96899709a43E252B6B92971D32F9C0F9",
        },
    },
}
