"""
The Network registry: maps a network name or version integer to its extended key version bytes
"""
from dataclasses import dataclass
from typing import Optional

from bitkeys.core import XKEYS

__all__ = ["Network", "LIVENET", "TESTNET", "DEFAULT_NETWORK", "NETWORKS", "get_network"]


@dataclass(frozen=True)
class Network:
    name: str
    xprivkey: int
    xpubkey: int
    aliases: tuple = ()

    @property
    def xprv_version(self) -> bytes:
        return self.xprivkey.to_bytes(XKEYS.VERSION_SIZE, "big")

    @property
    def xpub_version(self) -> bytes:
        return self.xpubkey.to_bytes(XKEYS.VERSION_SIZE, "big")

    def __str__(self):
        return self.name


LIVENET = Network(
    name="livenet",
    xprivkey=int.from_bytes(XKEYS.MAINNET_PRIVATE, "big"),
    xpubkey=int.from_bytes(XKEYS.MAINNET_PUBLIC, "big"),
    aliases=("mainnet",)
)
TESTNET = Network(
    name="testnet",
    xprivkey=int.from_bytes(XKEYS.TESTNET_PRIVATE, "big"),
    xpubkey=int.from_bytes(XKEYS.TESTNET_PUBLIC, "big"),
    aliases=("regtest",)
)
DEFAULT_NETWORK = LIVENET
NETWORKS = (LIVENET, TESTNET)


def get_network(arg, key: Optional[str] = None) -> Optional[Network]:
    """
    Looks up a network by Network instance, name/alias, or version integer. When key is "xprivkey" or
    "xpubkey", an integer only matches that version field. Returns None for unknown networks.
    """
    if isinstance(arg, Network):
        return arg if arg in NETWORKS else None

    if isinstance(arg, str):
        for network in NETWORKS:
            if arg == network.name or arg in network.aliases:
                return network
        return None

    if isinstance(arg, int) and not isinstance(arg, bool):
        keys = (key,) if key else ("xprivkey", "xpubkey")
        for network in NETWORKS:
            if any(getattr(network, k) == arg for k in keys):
                return network
    return None
