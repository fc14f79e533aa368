"""
The DerivationPath class: standard BIP43 purpose paths
"""
from enum import IntEnum

from bitkeys.data import TESTNET, Network

__all__ = ["DerivationPath"]


class DerivationPath(IntEnum):
    BIP44 = 44
    BIP49 = 49
    BIP84 = 84
    BIP86 = 86

    @property
    def purpose(self) -> int:
        return self.value

    @staticmethod
    def coin_type(network: Network | None = None) -> int:
        # SLIP-44: 0 for bitcoin, 1 for every test network
        return 1 if network == TESTNET else 0

    def account_path(self, account: int = 0, network: Network | None = None) -> str:
        return f"m/{self.purpose}'/{self.coin_type(network)}'/{account}'"

    def path(self, account: int = 0, change: int = 0, index: int = 0, network: Network | None = None) -> str:
        return f"{self.account_path(account, network)}/{change}/{index}"
