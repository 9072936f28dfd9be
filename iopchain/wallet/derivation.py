"""
The DerivationPath class, with the coin type taken from the network's key prefixes
"""
from enum import Enum

from iopchain.network.params import NetworkParams

__all__ = ["DerivationPath", "HARDENED_OFFSET"]

HARDENED_OFFSET = 0x80000000


class DerivationPath(Enum):
    BIP44 = (44, "P2PKH")
    BIP49 = (49, "P2SH_P2WPKH")
    BIP84 = (84, "P2WPKH")

    def __init__(self, purpose: int, script_type: str):
        self.purpose = purpose
        self.script_type = script_type

    def path(self, network: NetworkParams, account: int = 0, change: int = 0, index: int = 0) -> str:
        return f"m/{self.purpose}'/{network.key_prefix.coin_type}'/{account}'/{change}/{index}"

    def indices(self, network: NetworkParams, account: int = 0, change: int = 0, index: int = 0) -> list[int]:
        """
        Child indices of the path, hardened levels offset by 2^31
        """
        return [
            self.purpose + HARDENED_OFFSET,
            network.key_prefix.coin_type + HARDENED_OFFSET,
            account + HARDENED_OFFSET,
            change,
            index
        ]
