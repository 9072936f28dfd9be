"""
The reference formats and constants used by the network registry and versionbits
"""
from typing import Final

__all__ = ["BLOCK", "VERSIONBITS", "DEPLOYMENT", "CHAIN"]


class BLOCK:
    """
    Block header byte sizes
    """
    VERSION: Final[int] = 4
    PREV_BLOCK: Final[int] = 32
    MERKLE_ROOT: Final[int] = 32
    TIME: Final[int] = 4
    BITS: Final[int] = 4
    NONCE: Final[int] = 4
    HEADER: Final[int] = 80
    TIMESTAMP_FORMAT: Final[str] = "%A, %d %B %Y %H:%M:%S"


class VERSIONBITS:
    """
    BIP9 version field layout: the top 3 bits select the versionbits scheme, the remaining 29 bits signal
    """
    TOP_BITS: Final[int] = 0x20000000
    TOP_MASK: Final[int] = 0xe0000000
    NUM_BITS: Final[int] = 29
    MAX_BIT: Final[int] = 28


class DEPLOYMENT:
    """
    Timing sentinels for deployment start_time and timeout
    """
    NEVER: Final[int] = 0xffffffff  # start_time: never starts / timeout: never times out
    UNCONFIGURED: Final[int] = 0  # start_time == timeout == 0


class CHAIN:
    """
    Chain constants shared by every network
    """
    MEDIAN_TIMESPAN: Final[int] = 11
    ZERO_HASH: Final[str] = "00" * 32
