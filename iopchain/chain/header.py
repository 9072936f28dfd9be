"""
The BlockHeader class
"""
from datetime import datetime, timezone

from iopchain.core import BLOCK, VERSIONBITS, SERIALIZED, Serializable, get_stream, read_field, read_uint32
from iopchain.crypto import hash256

__all__ = ["BlockHeader"]


class BlockHeader(Serializable):
    """
    ---------------------------------------------------------------------
    |   Name        |   data_type   |   format              |   size    |
    ---------------------------------------------------------------------
    |   Version     |   int         |   little-endian       |   4       |
    |   prev_block  |   bytes       |   natural byte order  |   32      |
    |   merkle_root |   bytes       |   natural byte order  |   32      |
    |   time        |   int         |   little-endian       |   4       |
    |   bits        |   int         |   little-endian       |   4       |
    |   nonce       |   int         |   little-endian       |   4       |
    ---------------------------------------------------------------------
    Hashes are kept in natural (serialized) byte order, which is the order the network tables use.
    """
    __slots__ = ('version', 'prev_block', 'merkle_root', 'timestamp', 'bits', 'nonce')

    def __init__(self,
                 version: int,
                 prev_block: bytes,
                 merkle_root: bytes,
                 timestamp: int,
                 bits: int,
                 nonce: int = 0
                 ):
        self.version = version
        self.prev_block = prev_block
        self.merkle_root = merkle_root
        self.timestamp = timestamp
        self.bits = bits
        self.nonce = nonce

    @property
    def block_id(self) -> bytes:
        return hash256(self.to_bytes())

    @property
    def uses_versionbits(self) -> bool:
        return (self.version & VERSIONBITS.TOP_MASK) == VERSIONBITS.TOP_BITS

    @classmethod
    def from_bytes(cls, byte_stream: SERIALIZED):
        stream = get_stream(byte_stream)

        version = read_uint32(stream, "version")
        prev_block = read_field(stream, BLOCK.PREV_BLOCK, "prev_block")
        merkle_root = read_field(stream, BLOCK.MERKLE_ROOT, "merkle_root")
        timestamp = read_uint32(stream, "time")
        bits = read_uint32(stream, "bits")
        nonce = read_uint32(stream, "nonce")

        return cls(version, prev_block, merkle_root, timestamp, bits, nonce)

    def to_bytes(self) -> bytes:
        parts = [
            self.version.to_bytes(BLOCK.VERSION, "little"),
            self.prev_block,
            self.merkle_root,
            self.timestamp.to_bytes(BLOCK.TIME, "little"),
            self.bits.to_bytes(BLOCK.BITS, "little"),
            self.nonce.to_bytes(BLOCK.NONCE, "little")
        ]
        return b''.join(parts)

    def to_dict(self, formatted: bool = False) -> dict:
        return {
            "block_hash": self.block_id.hex(),
            "version": self.version,
            "previous_block": self.prev_block.hex(),
            "merkle_root": self.merkle_root.hex(),
            "timestamp": datetime.fromtimestamp(self.timestamp, tz=timezone.utc).strftime(
                BLOCK.TIMESTAMP_FORMAT) if formatted else self.timestamp,
            "bits": self.bits,
            "nonce": self.nonce
        }
