"""
The chain index read by the versionbits tracker

A chain index answers one question: given a block hash, return the block's version, timestamp, height and
previous block hash. Any object with a matching get_entry() can be handed to the tracker; MemoryChainIndex is the
in-process implementation used by tests and tools.
"""
import threading
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol

from iopchain.chain.header import BlockHeader
from iopchain.core import CHAIN, VERSIONBITS, ChainIndexError, get_logger

logger = get_logger(__name__)

__all__ = ["BlockEntry", "ChainIndex", "MemoryChainIndex", "get_ancestor", "get_previous", "median_time_past",
           "iter_window"]


@dataclass(frozen=True)
class BlockEntry:
    hash: bytes
    version: int
    timestamp: int
    height: int
    prev_block: bytes

    @classmethod
    def from_header(cls, header: BlockHeader, height: int) -> "BlockEntry":
        return cls(
            hash=header.block_id,
            version=header.version,
            timestamp=header.timestamp,
            height=height,
            prev_block=header.prev_block
        )

    @property
    def is_genesis(self) -> bool:
        return self.height == 0

    def has_bit(self, bit: int) -> bool:
        """True if the version uses the versionbits scheme and signals the given bit"""
        if (self.version & VERSIONBITS.TOP_MASK) != VERSIONBITS.TOP_BITS:
            return False
        return (self.version >> bit) & 1 == 1


class ChainIndex(Protocol):
    def get_entry(self, block_hash: bytes) -> Optional[BlockEntry]:
        ...


# --- Walkers over any ChainIndex --- #

def get_previous(index: ChainIndex, entry: BlockEntry) -> Optional[BlockEntry]:
    if entry.is_genesis:
        return None
    prev = index.get_entry(entry.prev_block)
    if prev is None:
        raise ChainIndexError(f"Missing parent {entry.prev_block.hex()} of block at height {entry.height}")
    return prev


def get_ancestor(index: ChainIndex, entry: BlockEntry, height: int) -> Optional[BlockEntry]:
    """
    Walk back from entry to the ancestor at the given height. Negative heights have no ancestor.
    """
    if height < 0:
        return None
    if height > entry.height:
        raise ChainIndexError(f"Ancestor height {height} above entry height {entry.height}")

    while entry.height > height:
        entry = get_previous(index, entry)
    return entry


def iter_window(index: ChainIndex, entry: BlockEntry, size: int) -> Iterator[BlockEntry]:
    """
    Yield entry and up to size - 1 ancestors, stopping early at genesis.
    """
    current = entry
    for _ in range(size):
        if current is None:
            return
        yield current
        current = get_previous(index, current)


def median_time_past(index: ChainIndex, entry: BlockEntry) -> int:
    timestamps = sorted(e.timestamp for e in iter_window(index, entry, CHAIN.MEDIAN_TIMESPAN))
    return timestamps[len(timestamps) // 2]


class MemoryChainIndex:
    """
    Dict-backed chain index. Accepts headers from any branch, so competing chains can coexist.
    """

    def __init__(self):
        self._entries: dict[bytes, BlockEntry] = {}
        self._lock = threading.Lock()
        self.genesis: Optional[BlockEntry] = None

    @classmethod
    def from_genesis(cls, genesis) -> "MemoryChainIndex":
        """
        Seed the index with a network Genesis record. The entry is keyed by the genesis hash as listed in the
        network table.
        """
        index = cls()
        entry = BlockEntry(
            hash=bytes.fromhex(genesis.hash),
            version=genesis.version,
            timestamp=genesis.ts,
            height=genesis.height,
            prev_block=bytes.fromhex(genesis.prev_block)
        )
        index.add_entry(entry)
        return index

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, block_hash: bytes) -> bool:
        return block_hash in self._entries

    def get_entry(self, block_hash: bytes) -> Optional[BlockEntry]:
        return self._entries.get(block_hash)

    def add_entry(self, entry: BlockEntry) -> BlockEntry:
        with self._lock:
            if entry.height == 0:
                if self.genesis is not None and self.genesis.hash != entry.hash:
                    raise ChainIndexError("Chain index already holds a different genesis block")
                self.genesis = entry
            elif entry.prev_block not in self._entries:
                raise ChainIndexError(f"Unknown parent block: {entry.prev_block.hex()}")
            return self._entries.setdefault(entry.hash, entry)

    def add_header(self, header: BlockHeader) -> BlockEntry:
        """
        Add a header whose parent is already indexed; the height is derived from the parent.
        """
        parent = self._entries.get(header.prev_block)
        if parent is None:
            raise ChainIndexError(f"Unknown parent block: {header.prev_block.hex()}")
        entry = BlockEntry.from_header(header, parent.height + 1)
        logger.debug(f"Indexed block {entry.hash.hex()} at height {entry.height}")
        return self.add_entry(entry)

    def get_previous(self, entry: BlockEntry) -> Optional[BlockEntry]:
        return get_previous(self, entry)

    def get_ancestor(self, entry: BlockEntry, height: int) -> Optional[BlockEntry]:
        return get_ancestor(self, entry, height)

    def median_time_past(self, entry: BlockEntry) -> int:
        return median_time_past(self, entry)
