"""
Tests for BlockHeader parsing and the in-memory chain index
"""
import json

import pytest

from iopchain.chain import BlockEntry, BlockHeader, MemoryChainIndex, get_ancestor, iter_window, median_time_past
from iopchain.core import BLOCK, ChainIndexError, ReadError
from iopchain.crypto import hash256
from tests.chain_utility import BLOCK_SPACING, NO_SIGNAL, build_chain, signal


def test_header_serialization(regtest):
    header = regtest.genesis_header()

    assert len(header.to_bytes()) == BLOCK.HEADER
    assert BlockHeader.from_bytes(header.to_bytes()) == header
    assert BlockHeader.from_hex(header.to_hex()) == header
    assert header.block_id == hash256(header.to_bytes())
    assert not header.uses_versionbits

    header_dict = header.to_dict()
    assert header_dict["block_hash"] == regtest.genesis.hash
    assert header_dict["timestamp"] == regtest.genesis.ts
    assert isinstance(header.to_dict(formatted=True)["timestamp"], str)
    assert json.loads(header.to_json()) == header_dict


def test_header_short_data(regtest):
    raw = regtest.genesis_header().to_bytes()
    with pytest.raises(ReadError, match="nonce"):
        BlockHeader.from_bytes(raw[:-1])

    with pytest.raises(TypeError):
        BlockHeader.from_bytes(raw.hex())


def test_header_versionbits_flag():
    header = BlockHeader(signal(0), bytes(32), bytes(32), 0, 0)
    assert header.uses_versionbits
    header.version = 0x60000000
    assert not header.uses_versionbits


def test_entry_has_bit():
    entry = BlockEntry(hash=b'\x01' * 32, version=signal(0, 28), timestamp=0, height=1, prev_block=bytes(32))
    assert entry.has_bit(0) and entry.has_bit(28)
    assert not entry.has_bit(1)

    legacy = BlockEntry(hash=b'\x02' * 32, version=0x00000001, timestamp=0, height=1, prev_block=bytes(32))
    assert not legacy.has_bit(0)


def test_index_from_genesis(regtest):
    index = MemoryChainIndex.from_genesis(regtest.genesis)

    assert len(index) == 1
    assert regtest.genesis_hash in index
    assert index.genesis.is_genesis
    assert index.get_previous(index.genesis) is None
    assert index.get_entry(b'\x00' * 32) is None


def test_index_heights_and_ancestors(regtest):
    index, entries = build_chain(regtest, 30)

    assert len(index) == 31
    assert [e.height for e in entries] == list(range(31))
    assert index.get_previous(entries[10]) == entries[9]
    assert index.get_ancestor(entries[30], 5) == entries[5]
    assert get_ancestor(index, entries[30], 30) == entries[30]
    assert get_ancestor(index, entries[30], -1) is None

    with pytest.raises(ChainIndexError):
        get_ancestor(index, entries[5], 6)


def test_iter_window_stops_at_genesis(regtest):
    index, entries = build_chain(regtest, 5)

    window = list(iter_window(index, entries[5], 144))
    assert window == entries[::-1]
    assert list(iter_window(index, entries[5], 2)) == [entries[5], entries[4]]


def test_median_time_past(regtest):
    index, entries = build_chain(regtest, 30)
    genesis_ts = regtest.genesis.ts

    # 11 blocks ending at 20 -> median is block 15
    assert median_time_past(index, entries[20]) == genesis_ts + 15 * BLOCK_SPACING
    # Fewer than 11 blocks available
    assert index.median_time_past(entries[4]) == genesis_ts + 2 * BLOCK_SPACING
    assert median_time_past(index, entries[0]) == genesis_ts


def test_unknown_parent(regtest):
    index = MemoryChainIndex.from_genesis(regtest.genesis)
    orphan = BlockHeader(NO_SIGNAL, b'\x07' * 32, bytes(32), regtest.genesis.ts, regtest.pow.bits)

    with pytest.raises(ChainIndexError):
        index.add_header(orphan)

    with pytest.raises(ChainIndexError):
        index.add_entry(BlockEntry(b'\x08' * 32, NO_SIGNAL, 0, 1, b'\x07' * 32))


def test_second_genesis_rejected(regtest, testnet):
    index = MemoryChainIndex.from_genesis(regtest.genesis)
    testnet_genesis = BlockEntry(testnet.genesis_hash, 1, testnet.genesis.ts, 0, bytes(32))

    with pytest.raises(ChainIndexError):
        index.add_entry(testnet_genesis)

    # Re-adding the same genesis is a no-op
    assert index.add_entry(index.genesis) is index.genesis
    assert len(index) == 1


def test_missing_parent_while_walking(regtest):
    index = MemoryChainIndex()
    detached = BlockEntry(b'\x09' * 32, NO_SIGNAL, 0, 3, b'\x07' * 32)

    with pytest.raises(ChainIndexError):
        index.get_previous(detached)
