"""
Tests for base58 encoding, addresses, WIF keys and derivation paths
"""
from secrets import token_bytes

import pytest

from iopchain.core import DataEncodingError, UnknownNetworkError
from iopchain.crypto import decode_base58, decode_base58check, encode_base58, encode_base58check, hash160
from iopchain.wallet import DerivationPath, HARDENED_OFFSET, address_from_pubkey, address_from_script, \
    decode_address, decode_wif, encode_address, encode_wif

# -- CONSTANTS
KNOWN_PUBKEY = "0250863ad64a87ae8a2fe83c1af1a8403cb53f53e486d8511dad8a04887e5b2352"
KNOWN_HASH160 = "f54a5851e9372b87810a8e60cdd2e7cfd80b6e31"
KNOWN_P2PKH_ADDRESS = "1PMycacnJaSqwwJqjawXBErnLsZ7RkXUAs"
KNOWN_SECRET = "0C28FCA386C7A227600B2FE50B7CAE11EC86D3BF1FBE471BE89827E19D72AA1D"
KNOWN_WIF = "5HueCGU8rMjxEXxiPuD5BDku4MkFqeZyd4dZ1jvhTVqvbTLvyTJ"

# --- Messages
msg1 = "Decoded address doesn't match the encoded hash"
msg2 = "Decoded WIF doesn't match the encoded secret"


def test_hash160():
    assert hash160(bytes.fromhex(KNOWN_PUBKEY)).hex() == KNOWN_HASH160


def test_base58_known_values():
    assert encode_base58(b'\x00\x00\x01') == "112"
    assert decode_base58("112") == b'\x00\x00\x01'
    assert encode_base58(b'') == ""

    # Base58Check with the bitcoin prefixes
    assert encode_base58check(b'\x00' + bytes.fromhex(KNOWN_HASH160)) == KNOWN_P2PKH_ADDRESS
    assert encode_base58check(b'\x80' + bytes.fromhex(KNOWN_SECRET)) == KNOWN_WIF
    assert decode_base58check(KNOWN_WIF) == b'\x80' + bytes.fromhex(KNOWN_SECRET)


def test_base58_errors():
    with pytest.raises(DataEncodingError):
        decode_base58("0OIl")

    # Flip the last character to break the checksum
    broken = KNOWN_P2PKH_ADDRESS[:-1] + ("t" if KNOWN_P2PKH_ADDRESS[-1] != "t" else "u")
    with pytest.raises(DataEncodingError):
        decode_base58check(broken)


def test_address_roundtrip(registry):
    data_hash = token_bytes(20)
    for params in registry:
        for kind in ("pubkeyhash", "scripthash"):
            address = encode_address(data_hash, params, kind)
            decoded = decode_address(address, registry, params)
            assert decoded.hash == data_hash, msg1
            assert decoded.kind == kind
            assert decoded.network is params


def test_address_network_detection(registry, mainnet, regtest):
    pubkey = bytes.fromhex(KNOWN_PUBKEY)

    main_address = address_from_pubkey(pubkey, mainnet)
    assert decode_address(main_address, registry).network.type == "main"
    assert decode_address(main_address, registry).hash.hex() == KNOWN_HASH160

    # Testnet and regtest share prefixes: the first registered network matches unless one is given
    regtest_address = address_from_script(b'\x51', regtest)
    assert decode_address(regtest_address, registry).network.type == "testnet"
    assert decode_address(regtest_address, registry, "regtest").network.type == "regtest"
    assert decode_address(regtest_address, registry).kind == "scripthash"

    with pytest.raises(UnknownNetworkError):
        decode_address(main_address, registry, "testnet")


def test_address_errors(registry, mainnet):
    with pytest.raises(DataEncodingError):
        encode_address(token_bytes(19), mainnet)

    with pytest.raises(DataEncodingError):
        encode_address(token_bytes(20), mainnet, "witnesspubkeyhash")

    # Only the unverified witness prefix matches
    witness_address = encode_base58check(bytes([mainnet.address_prefix.witnesspubkeyhash]) + token_bytes(20))
    with pytest.raises(DataEncodingError):
        decode_address(witness_address, registry)

    with pytest.raises(DataEncodingError):
        decode_address(encode_base58check(b'\x75' + token_bytes(21)), registry)


def test_wif_roundtrip(registry):
    secret = token_bytes(32)
    for params in registry:
        for compressed in (True, False):
            wif = encode_wif(secret, params, compressed)
            decoded = decode_wif(wif, registry, params)
            assert decoded.secret == secret, msg2
            assert decoded.compressed == compressed
            assert decoded.network is params


def test_wif_network_detection(registry, mainnet):
    secret = bytes.fromhex(KNOWN_SECRET)
    wif = encode_wif(secret, mainnet, compressed=False)

    decoded = decode_wif(wif, registry)
    assert decoded.network.type == "main"
    assert decoded.secret == secret
    assert not decoded.compressed

    # Known bitcoin WIF uses a prefix no IoP network has
    with pytest.raises(UnknownNetworkError):
        decode_wif(KNOWN_WIF, registry)


def test_wif_errors(registry, mainnet):
    with pytest.raises(DataEncodingError):
        encode_wif(token_bytes(31), mainnet)

    # Wrong compression flag
    with pytest.raises(DataEncodingError):
        decode_wif(encode_base58check(b'\x31' + token_bytes(32) + b'\x02'), registry)

    with pytest.raises(DataEncodingError):
        decode_wif(encode_base58check(b'\x31' + token_bytes(20)), registry)


def test_derivation_paths(mainnet, testnet):
    assert DerivationPath.BIP44.path(mainnet) == "m/44'/66'/0'/0/0"
    assert DerivationPath.BIP84.path(testnet, account=1, change=1, index=7) == "m/84'/1'/1'/1/7"
    assert DerivationPath.BIP49.script_type == "P2SH_P2WPKH"

    assert DerivationPath.BIP44.indices(mainnet, index=3) == [
        44 + HARDENED_OFFSET, 66 + HARDENED_OFFSET, HARDENED_OFFSET, 0, 3
    ]
