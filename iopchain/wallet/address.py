"""
Methods for encoding and decoding base58 addresses and WIF private keys with network prefixes

Only the pubkeyhash and scripthash prefixes are used for base58 addresses. The witness prefixes and bech32 HRPs in
the network tables are unverified and are not used for encoding here.
"""
from dataclasses import dataclass
from typing import Final, Optional

from iopchain.core import DataEncodingError, get_logger
from iopchain.crypto import decode_base58check, encode_base58check, hash160
from iopchain.network.params import NetworkParams
from iopchain.network.registry import NetworkLike, NetworkRegistry

logger = get_logger(__name__)

__all__ = ["BASE58_KINDS", "DecodedAddress", "DecodedWIF", "encode_address", "address_from_pubkey",
           "address_from_script", "decode_address", "encode_wif", "decode_wif"]

BASE58_KINDS: Final[tuple] = ("pubkeyhash", "scripthash")
HASH_BYTES: Final[int] = 20
SECRET_BYTES: Final[int] = 32
COMPRESSED_FLAG: Final[bytes] = b'\x01'


@dataclass(frozen=True)
class DecodedAddress:
    network: NetworkParams
    kind: str
    hash: bytes


@dataclass(frozen=True)
class DecodedWIF:
    network: NetworkParams
    secret: bytes
    compressed: bool


# --- ADDRESSES --- #

def encode_address(data_hash: bytes, network: NetworkParams, kind: str = "pubkeyhash") -> str:
    """
    Base58Check encode a 20-byte hash with the network's prefix for the given kind
    """
    if kind not in BASE58_KINDS:
        raise DataEncodingError(f"Unsupported base58 address kind: {kind!r}")
    if len(data_hash) != HASH_BYTES:
        raise DataEncodingError(f"Address hash must be {HASH_BYTES} bytes, got {len(data_hash)}")

    prefix = getattr(network.address_prefix, kind)
    return encode_base58check(bytes([prefix]) + data_hash)


def address_from_pubkey(pubkey: bytes, network: NetworkParams) -> str:
    return encode_address(hash160(pubkey), network, "pubkeyhash")


def address_from_script(script: bytes, network: NetworkParams) -> str:
    return encode_address(hash160(script), network, "scripthash")


def decode_address(address: str, registry: NetworkRegistry, network: Optional[NetworkLike] = None) -> DecodedAddress:
    """
    Decode a base58 address and find the network it belongs to. Testnet and regtest share prefixes, so without an
    explicit network the first registered match is returned.
    """
    payload = decode_base58check(address)
    if len(payload) != HASH_BYTES + 1:
        raise DataEncodingError(f"Unexpected address payload length: {len(payload)}")

    prefix, data_hash = payload[0], payload[1:]
    params = registry.from_address_prefix(prefix, network)

    for kind in BASE58_KINDS:
        if getattr(params.address_prefix, kind) == prefix:
            return DecodedAddress(params, kind, data_hash)

    logger.debug(f"Address prefix {prefix:#04x} only matches unverified witness prefixes on {params.type}")
    raise DataEncodingError(f"Prefix {prefix:#04x} is not a base58 address prefix on network {params.type!r}")


# --- WIF --- #

def encode_wif(secret: bytes, network: NetworkParams, compressed: bool = True) -> str:
    if len(secret) != SECRET_BYTES:
        raise DataEncodingError(f"Private key must be {SECRET_BYTES} bytes, got {len(secret)}")

    payload = bytes([network.key_prefix.privkey]) + secret
    if compressed:
        payload += COMPRESSED_FLAG
    return encode_base58check(payload)


def decode_wif(wif: str, registry: NetworkRegistry, network: Optional[NetworkLike] = None) -> DecodedWIF:
    payload = decode_base58check(wif)

    match len(payload):
        case 33:
            compressed = False
        case 34 if payload[-1:] == COMPRESSED_FLAG:
            compressed = True
        case _:
            raise DataEncodingError(f"Invalid WIF payload length or compression flag: {len(payload)}")

    params = registry.from_wif_prefix(payload[0], network)
    return DecodedWIF(params, payload[1:1 + SECRET_BYTES], compressed)
