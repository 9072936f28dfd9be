"""
Methods for Base58 and Base58Check encoding
"""
from iopchain.core import DataEncodingError, get_logger
from iopchain.crypto.hash_functions import hash256

logger = get_logger(__name__)

__all__ = ["BASE58_ALPHABET", "encode_base58", "decode_base58", "encode_base58check", "decode_base58check"]

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
CHECKSUM_BYTES = 4


def encode_base58(data: bytes) -> str:
    """
    Given bytes we return a base58 encoded string. Each leading zero byte becomes a leading '1'.
    """
    n = int.from_bytes(data, "big")
    encoded_string = ""

    while n > 0:
        n, remainder = divmod(n, 58)
        encoded_string = BASE58_ALPHABET[remainder] + encoded_string

    leading_zeros = len(data) - len(data.lstrip(b'\x00'))
    return ("1" * leading_zeros) + encoded_string


def decode_base58(encoded: str) -> bytes:
    """
    Given a base58 encoded string, return the underlying bytes.
    """
    total = 0
    for char in encoded:
        index = BASE58_ALPHABET.find(char)
        if index == -1:
            raise DataEncodingError(f"Invalid base58 character: {char!r}")
        total = total * 58 + index

    body = total.to_bytes((total.bit_length() + 7) // 8, "big")

    # Each leading '1' represents a leading zero byte
    leading_ones = len(encoded) - len(encoded.lstrip("1"))
    return b'\x00' * leading_ones + body


def encode_base58check(data: bytes) -> str:
    """
    Append the first 4 bytes of HASH256(data) as checksum and base58 encode
    """
    checksum = hash256(data)[:CHECKSUM_BYTES]
    return encode_base58(data + checksum)


def decode_base58check(encoded: str) -> bytes:
    """
    Decode a base58Check string and return the payload without checksum.
    Raise DataEncodingError if the checksum fails
    """
    decoded = decode_base58(encoded)
    if len(decoded) < CHECKSUM_BYTES:
        raise DataEncodingError("Base58Check string too short")

    payload, checksum = decoded[:-CHECKSUM_BYTES], decoded[-CHECKSUM_BYTES:]
    if hash256(payload)[:CHECKSUM_BYTES] != checksum:
        logger.debug(f"Checksum mismatch for base58 string: {encoded}")
        raise DataEncodingError("Decoded checksum does not equal given checksum")
    return payload
