"""
Readers for the fixed-width fields of a serialized block header
"""
from io import BytesIO
from typing import Union

from iopchain.core.exceptions import ReadError

__all__ = ["SERIALIZED", "get_stream", "read_field", "read_uint32"]

SERIALIZED = Union[bytes, BytesIO]


def get_stream(data: SERIALIZED) -> BytesIO:
    if isinstance(data, BytesIO):
        return data
    if isinstance(data, bytes):
        return BytesIO(data)
    raise TypeError(f"Expected bytes or BytesIO, got {type(data).__name__}")


def read_field(stream: BytesIO, length: int, field: str) -> bytes:
    """Read exactly length bytes for the named header field"""
    data = stream.read(length)
    if len(data) != length:
        raise ReadError(f"Header field {field!r} needs {length} bytes, got {len(data)}")
    return data


def read_uint32(stream: BytesIO, field: str) -> int:
    return int.from_bytes(read_field(stream, 4, field), "little")
