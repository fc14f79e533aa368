"""
Methods for deserializing byte streams
"""
from io import BytesIO
from typing import Union, Optional

from .exceptions import ReadError

__all__ = ["SERIALIZED", "get_stream", "read_stream"]

SERIALIZED = Union[bytes, BytesIO]


def get_stream(byte_stream: SERIALIZED):
    """Convert bytes or BytesIO to BytesIO stream"""
    if isinstance(byte_stream, (bytes, bytearray)):
        return BytesIO(bytes(byte_stream))
    elif isinstance(byte_stream, BytesIO):
        return byte_stream
    else:
        raise TypeError(f"Expected bytes or BytesIO but received: {type(byte_stream)}")


def read_stream(stream: BytesIO, length: int, data_type: Optional[str] = None) -> bytes:
    """Read exact number of bytes from stream with error checking"""
    data = stream.read(length)

    if len(data) != length:
        label = f" Data type: {data_type}" if data_type else ""
        raise ReadError(f"Insufficient data in stream, expected {length} bytes, got {len(data)}.{label}",
                        context=data)

    return data

