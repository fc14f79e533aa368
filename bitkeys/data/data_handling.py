"""
Methods for handling data in BitKeys
"""
import json
import string
from typing import Optional

from bitkeys.core import InvalidArgument

__all__ = ["byte_format", "is_hex", "parse_json_object", "to_fixed_bytes"]

_HEX_CHARS = frozenset(string.hexdigits)


def is_hex(data) -> bool:
    """True for a non-empty str of even length made only of hex characters"""
    return isinstance(data, str) and len(data) > 0 and len(data) % 2 == 0 and all(c in _HEX_CHARS for c in data)


def byte_format(data: bytes, length: int, name: str = "data") -> bytes:
    """
    Left pads data with zero bytes to the given length
    """
    diff = length - len(data)
    if diff == 0:
        return data
    elif diff > 0:
        return data.rjust(length, b'\x00')
    else:
        raise InvalidArgument(f"{name} has not the expected size: found {len(data)}, expected {length}",
                              context=data)


def to_fixed_bytes(value, length: int, name: str, pad: bool = True) -> bytes:
    """
    Normalizes an int, hex string or bytes-like value to exactly `length` big-endian bytes.

    Integers and hex strings are treated as big-endian numbers and left padded when pad is True. Byte
    buffers must already have the exact length.
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"{name} must be an integer, hex string or bytes, got bool", context=value)

    if isinstance(value, int):
        if value < 0 or value.bit_length() > length * 8:
            raise InvalidArgument(f"{name} out of range for {length} bytes: {value}", context=value)
        return value.to_bytes(length, "big")

    if isinstance(value, str):
        hex_value = value[2:] if value.lower().startswith("0x") else value
        hex_value = "0" + hex_value if len(hex_value) % 2 else hex_value
        if not is_hex(hex_value):
            raise InvalidArgument(f"{name} is not a valid hex string: {value!r}", context=value)
        data = bytes.fromhex(hex_value)
        return byte_format(data, length, name) if pad else _exact(data, length, name)

    if isinstance(value, (bytes, bytearray, memoryview)):
        return _exact(bytes(value), length, name)

    raise InvalidArgument(f"{name} must be an integer, hex string or bytes, got {type(value).__name__}",
                          context=value)


def _exact(data: bytes, length: int, name: str) -> bytes:
    if len(data) != length:
        raise InvalidArgument(f"{name} has not the expected size: found {len(data)}, expected {length}",
                              context=data)
    return data


def parse_json_object(data: str | bytes) -> Optional[dict]:
    """
    Returns the decoded dict if data is JSON text for an object, otherwise None
    """
    try:
        decoded = json.loads(data)
    except (ValueError, TypeError):
        return None
    return decoded if isinstance(decoded, dict) else None
