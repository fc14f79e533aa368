"""
Base58 and Base58Check encoding
"""
from typing import Optional

import base58

from bitkeys.core import InvalidB58Char, InvalidB58Checksum, XKEYS
from bitkeys.cryptography import hash256

__all__ = ["BASE58_ALPHABET", "base58_checksum", "decode_base58check", "encode_base58check", "find_invalid_b58_char"]

BASE58_ALPHABET = base58.BITCOIN_ALPHABET.decode("ascii")
_BASE58_CHARS = frozenset(BASE58_ALPHABET)


def find_invalid_b58_char(data: str) -> Optional[str]:
    """
    Returns the first character of data outside the Base58 alphabet, or None when all characters are valid
    """
    for char in data:
        if char not in _BASE58_CHARS:
            return char
    return None


def base58_checksum(payload: bytes) -> bytes:
    """First 4 bytes of HASH256(payload)"""
    return hash256(payload)[:XKEYS.CHECKSUM_SIZE]


def encode_base58check(payload: bytes, checksum: Optional[bytes] = None) -> str:
    """
    Appends the checksum to the payload and returns the Base58 text. A supplied checksum is used as-is
    """
    checksum = base58_checksum(payload) if checksum is None else checksum
    return base58.b58encode(payload + checksum).decode("ascii")


def decode_base58check(data: str) -> bytes:
    """
    Given a string of Base58Check chars, we decode it and return the payload without checksum.
    Raises InvalidB58Char or InvalidB58Checksum.
    """
    bad_char = find_invalid_b58_char(data)
    if bad_char is not None:
        raise InvalidB58Char(bad_char, data)

    decoded = base58.b58decode(data)
    if len(decoded) < XKEYS.CHECKSUM_SIZE:
        raise InvalidB58Checksum(data, context=decoded)

    payload, checksum = decoded[:-XKEYS.CHECKSUM_SIZE], decoded[-XKEYS.CHECKSUM_SIZE:]
    if base58_checksum(payload) != checksum:
        raise InvalidB58Checksum(data, context=decoded)
    return payload
