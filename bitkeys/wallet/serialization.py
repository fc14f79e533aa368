"""
The 82-byte extended private key layout

version (4) || depth (1) || parent fingerprint (4) || child index (4) || chain code (32) || 0x00 (1) ||
private key (32) || checksum (4)

The whole buffer is Base58 encoded to produce the xprv text.
"""
from typing import Optional

from bitkeys.core import (XKEYS, InvalidArgument, InvalidB58Checksum, InvalidLength, InvalidNetwork,
                          InvalidNetworkArgument, get_stream, read_stream)
from bitkeys.data import base58_checksum, decode_base58check, encode_base58check, get_network
from bitkeys.logger import get_logger

__all__ = ["FIELD_SIZES", "decode_serialized", "encode_fields", "get_serialized_error", "is_valid_serialized",
           "pack_payload"]

logger = get_logger(__name__)

# Payload fields in layout order
FIELD_SIZES = {
    "version": XKEYS.VERSION_SIZE,
    "depth": XKEYS.DEPTH_SIZE,
    "parent_fingerprint": XKEYS.FINGERPRINT_SIZE,
    "child_index": XKEYS.CHILD_INDEX_SIZE,
    "chain_code": XKEYS.CHAIN_CODE_SIZE,
    "private_key": XKEYS.PRIVATE_KEY_SIZE,
}


def _as_text(data: str | bytes) -> str:
    # latin-1 maps every byte to one character, so non-Base58 bytes surface as invalid characters
    return data.decode("latin-1") if isinstance(data, (bytes, bytearray)) else data


def get_serialized_error(data, network=None) -> Optional[InvalidArgument]:
    """
    Checks what error causes the validation of a serialized private key to fail.

    Args:
        data: the Base58Check text, or its ASCII bytes
        network: optional network name, Network or version; when given the serialized version must match
            that network's xprv version

    Returns:
        The error instance (not raised), or None if data is a valid serialized private key
    """
    if not isinstance(data, (str, bytes, bytearray)):
        return InvalidArgument("Expected string or bytes", context=data)

    try:
        payload = decode_base58check(_as_text(data))
    except InvalidArgument as e:
        return e

    if len(payload) != XKEYS.DATA_LENGTH:
        return InvalidLength(f"expected {XKEYS.DATA_LENGTH} bytes, got {len(payload)}", context=payload)

    if network is not None:
        return _validate_network(payload, network)
    return None


def is_valid_serialized(data, network=None) -> bool:
    return get_serialized_error(data, network) is None


def _validate_network(payload: bytes, network_arg) -> Optional[InvalidArgument]:
    network = get_network(network_arg, key="xprivkey")
    if network is None:
        return InvalidNetworkArgument(network_arg, context=network_arg)

    version = payload[XKEYS.VERSION_START:XKEYS.VERSION_END]
    if version != network.xprv_version:
        return InvalidNetwork(version.hex(), context=version)
    return None


def decode_serialized(data: str | bytes) -> dict:
    """
    Splits a serialized private key into its named byte fields. The given text is kept under "xprivkey".
    """
    error = get_serialized_error(data)
    if error is not None:
        raise error

    text = _as_text(data)
    stream = get_stream(decode_base58check(text))

    fields = {name: read_stream(stream, size, name) for name, size in FIELD_SIZES.items() if name != "private_key"}
    if get_network(int.from_bytes(fields["version"], "big"), key="xprivkey") is None:
        raise InvalidNetwork(fields["version"].hex(), context=fields["version"])

    padding = read_stream(stream, 1, "padding")
    if padding != b'\x00':
        raise InvalidArgument(f"Expected 0x00 before the private key, got 0x{padding.hex()}", context=text)
    fields["private_key"] = read_stream(stream, XKEYS.PRIVATE_KEY_SIZE, "private_key")
    fields["checksum"] = base58_checksum(stream.getvalue())
    fields["xprivkey"] = text
    return fields


def pack_payload(version: bytes, depth: bytes, parent_fingerprint: bytes, child_index: bytes, chain_code: bytes,
                 private_key: bytes) -> bytes:
    """
    Returns the 78-byte payload. Every field must already have its layout size
    """
    parts = {
        "version": version,
        "depth": depth,
        "parent_fingerprint": parent_fingerprint,
        "child_index": child_index,
        "chain_code": chain_code,
        "private_key": private_key,
    }
    for name, value in parts.items():
        if not isinstance(value, bytes):
            raise InvalidArgument(f"{name} argument is not bytes", context=value)
        if len(value) != FIELD_SIZES[name]:
            raise InvalidArgument(f"{name} has not the expected size: found {len(value)}, "
                                  f"expected {FIELD_SIZES[name]}", context=value)

    return version + depth + parent_fingerprint + child_index + chain_code + b'\x00' + private_key


def encode_fields(fields: dict) -> tuple[bytes, str]:
    """
    Serializes the named byte fields.

    If fields carries a "checksum" it must match the computed one, else InvalidB58Checksum.

    Returns:
        (checksum, xprivkey text)
    """
    payload = pack_payload(**{name: fields.get(name) for name in FIELD_SIZES})
    checksum = base58_checksum(payload)

    supplied = fields.get("checksum")
    if supplied:
        if len(supplied) != XKEYS.CHECKSUM_SIZE:
            raise InvalidArgument(f"checksum has not the expected size: found {len(supplied)}, "
                                  f"expected {XKEYS.CHECKSUM_SIZE}", context=supplied)
        if supplied != checksum:
            logger.debug("Supplied checksum %s does not match computed %s", supplied.hex(), checksum.hex())
            raise InvalidB58Checksum(payload.hex(), context=supplied)

    return checksum, encode_base58check(payload, checksum)
