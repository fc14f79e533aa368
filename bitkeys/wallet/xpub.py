"""
Extended public keys (xpub), the watch-only counterpart of an ExtendedPrivateKey
"""
import json
from typing import Optional

from bitkeys.core import (XKEYS, InvalidArgument, InvalidB58Checksum, InvalidDerivationArgument, InvalidLength,
                          InvalidNetwork, InvalidNetworkArgument, get_stream, read_stream)
from bitkeys.cryptography import SECP256K1, PubKey, hash160, hmac_sha512
from bitkeys.data import base58_checksum, decode_base58check, encode_base58check, get_network
from bitkeys.logger import get_logger
from bitkeys.wallet.path import parse_path

__all__ = ["ExtendedPublicKey"]

logger = get_logger(__name__)

HARDENED_OFFSET = XKEYS.HARDENED_OFFSET


class ExtendedPublicKey:
    """
    A BIP32 extended public key. Only non-hardened children can be derived from it.
    """
    __slots__ = ('network', 'version', 'depth', 'parent_fingerprint', 'child_index', 'chain_code', 'public_key',
                 'checksum', 'xpubkey', 'fingerprint')

    def __init__(self,
                 version: bytes,
                 depth: bytes,
                 parent_fingerprint: bytes,
                 child_index: bytes,
                 chain_code: bytes,
                 public_key: bytes,
                 checksum: Optional[bytes] = None,
                 ):
        sizes = [
            ("version", version, XKEYS.VERSION_SIZE),
            ("depth", depth, XKEYS.DEPTH_SIZE),
            ("parent_fingerprint", parent_fingerprint, XKEYS.FINGERPRINT_SIZE),
            ("child_index", child_index, XKEYS.CHILD_INDEX_SIZE),
            ("chain_code", chain_code, XKEYS.CHAIN_CODE_SIZE),
            ("public_key", public_key, XKEYS.PUBLIC_KEY_SIZE),
        ]
        for name, value, size in sizes:
            if not isinstance(value, bytes) or len(value) != size:
                raise InvalidArgument(f"{name} must be {size} bytes", context=value)

        network = get_network(int.from_bytes(version, "big"), key="xpubkey")
        if network is None:
            raise InvalidNetwork(version.hex(), context=version)

        # Raises InvalidArgument for points off the curve
        PubKey.from_compressed(public_key)

        payload = version + depth + parent_fingerprint + child_index + chain_code + public_key
        computed_checksum = base58_checksum(payload)
        if checksum and checksum != computed_checksum:
            raise InvalidB58Checksum(payload.hex(), context=checksum)

        _set = object.__setattr__
        _set(self, "network", network)
        _set(self, "version", version)
        _set(self, "depth", depth[0])
        _set(self, "parent_fingerprint", parent_fingerprint)
        _set(self, "child_index", int.from_bytes(child_index, "big"))
        _set(self, "chain_code", chain_code)
        _set(self, "public_key", public_key)
        _set(self, "checksum", computed_checksum)
        _set(self, "xpubkey", encode_base58check(payload, computed_checksum))
        _set(self, "fingerprint", hash160(public_key)[:XKEYS.FINGERPRINT_SIZE])

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other) -> bool:
        if not isinstance(other, ExtendedPublicKey):
            return False
        return self.xpubkey == other.xpubkey

    def __hash__(self) -> int:
        return hash(self.xpubkey)

    def __str__(self):
        return self.xpubkey

    def __repr__(self):
        return f"<ExtendedPublicKey: {self.xpubkey}, network: {self.network.name}>"

    # --- CLASS METHODS --- #
    @classmethod
    def from_private(cls, xprv) -> "ExtendedPublicKey":
        """
        Return the public counterpart of an ExtendedPrivateKey
        """
        return cls(
            version=xprv.network.xpub_version,
            depth=xprv.depth.to_bytes(XKEYS.DEPTH_SIZE, "big"),
            parent_fingerprint=xprv.parent_fingerprint,
            child_index=xprv.child_index.to_bytes(XKEYS.CHILD_INDEX_SIZE, "big"),
            chain_code=xprv.chain_code,
            public_key=xprv.public_key,
        )

    @classmethod
    def from_serialized(cls, data: str | bytes, network=None) -> "ExtendedPublicKey":
        if isinstance(data, (bytes, bytearray)):
            data = data.decode("latin-1")
        if not isinstance(data, str):
            raise InvalidArgument("Expected string or bytes", context=data)

        payload = decode_base58check(data)
        if len(payload) != XKEYS.DATA_LENGTH:
            raise InvalidLength(f"expected {XKEYS.DATA_LENGTH} bytes, got {len(payload)}", context=payload)

        stream = get_stream(payload)
        fields = {
            "version": read_stream(stream, XKEYS.VERSION_SIZE, "version"),
            "depth": read_stream(stream, XKEYS.DEPTH_SIZE, "depth"),
            "parent_fingerprint": read_stream(stream, XKEYS.FINGERPRINT_SIZE, "parent_fingerprint"),
            "child_index": read_stream(stream, XKEYS.CHILD_INDEX_SIZE, "child_index"),
            "chain_code": read_stream(stream, XKEYS.CHAIN_CODE_SIZE, "chain_code"),
            "public_key": read_stream(stream, XKEYS.PUBLIC_KEY_SIZE, "public_key"),
        }

        if network is not None:
            expected = get_network(network, key="xpubkey")
            if expected is None:
                raise InvalidNetworkArgument(network, context=network)
            if fields["version"] != expected.xpub_version:
                raise InvalidNetwork(fields["version"].hex(), context=fields["version"])

        return cls(**fields)

    # --- DERIVATION --- #
    def derive(self, arg: int | str) -> "ExtendedPublicKey":
        """
        Derive a non-hardened child by index, or follow a path of non-hardened steps ("m/0/1")
        """
        if isinstance(arg, int) and not isinstance(arg, bool):
            return self.derive_child(arg)
        if isinstance(arg, str):
            result = self
            for index, hardened in parse_path(arg):
                if hardened:
                    raise InvalidDerivationArgument(arg, context=arg)
                result = result.derive_child(index)
            return result
        raise InvalidDerivationArgument(arg, context=arg)

    def derive_child(self, index: int) -> "ExtendedPublicKey":
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < HARDENED_OFFSET:
            raise InvalidDerivationArgument(index, context=index)
        if self.depth >= XKEYS.MAX_DEPTH:
            raise InvalidDerivationArgument(f"cannot derive beyond depth {XKEYS.MAX_DEPTH}", context=index)

        parent_point = PubKey.from_compressed(self.public_key).to_point()
        while True:
            index_bytes = index.to_bytes(XKEYS.CHILD_INDEX_SIZE, "big")
            key_hash = hmac_sha512(key=self.chain_code, message=self.public_key + index_bytes)
            tweak = int.from_bytes(key_hash[:32], "big")

            child_point = None
            if tweak < SECP256K1.order:
                child_point = SECP256K1.add_points(SECP256K1.multiply_generator(tweak), parent_point)
            if child_point:
                break

            logger.warning("Public child %d of %s is invalid, proceeding with the next index", index,
                           self.fingerprint.hex())
            if index >= HARDENED_OFFSET - 1:
                raise InvalidDerivationArgument(f"no valid child at or after index {index}", context=index)
            index += 1

        return ExtendedPublicKey(
            version=self.version,
            depth=(self.depth + 1).to_bytes(XKEYS.DEPTH_SIZE, "big"),
            parent_fingerprint=self.fingerprint,
            child_index=index_bytes,
            chain_code=key_hash[32:],
            public_key=PubKey.from_point(child_point).compressed(),
        )

    # --- DISPLAY --- #
    def to_string(self) -> str:
        return self.xpubkey

    def to_object(self) -> dict:
        return {
            "network": self.network.name,
            "depth": self.depth,
            "fingerprint": int.from_bytes(self.fingerprint, "big"),
            "parent_fingerprint": int.from_bytes(self.parent_fingerprint, "big"),
            "child_index": self.child_index,
            "chain_code": self.chain_code.hex(),
            "public_key": self.public_key.hex(),
            "checksum": int.from_bytes(self.checksum, "big"),
            "xpubkey": self.xpubkey,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_object())
