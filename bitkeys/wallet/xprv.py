"""
Extended private keys (xprv) for BitKeys
Implements BIP32 hierarchical deterministic key derivation

Keys are immutable: every derivation builds a new ExtendedPrivateKey, and identical derivations are served from
the shared DerivationCache.
"""
import json
import secrets
from collections.abc import Mapping
from typing import Optional

from bitkeys.core import (XKEYS, InvalidArgument, InvalidDerivationArgument, InvalidEntropyArgument,
                          InvalidNetwork, InvalidNetworkArgument, NotEnoughEntropy, TooMuchEntropy)
from bitkeys.cryptography import SECP256K1, PubKey, hash160, hmac_sha512
from bitkeys.data import DEFAULT_NETWORK, Network, get_network, is_hex, parse_json_object, to_fixed_bytes
from bitkeys.logger import get_logger
from bitkeys.wallet.cache import HD_KEY_CACHE
from bitkeys.wallet.path import derive_from_path
from bitkeys.wallet.serialization import decode_serialized, encode_fields, get_serialized_error, \
    is_valid_serialized
from bitkeys.wallet.xpub import ExtendedPublicKey

__all__ = ["ExtendedPrivateKey"]

logger = get_logger(__name__)

HARDENED_OFFSET = XKEYS.HARDENED_OFFSET
SEED_KEY = XKEYS.SEED_KEY

# camelCase keys accepted from other wallets' JSON
FIELD_ALIASES = {
    "parentFingerPrint": "parent_fingerprint",
    "parentFingerprint": "parent_fingerprint",
    "childIndex": "child_index",
    "chainCode": "chain_code",
    "privateKey": "private_key",
}


class ExtendedPrivateKey:
    """
    A BIP32 extended private key
    """
    __slots__ = ('network', 'version', 'depth', 'parent_fingerprint', 'child_index', 'chain_code', 'private_key',
                 'checksum', 'xprivkey', 'public_key', 'fingerprint', '_hd_public_key')

    def __init__(self,
                 version: bytes,
                 depth: bytes,
                 parent_fingerprint: bytes,
                 child_index: bytes,
                 chain_code: bytes,
                 private_key: bytes,
                 checksum: Optional[bytes] = None,
                 xprivkey: Optional[str] = None,
                 ):
        """
        Builds the key from its serialized fields.

        Args:
            version: 4 version bytes (selects the network)
            depth: 1 byte
            parent_fingerprint: 4 bytes
            child_index: 4 bytes, big-endian
            chain_code: 32 bytes
            private_key: 32 bytes, big-endian scalar in (0, N)
            checksum: optional 4 bytes; verified against the computed checksum when given
            xprivkey: optional pre-validated serialized text, reused instead of re-encoding
        """
        computed_checksum, computed_text = encode_fields({
            "version": version,
            "depth": depth,
            "parent_fingerprint": parent_fingerprint,
            "child_index": child_index,
            "chain_code": chain_code,
            "private_key": private_key,
            "checksum": checksum,
        })

        network = get_network(int.from_bytes(version, "big"), key="xprivkey")
        if network is None:
            raise InvalidNetwork(version.hex(), context=version)

        scalar = int.from_bytes(private_key, "big")
        if not 0 < scalar < SECP256K1.order:
            raise InvalidArgument("Private key must be greater than 0 and less than the curve order")

        public_key = PubKey(scalar).compressed()

        _set = object.__setattr__
        _set(self, "network", network)
        _set(self, "version", version)
        _set(self, "depth", depth[0])
        _set(self, "parent_fingerprint", parent_fingerprint)
        _set(self, "child_index", int.from_bytes(child_index, "big"))
        _set(self, "chain_code", chain_code)
        _set(self, "private_key", private_key)
        _set(self, "checksum", computed_checksum)
        _set(self, "xprivkey", xprivkey or computed_text)
        _set(self, "public_key", public_key)
        _set(self, "fingerprint", hash160(public_key)[:XKEYS.FINGERPRINT_SIZE])
        _set(self, "_hd_public_key", None)

    # --- OVERRIDES --- #
    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other) -> bool:
        """
        Two ExtendedPrivateKey objects are equal if and only if their serialized forms are equal
        """
        if not isinstance(other, ExtendedPrivateKey):
            return False
        return self.xprivkey == other.xprivkey

    def __hash__(self) -> int:
        return hash(self.xprivkey)

    def __str__(self):
        return self.xprivkey

    def __repr__(self):
        return f"<ExtendedPrivateKey: {self.hd_public_key.xpubkey}, network: {self.network.name}>"

    # --- CONSTRUCTION --- #
    @classmethod
    def from_seed(cls, entropy: bytes | str, network=None) -> "ExtendedPrivateKey":
        """
        Generate a master private key from a seed, as described in BIP32
        """
        if isinstance(entropy, str):
            if not is_hex(entropy):
                raise InvalidEntropyArgument(context=entropy)
            entropy = bytes.fromhex(entropy)
        if isinstance(entropy, bytearray):
            entropy = bytes(entropy)
        if not isinstance(entropy, bytes):
            raise InvalidEntropyArgument(context=entropy)

        if len(entropy) < XKEYS.MIN_ENTROPY:
            raise NotEnoughEntropy(context=entropy)
        if len(entropy) > XKEYS.MAX_ENTROPY:
            raise TooMuchEntropy(context=entropy)

        network = _resolve_network(network)

        # 1. Run the HMAC-512
        seed_hash = hmac_sha512(key=SEED_KEY, message=entropy)

        # 2. Private key and chain code; remaining fields are zero for the master key
        return cls(
            version=network.xprv_version,
            depth=b'\x00',
            parent_fingerprint=b'\x00' * XKEYS.FINGERPRINT_SIZE,
            child_index=b'\x00' * XKEYS.CHILD_INDEX_SIZE,
            chain_code=seed_hash[32:],
            private_key=seed_hash[:32],
        )

    @classmethod
    def from_random(cls, network=None) -> "ExtendedPrivateKey":
        return cls.from_seed(secrets.token_bytes(XKEYS.RANDOM_ENTROPY), network)

    @classmethod
    def from_serialized(cls, data: str | bytes, network=None) -> "ExtendedPrivateKey":
        """
        Decodes a Base58Check xprv. If network is given the key must belong to it.
        """
        error = get_serialized_error(data, network)
        if error is not None:
            raise error
        return cls(**decode_serialized(data))

    @classmethod
    def from_json(cls, data: str | bytes) -> "ExtendedPrivateKey":
        obj = parse_json_object(data)
        if obj is None:
            raise InvalidArgument("Expected the JSON text of an object", context=data)
        return cls.from_object(obj)

    @classmethod
    def from_object(cls, arg: Mapping) -> "ExtendedPrivateKey":
        """
        Builds from a field bag. Numeric fields may be ints, hex strings or bytes; chain code and private key
        may be hex strings or bytes.
        """
        if not isinstance(arg, Mapping):
            raise InvalidArgument(f"Expected a mapping, got {type(arg).__name__}", context=arg)
        fields = {FIELD_ALIASES.get(k, k): v for k, v in arg.items()}

        if fields.get("network") is not None:
            version = _resolve_network(fields["network"]).xprv_version
        elif fields.get("version") is not None:
            version = to_fixed_bytes(fields["version"], XKEYS.VERSION_SIZE, "version")
        else:
            raise InvalidArgument("Missing field: network", context=arg)

        sizes = {
            "depth": XKEYS.DEPTH_SIZE,
            "parent_fingerprint": XKEYS.FINGERPRINT_SIZE,
            "child_index": XKEYS.CHILD_INDEX_SIZE,
            "chain_code": XKEYS.CHAIN_CODE_SIZE,
            "private_key": XKEYS.PRIVATE_KEY_SIZE,
        }
        buffers = {}
        for name, size in sizes.items():
            if fields.get(name) is None:
                raise InvalidArgument(f"Missing field: {name}", context=arg)
            buffers[name] = to_fixed_bytes(fields[name], size, name)

        checksum = fields.get("checksum")
        if checksum is not None and checksum not in ("", b""):
            buffers["checksum"] = to_fixed_bytes(checksum, XKEYS.CHECKSUM_SIZE, "checksum")

        return cls(version=version, **buffers)

    @classmethod
    def from_existing(cls, key: "ExtendedPrivateKey") -> "ExtendedPrivateKey":
        """
        Returns the given key itself. Keys are immutable, so no copy is made
        """
        if not isinstance(key, cls):
            raise InvalidArgument(f"Expected an {cls.__name__}, got {type(key).__name__}", context=key)
        return key

    # --- VALIDATION --- #
    is_valid_serialized = staticmethod(is_valid_serialized)
    get_serialized_error = staticmethod(get_serialized_error)

    # --- PROPERTIES --- #
    @property
    def hd_public_key(self) -> ExtendedPublicKey:
        if self._hd_public_key is None:
            object.__setattr__(self, "_hd_public_key", ExtendedPublicKey.from_private(self))
        return self._hd_public_key

    @property
    def xpubkey(self) -> str:
        return self.hd_public_key.xpubkey

    @property
    def is_hardened(self) -> bool:
        return self.child_index >= HARDENED_OFFSET

    @property
    def scalar(self) -> int:
        return int.from_bytes(self.private_key, "big")

    # --- DERIVATION --- #
    def derive(self, arg: int | str, hardened: bool = False) -> "ExtendedPrivateKey":
        """
        Get a derived child based on an index or a path string.

        A string is parsed as the full derivation path: "m" returns this key, "m/0/1/40/2'/1000" derives each
        step in turn, where ' (or h) marks a hardened step. An integer derives that child directly, hardened
        when the flag is set or the index is at least 2^31.

            parent.derive(0).derive(1).derive(2, True) == parent.derive("m/0/1/2'")
        """
        if isinstance(arg, int) and not isinstance(arg, bool):
            return self.derive_child(arg, hardened)
        if isinstance(arg, str):
            return self.derive_path(arg)
        raise InvalidDerivationArgument(arg, context=arg)

    def derive_path(self, path: str) -> "ExtendedPrivateKey":
        return derive_from_path(self, path)

    def derive_child(self, index: int, hardened: bool = False) -> "ExtendedPrivateKey":
        """
        Derive the child at the given index
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= XKEYS.MAX_INDEX:
            raise InvalidDerivationArgument(index, context=index)

        # --- Normalize the hardened index --- #
        if index >= HARDENED_OFFSET:
            hardened = True
        elif hardened:
            index += HARDENED_OFFSET
        hardened = bool(hardened)

        cached = HD_KEY_CACHE.get(self.xprivkey, index, hardened)
        if cached is not None:
            logger.debug("Cache hit for child %d of %s", index, self.fingerprint.hex())
            return cached

        if self.depth >= XKEYS.MAX_DEPTH:
            raise InvalidDerivationArgument(f"cannot derive beyond depth {XKEYS.MAX_DEPTH}", context=index)

        derived = self._compute_child(index, hardened)
        return HD_KEY_CACHE.set(self.xprivkey, index, hardened, derived)

    def _compute_child(self, index: int, hardened: bool) -> "ExtendedPrivateKey":
        parent_scalar = self.scalar
        limit = XKEYS.MAX_INDEX if hardened else HARDENED_OFFSET - 1

        while True:
            # --- Prepare data for HMAC --- #
            index_bytes = index.to_bytes(XKEYS.CHILD_INDEX_SIZE, "big")
            if hardened:
                data = b'\x00' + self.private_key + index_bytes
            else:
                data = self.public_key + index_bytes

            # --- HMAC SHA512 --- #
            key_hash = hmac_sha512(key=self.chain_code, message=data)
            tweak = int.from_bytes(key_hash[:32], "big")
            child_scalar = (tweak + parent_scalar) % SECP256K1.order

            if tweak < SECP256K1.order and child_scalar != 0:
                break

            # BIP32: an invalid child is skipped in favour of the next index
            logger.warning("Child %d of %s is invalid, proceeding with the next index", index,
                           self.fingerprint.hex())
            if index >= limit:
                raise InvalidDerivationArgument(f"no valid child at or after index {index}", context=index)
            index += 1

        logger.debug("Derived child %d at depth %d from %s", index, self.depth + 1, self.fingerprint.hex())
        return ExtendedPrivateKey(
            version=self.version,
            depth=(self.depth + 1).to_bytes(XKEYS.DEPTH_SIZE, "big"),
            parent_fingerprint=self.fingerprint,
            child_index=index_bytes,
            chain_code=key_hash[32:],
            private_key=child_scalar.to_bytes(XKEYS.PRIVATE_KEY_SIZE, "big"),
        )

    # --- DISPLAY --- #
    def to_string(self) -> str:
        return self.xprivkey

    def to_object(self) -> dict:
        return {
            "network": self.network.name,
            "depth": self.depth,
            "fingerprint": int.from_bytes(self.fingerprint, "big"),
            "parent_fingerprint": int.from_bytes(self.parent_fingerprint, "big"),
            "child_index": self.child_index,
            "chain_code": self.chain_code.hex(),
            "private_key": self.private_key.hex(),
            "checksum": int.from_bytes(self.checksum, "big"),
            "xprivkey": self.xprivkey,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_object())


def _resolve_network(network_arg) -> Network:
    if network_arg is None:
        return DEFAULT_NETWORK
    network = get_network(network_arg, key="xprivkey")
    if network is None:
        raise InvalidNetworkArgument(network_arg, context=network_arg)
    return network
