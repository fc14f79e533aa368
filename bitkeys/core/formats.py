"""
The BIP32 reference formats and library settings
"""
from typing import Final, Optional

__all__ = ["XKEYS", "CACHE", "LOGGING"]


class XKEYS:
    """
    Constants related to the extended public and private keys
    """
    SEED_KEY: Final[bytes] = b'Bitcoin seed'
    MAX_DEPTH: Final[int] = 255

    # Version bytes for each network
    MAINNET_PRIVATE: Final[bytes] = bytes.fromhex("0488ade4")
    MAINNET_PUBLIC: Final[bytes] = bytes.fromhex("0488b21e")
    TESTNET_PRIVATE: Final[bytes] = bytes.fromhex("04358394")
    TESTNET_PUBLIC: Final[bytes] = bytes.fromhex("043587cf")

    # Hardened derivation threshold
    HARDENED_OFFSET: Final[int] = 0x80000000
    MAX_INDEX: Final[int] = 0xffffffff

    # Path roots
    ROOT_ALIASES: Final[tuple] = ("m", "M", "m'", "M'")
    HARDENED_MARKERS: Final[tuple] = ("'", "h", "H")

    # Seed entropy bounds (bytes)
    MIN_ENTROPY: Final[int] = 128 // 8
    MAX_ENTROPY: Final[int] = 512 // 8
    RANDOM_ENTROPY: Final[int] = 64

    # Field sizes
    VERSION_SIZE: Final[int] = 4
    DEPTH_SIZE: Final[int] = 1
    FINGERPRINT_SIZE: Final[int] = 4
    CHILD_INDEX_SIZE: Final[int] = 4
    CHAIN_CODE_SIZE: Final[int] = 32
    PRIVATE_KEY_SIZE: Final[int] = 32
    PUBLIC_KEY_SIZE: Final[int] = 33
    CHECKSUM_SIZE: Final[int] = 4

    DATA_LENGTH: Final[int] = 78
    SERIALIZED_BYTE_SIZE: Final[int] = 82

    # Field offsets
    VERSION_START: Final[int] = 0
    VERSION_END: Final[int] = VERSION_START + VERSION_SIZE
    DEPTH_START: Final[int] = VERSION_END
    DEPTH_END: Final[int] = DEPTH_START + DEPTH_SIZE
    PARENT_FINGERPRINT_START: Final[int] = DEPTH_END
    PARENT_FINGERPRINT_END: Final[int] = PARENT_FINGERPRINT_START + FINGERPRINT_SIZE
    CHILD_INDEX_START: Final[int] = PARENT_FINGERPRINT_END
    CHILD_INDEX_END: Final[int] = CHILD_INDEX_START + CHILD_INDEX_SIZE
    CHAIN_CODE_START: Final[int] = CHILD_INDEX_END
    CHAIN_CODE_END: Final[int] = CHAIN_CODE_START + CHAIN_CODE_SIZE
    PADDING_START: Final[int] = CHAIN_CODE_END
    PRIVATE_KEY_START: Final[int] = PADDING_START + 1
    PRIVATE_KEY_END: Final[int] = PRIVATE_KEY_START + PRIVATE_KEY_SIZE
    CHECKSUM_START: Final[int] = PRIVATE_KEY_END
    CHECKSUM_END: Final[int] = CHECKSUM_START + CHECKSUM_SIZE


assert XKEYS.CHECKSUM_START == XKEYS.DATA_LENGTH
assert XKEYS.CHECKSUM_END == XKEYS.SERIALIZED_BYTE_SIZE


class CACHE:
    """
    Derivation cache settings. A MAX_SIZE of None leaves the cache unbounded.
    """
    MAX_SIZE: Final[Optional[int]] = None


class LOGGING:
    LEVEL: Final[str] = "WARNING"
    FORMAT: Final[str] = '%(asctime)s [%(name)s] [%(levelname)s]: %(message)s'
