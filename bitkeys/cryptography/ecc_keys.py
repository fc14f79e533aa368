"""
The PubKey class - a secp256k1 point with its SEC1 compressed encoding
"""
from bitkeys.core import InvalidArgument
from bitkeys.cryptography.ecc import SECP256K1, Point

__all__ = ["PubKey"]


class PubKey:
    """
    Used for serializing a public key in BitKeys
    """
    __slots__ = ("x", "y")

    def __init__(self, private_key: int | bytes):
        private_key = int.from_bytes(private_key, "big") if isinstance(private_key, bytes) else private_key
        if not 0 < private_key < SECP256K1.order:
            raise InvalidArgument("Private key scalar out of range for secp256k1")
        self.x, self.y = SECP256K1.multiply_generator(private_key)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PubKey):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    # --- CLASS METHODS --- #
    @classmethod
    def from_point(cls, point: Point):
        if not point:
            raise InvalidArgument("Cannot create a public key from the point at infinity")
        if not SECP256K1.is_point_on_curve(point):
            raise InvalidArgument("Point not on SECP256K1 curve")
        obj = object.__new__(cls)  # bypass __init__
        obj.x, obj.y = point
        return obj

    @classmethod
    def from_compressed(cls, compressed_pubkey: bytes):
        if len(compressed_pubkey) != 33:
            raise InvalidArgument("Compressed pubkey must be 33 bytes", context=compressed_pubkey)
        prefix = compressed_pubkey[0]
        if prefix not in (0x02, 0x03):
            raise InvalidArgument("Invalid prefix for compressed pubkey", context=compressed_pubkey)
        x = int.from_bytes(compressed_pubkey[1:], "big")
        if not (0 < x < SECP256K1.p) or not SECP256K1.is_x_on_curve(x):
            raise InvalidArgument("Compressed pubkey x coordinate not on curve", context=compressed_pubkey)

        y = SECP256K1.find_y_from_x(x)
        if prefix == 0x03:
            y = SECP256K1.p - y

        obj = object.__new__(cls)
        obj.x, obj.y = x, y
        return obj

    # --- METHODS --- #
    def to_point(self) -> Point:
        return Point(self.x, self.y)

    def compressed(self) -> bytes:
        prefix = b'\x03' if self.y % 2 else b'\x02'
        return prefix + self.x.to_bytes(32, "big")
