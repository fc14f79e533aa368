"""
Elliptic curve arithmetic over secp256k1
"""
import json
from dataclasses import dataclass
from typing import Optional, Tuple

__all__ = ["EllipticCurve", "Point", "SECP256K1"]


@dataclass(frozen=True)
class Point:
    """Immutable affine point. The point at infinity is (None, None)"""
    x: Optional[int] = None
    y: Optional[int] = None

    def __post_init__(self):
        if (self.x is None) != (self.y is None):
            raise ValueError("Point at infinity must have both coordinates as None")

    def __bool__(self) -> bool:
        return self.x is not None and self.y is not None

    def __iter__(self):
        return iter((self.x, self.y))


class EllipticCurve:
    """
    The curve y^2 = x^3 + ax + b (mod p), with a cyclic group of the given order and generator
    """

    def __init__(self, a: int, b: int, p: int, order: int, generator: Tuple[int, int] | Point,
                 curve: Optional[str] = None):
        disc = (4 * pow(a, 3) + 27 * pow(b, 2)) % p
        if disc == 0:
            raise ValueError("Cannot use Singular curve in ECC")

        self.a = a
        self.b = b
        self.p = p
        self.order = order
        self.generator = Point(*generator) if isinstance(generator, tuple) else generator
        self.curve = curve

        # G, 2G, 4G, ... for generator multiplication
        self._generator_doublings = self._precompute_doublings()

    def __repr__(self):
        return json.dumps({
            'a': hex(self.a),
            'b': hex(self.b),
            'p': hex(self.p),
            'order': hex(self.order),
            'generator': (hex(self.generator.x), hex(self.generator.y)),
            'curve': self.curve
        })

    def _precompute_doublings(self) -> list:
        doublings = []
        current = self.generator
        for _ in range(self.order.bit_length()):
            doublings.append(current)
            current = self.double_point(current)
        return doublings

    def x_terms(self, x: int) -> int:
        """x^3 + ax + b mod p"""
        return (pow(x, 3, self.p) + self.a * x + self.b) % self.p

    def is_point_on_curve(self, point: Point) -> bool:
        if not point:
            return True
        return (point.y * point.y - self.x_terms(point.x)) % self.p == 0

    def is_x_on_curve(self, x: int) -> bool:
        """Euler's criterion on the right-hand side"""
        rhs = self.x_terms(x)
        return rhs == 0 or pow(rhs, (self.p - 1) // 2, self.p) == 1

    def find_y_from_x(self, x: int) -> int:
        """
        Returns the even y coordinate for x. Requires p = 3 (mod 4), which holds for secp256k1
        """
        if self.p % 4 != 3:
            raise ValueError("Square root shortcut requires p = 3 (mod 4)")
        if not self.is_x_on_curve(x):
            raise ValueError(f"Given x coordinate {x} is not on the curve.")

        y = pow(self.x_terms(x), (self.p + 1) // 4, self.p)
        return y if y % 2 == 0 else self.p - y

    def double_point(self, point: Point) -> Point:
        if not point or point.y == 0:
            return Point()

        x, y = point
        m = (3 * x * x + self.a) * pow(2 * y, -1, self.p) % self.p
        x3 = (m * m - 2 * x) % self.p
        y3 = (m * (x - x3) - y) % self.p
        return Point(x3, y3)

    def add_points(self, point1: Point, point2: Point) -> Point:
        if not point1:
            return point2
        if not point2:
            return point1

        x1, y1 = point1
        x2, y2 = point2

        if x1 == x2:
            return self.double_point(point1) if y1 == y2 else Point()

        m = (y2 - y1) * pow(x2 - x1, -1, self.p) % self.p
        x3 = (m * m - x1 - x2) % self.p
        y3 = (m * (x1 - x3) - y1) % self.p
        return Point(x3, y3)

    def multiply_generator(self, n: int) -> Point:
        """Double-and-add over the precomputed doublings of the generator"""
        n %= self.order
        result = Point()
        for bit, doubling in enumerate(self._generator_doublings):
            if n >> bit == 0:
                break
            if (n >> bit) & 1:
                result = self.add_points(result, doubling)
        return result


# --- SINGLETON INSTANCE --- #
SECP256K1 = EllipticCurve(
    a=0,
    b=7,
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    order=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    generator=(0x79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798,
               0x483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8),
    curve="secp256k1"
)
