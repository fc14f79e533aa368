"""
Testing the Point and EllipticCurve classes and the PubKey encoding
"""
from secrets import randbelow

import pytest

from bitkeys.core import InvalidArgument
from bitkeys.cryptography import SECP256K1, Point, PubKey

SMALL_CURVE_POINTS = [(2, 2), (2, 9), (3, 1), (3, 10), (4, 4), (4, 7), (5, 0), (6, 5), (6, 6), (7, 3), (7, 8)]


def test_point_at_infinity(curve):
    """
    The point at infinity is Point() = (None, None); a point with a single None coordinate is invalid
    """
    assert Point() == Point(x=None, y=None), "Point at infinity construction mismatch."
    assert not Point(), "Point at infinity should be falsy"
    assert curve.is_point_on_curve(Point()), "Point at infinity not on curve error"

    with pytest.raises(ValueError):
        Point(x=3, y=None)
    with pytest.raises(ValueError):
        Point(x=None, y=3)


def test_small_curve_points(curve):
    """
    We use the known curve y^2 = x^3 + 7 (mod 11), of order 12
    """
    for pt in SMALL_CURVE_POINTS:
        assert curve.is_point_on_curve(Point(*pt)), f"Known point {pt} not on curve"
    assert not curve.is_point_on_curve(Point(2, 3)), "Point (2, 3) should not be on curve"

    # (2,2) + (2,9) = point at infinity
    assert not curve.add_points(Point(2, 2), Point(2, 9)), "Inverse points should sum to infinity"

    # (5,0) is its own inverse
    assert not curve.double_point(Point(5, 0))


def test_small_curve_generator_multiples(curve):
    """
    Multiplying the generator by k agrees with adding the generator to itself k times
    """
    running = Point()
    for k in range(1, 25):
        running = curve.add_points(running, curve.generator)
        assert curve.multiply_generator(k) == running, f"Generator multiple mismatch for k={k}"
        assert curve.is_point_on_curve(running)
    assert not curve.multiply_generator(12), "12G should be the point at infinity"


def test_small_curve_find_y(curve):
    assert curve.find_y_from_x(2) == 2
    assert curve.find_y_from_x(4) == 4
    assert not curve.is_x_on_curve(0)
    with pytest.raises(ValueError):
        curve.find_y_from_x(0)


def test_secp256k1_generator():
    """
    1*G is the generator and (N-1)*G is its negation
    """
    generator = SECP256K1.generator
    assert SECP256K1.multiply_generator(1) == generator
    assert SECP256K1.is_point_on_curve(generator)

    negated = SECP256K1.multiply_generator(SECP256K1.order - 1)
    assert negated == Point(generator.x, SECP256K1.p - generator.y)
    assert not SECP256K1.add_points(generator, negated)


def test_secp256k1_scalar_addition():
    """
    aG + bG == (a+b)G for random scalars
    """
    a = randbelow(SECP256K1.order - 1) + 1
    b = randbelow(SECP256K1.order - 1) + 1
    lhs = SECP256K1.add_points(SECP256K1.multiply_generator(a), SECP256K1.multiply_generator(b))
    assert lhs == SECP256K1.multiply_generator(a + b)


def test_pubkey_compressed_recovery():
    """
    A random public key is recovered from its compressed encoding
    """
    pubkey = PubKey(randbelow(SECP256K1.order - 1) + 1)
    compressed = pubkey.compressed()

    assert len(compressed) == 33
    assert compressed[0] == (0x03 if pubkey.y % 2 else 0x02)
    assert PubKey.from_compressed(compressed) == pubkey, "Failed to recover pubkey from compressed encoding"


def test_pubkey_known_value():
    """
    The public key of 1 is the generator, with even y
    """
    assert PubKey(1).compressed().hex() == \
           "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"


def test_pubkey_invalid():
    with pytest.raises(InvalidArgument):
        PubKey(0)
    with pytest.raises(InvalidArgument):
        PubKey(SECP256K1.order)
    with pytest.raises(InvalidArgument):
        PubKey.from_compressed(b'\x04' + bytes(32))
    with pytest.raises(InvalidArgument):
        PubKey.from_compressed(b'\x02' + bytes(31))
