"""
Fixtures used in the tests
"""
from secrets import token_bytes

import pytest

from bitkeys.cryptography import EllipticCurve
from bitkeys.wallet import HD_KEY_CACHE, ExtendedPrivateKey
from tests.utility import VECTOR1_SEED


@pytest.fixture(autouse=True)
def clear_cache():
    """Every test starts and ends with an empty derivation cache"""
    HD_KEY_CACHE.clear()
    yield
    HD_KEY_CACHE.clear()


@pytest.fixture()
def vector1_master():
    return ExtendedPrivateKey.from_seed(VECTOR1_SEED)


@pytest.fixture()
def random_master():
    return ExtendedPrivateKey.from_seed(token_bytes(32))


@pytest.fixture()
def curve():
    """
    The curve y^2 = x^3 + 7 (mod 11), which has 12 points including the point at infinity
    """
    return EllipticCurve(a=0, b=7, p=11, order=12, generator=(2, 2))
