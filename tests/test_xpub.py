"""
Tests for the extended public key counterpart
"""
import pytest

import bitkeys.wallet.xpub as xpub_module
from bitkeys.core import InvalidArgument, InvalidB58Checksum, InvalidDerivationArgument, InvalidNetwork
from bitkeys.cryptography import hmac_sha512
from bitkeys.data import TESTNET, encode_base58check
from bitkeys.wallet import ExtendedPrivateKey, ExtendedPublicKey
from tests.utility import VECTOR1


def test_xpub_from_private(vector1_master):
    xpub = vector1_master.hd_public_key

    assert xpub.xpubkey == VECTOR1["m"][1]
    assert xpub.public_key == vector1_master.public_key
    assert xpub.fingerprint == vector1_master.fingerprint
    assert xpub.chain_code == vector1_master.chain_code
    assert vector1_master.hd_public_key is xpub, "Public counterpart should be built once"


def test_xpub_recovery(vector1_master):
    for path, (_, expected_xpub) in VECTOR1.items():
        recovered = ExtendedPublicKey.from_serialized(expected_xpub)
        assert recovered == vector1_master.derive(path).hd_public_key
        assert str(recovered) == expected_xpub


def test_public_derivation_matches_private(random_master):
    """
    Non-hardened public derivation gives the public key of the private derivation
    """
    account = random_master.derive("m/44'/0'/0'")
    by_private = account.derive("m/0/7")
    by_public = account.hd_public_key.derive("m/0/7")

    assert by_public == by_private.hd_public_key
    assert by_public.xpubkey == by_private.xpubkey
    assert account.hd_public_key.derive(3) == account.derive(3).hd_public_key


def test_public_hardened_derivation_refused(random_master):
    xpub = random_master.hd_public_key
    with pytest.raises(InvalidDerivationArgument):
        xpub.derive(0x80000000)
    with pytest.raises(InvalidDerivationArgument):
        xpub.derive("m/0'")
    with pytest.raises(InvalidDerivationArgument):
        xpub.derive(None)


def test_xpub_network(random_master):
    testnet_key = ExtendedPrivateKey.from_seed(random_master.private_key, TESTNET)
    xpub = testnet_key.hd_public_key

    assert xpub.xpubkey.startswith("tpub")
    assert ExtendedPublicKey.from_serialized(xpub.xpubkey, network="testnet") == xpub
    with pytest.raises(InvalidNetwork):
        ExtendedPublicKey.from_serialized(xpub.xpubkey, network="livenet")


def test_xpub_errors(vector1_master):
    with pytest.raises(InvalidNetwork):
        ExtendedPublicKey.from_serialized(vector1_master.xprivkey)
    with pytest.raises(InvalidArgument):
        ExtendedPublicKey.from_serialized(encode_base58check(b'\x00' * 10))
    with pytest.raises(InvalidArgument):
        ExtendedPublicKey.from_serialized(42)

    obj = vector1_master.hd_public_key
    with pytest.raises(InvalidB58Checksum):
        ExtendedPublicKey(obj.version, b'\x00', obj.parent_fingerprint, b'\x00' * 4, obj.chain_code,
                          obj.public_key, checksum=b'\x00\x00\x00\x00')


def test_xpub_object(vector1_master):
    obj = vector1_master.hd_public_key.to_object()

    assert obj["xpubkey"] == VECTOR1["m"][1]
    assert obj["depth"] == 0
    assert obj["public_key"] == vector1_master.public_key.hex()
    assert "private_key" not in obj


def test_public_invalid_child_proceeds_to_next_index(random_master, monkeypatch):
    xpub = random_master.hd_public_key
    expected = random_master.derive(8).hd_public_key
    calls = []

    def fake_hmac(key, message):
        calls.append(message)
        if len(calls) == 1:
            return b'\xff' * 32 + b'\x00' * 32
        return hmac_sha512(key, message)

    monkeypatch.setattr(xpub_module, "hmac_sha512", fake_hmac)
    child = xpub.derive(7)

    assert len(calls) == 2
    assert child.child_index == 8
    assert child == expected

    monkeypatch.setattr(xpub_module, "hmac_sha512", lambda key, message: b'\xff' * 64)
    with pytest.raises(InvalidDerivationArgument):
        xpub.derive(0x7fffffff)


def test_xpub_immutable(vector1_master):
    xpub = vector1_master.hd_public_key
    with pytest.raises(AttributeError):
        xpub.depth = 1
    with pytest.raises(AttributeError):
        del xpub.public_key
