"""
Shortcuts for the hash functions used by extended keys. Each function returns the bytes digest
"""
import hashlib
import hmac

from ripemd.ripemd160 import ripemd160 as _ripemd160

__all__ = ["hash160", "hash256", "hmac_sha512", "ripemd160", "sha256"]


# --- SHA --- #
def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


# --- RIPEMD --- #
def ripemd160(data: bytes) -> bytes:
    # Pure python implementation; OpenSSL 3 builds of hashlib may not ship ripemd160
    return bytes(_ripemd160(data))


# --- BTC HASH FUNCTIONS --- #
def hash256(data: bytes) -> bytes:
    """SHA256(SHA256(data))"""
    return sha256(sha256(data))


def hash160(data: bytes) -> bytes:
    """RIPEMD160(SHA256(data))"""
    return ripemd160(sha256(data))


# --- WALLET HASHES --- #
def hmac_sha512(key: bytes, message: bytes) -> bytes:
    return hmac.new(key=key, msg=message, digestmod=hashlib.sha512).digest()
