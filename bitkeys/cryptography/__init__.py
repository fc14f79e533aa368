"""
Elliptic curve cryptography and hash functions
"""
# cryptography/__init__.py
from bitkeys.cryptography.ecc import *
from bitkeys.cryptography.ecc_keys import *
from bitkeys.cryptography.hash_functions import *
