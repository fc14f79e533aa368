"""
BitKeys - BIP32 hierarchical deterministic extended keys
"""
from bitkeys.core import *
from bitkeys.data import DEFAULT_NETWORK, LIVENET, TESTNET, Network, get_network
from bitkeys.wallet import *

__version__ = "0.1.0"
