"""
All classes and methods which have to do with BIP32 extended keys
"""
# wallet/__init__.py
from bitkeys.wallet.builder import *
from bitkeys.wallet.cache import *
from bitkeys.wallet.derivation import *
from bitkeys.wallet.path import *
from bitkeys.wallet.serialization import *
from bitkeys.wallet.xprv import *
from bitkeys.wallet.xpub import *
