"""
Contains the core elements that are used within BitKeys

Core:
    -Provides the reference formats and settings for BIP32 keys
    -Provides the custom exceptions for extended key handling
    -Provides stream readers for deserialization
"""
# core/__init__.py
from bitkeys.core.byte_stream import *
from bitkeys.core.exceptions import *
from bitkeys.core.formats import *
