"""
The custom exceptions used throughout BitKeys

Every validation failure is an InvalidArgument, itself an ExtendedKeyError. Each error keeps the offending
value in `context` so callers can inspect it after catching a specific kind.
"""
__all__ = ["ExtendedKeyError", "InvalidArgument", "InvalidB58Char", "InvalidB58Checksum", "InvalidLength",
           "InvalidNetwork", "InvalidNetworkArgument", "InvalidDerivationArgument", "InvalidPath",
           "InvalidEntropyArgument", "NotEnoughEntropy", "TooMuchEntropy", "UnrecognizedArgument", "ReadError",
           "ERROR_HIERARCHY"]


class ExtendedKeyError(Exception):
    """Custom exception for extended key operations"""
    pass


class InvalidArgument(ExtendedKeyError, ValueError):
    """
    Wrong input shape or value
    """

    def __init__(self, message: str = "", context=None):
        self.context = context
        super().__init__(self.describe(message))

    def describe(self, message: str) -> str:
        return f"Invalid argument: {message}"


class InvalidB58Char(InvalidArgument):
    """
    A character outside the Base58 alphabet
    """

    def __init__(self, character: str, data=None):
        self.character = character
        super().__init__(character, context=data)

    def describe(self, message: str) -> str:
        return f"Invalid Base 58 character: {message!r} in {self.context!r}"


class InvalidB58Checksum(InvalidArgument):
    def describe(self, message: str) -> str:
        return f"Invalid Base 58 checksum in {message!r}"


class InvalidLength(InvalidArgument):
    def describe(self, message: str) -> str:
        return f"Invalid length for xprivkey format: {message}"


class InvalidNetwork(InvalidArgument):
    """
    The serialized version does not belong to the expected network
    """

    def describe(self, message: str) -> str:
        return f"Unexpected version for network: got {message}"


class InvalidNetworkArgument(InvalidArgument):
    """
    Unknown network name or version
    """

    def describe(self, message: str) -> str:
        return f"Network argument must be a known network name, got {message!r}"


class InvalidDerivationArgument(InvalidArgument):
    def describe(self, message: str) -> str:
        return f"Invalid derivation argument {message!r}, expected an index and hardened flag or a path string"


class InvalidPath(InvalidArgument):
    def describe(self, message: str) -> str:
        return f"Invalid path for derivation {message!r}, must start with 'm' followed by indices"


class InvalidEntropyArgument(InvalidArgument):
    """
    Seed entropy must be bytes or a hex string
    """

    def describe(self, message: str) -> str:
        return f"Entropy must be a hex string or bytes, got {type(self.context).__name__}"


class NotEnoughEntropy(InvalidEntropyArgument):
    def describe(self, message: str) -> str:
        return f"Need at least 16 bytes of entropy, got {len(self.context)}"


class TooMuchEntropy(InvalidEntropyArgument):
    def describe(self, message: str) -> str:
        return f"More than 64 bytes of entropy is non standard, got {len(self.context)}"


class UnrecognizedArgument(InvalidArgument):
    """
    Construction input matches none of the accepted shapes
    """

    def describe(self, message: str) -> str:
        return (f"Creating an ExtendedPrivateKey requires a serialized string, bytes, a json or a mapping, "
                f"got {message!r} of type {type(self.context).__name__}")


class ReadError(InvalidLength):
    """
    For when trying to read data of length n from the stream and receiving data of length < n
    """
    pass


# Each error kind and the kind it specializes
ERROR_HIERARCHY = {
    InvalidArgument: ExtendedKeyError,
    InvalidB58Char: InvalidArgument,
    InvalidB58Checksum: InvalidArgument,
    InvalidLength: InvalidArgument,
    InvalidNetwork: InvalidArgument,
    InvalidNetworkArgument: InvalidArgument,
    InvalidDerivationArgument: InvalidArgument,
    InvalidPath: InvalidArgument,
    InvalidEntropyArgument: InvalidArgument,
    NotEnoughEntropy: InvalidEntropyArgument,
    TooMuchEntropy: InvalidEntropyArgument,
    UnrecognizedArgument: InvalidArgument,
    ReadError: InvalidLength,
}
