"""
Builds an ExtendedPrivateKey from any accepted input shape
"""
from collections.abc import Mapping

from bitkeys.core import UnrecognizedArgument
from bitkeys.data import parse_json_object
from bitkeys.logger import get_logger
from bitkeys.wallet.serialization import get_serialized_error
from bitkeys.wallet.xprv import ExtendedPrivateKey

__all__ = ["build"]

logger = get_logger(__name__)


def build(arg=None) -> ExtendedPrivateKey:
    """
    Dispatches to the matching ExtendedPrivateKey factory:

        None                    -> from_random
        ExtendedPrivateKey      -> the same instance
        serialized str/bytes    -> from_serialized
        JSON object str/bytes   -> from_json
        Mapping                 -> from_object

    Anything else raises UnrecognizedArgument. For text that is neither a valid xprv nor JSON, the
    serialization error is attached as the cause.
    """
    if arg is None:
        logger.debug("Building a random extended private key")
        return ExtendedPrivateKey.from_random()

    if isinstance(arg, ExtendedPrivateKey):
        return ExtendedPrivateKey.from_existing(arg)

    if isinstance(arg, (str, bytes, bytearray)):
        serialized_error = get_serialized_error(arg)
        if serialized_error is None:
            return ExtendedPrivateKey.from_serialized(arg)
        if parse_json_object(arg) is not None:
            return ExtendedPrivateKey.from_json(arg)
        raise UnrecognizedArgument(arg, context=arg) from serialized_error

    if isinstance(arg, Mapping):
        return ExtendedPrivateKey.from_object(arg)

    raise UnrecognizedArgument(arg, context=arg)
