"""
Derivation path parsing, e.g. "m/44'/0'/0'/0/1"
"""
import re

from bitkeys.core import XKEYS, InvalidDerivationArgument, InvalidPath

__all__ = ["ROOT_ALIASES", "derive_from_path", "parse_path"]

ROOT_ALIASES = XKEYS.ROOT_ALIASES

_SEGMENT = re.compile(r"(0|[1-9][0-9]*)([" + re.escape("".join(XKEYS.HARDENED_MARKERS)) + r"]?)")


def parse_path(path: str) -> list[tuple[int, bool]]:
    """
    Returns the (index, hardened) steps of the path. Indices are returned as written; hardened steps are offset
    later by the derivation itself.
    """
    if not isinstance(path, str):
        raise InvalidDerivationArgument(path, context=path)

    if path in ROOT_ALIASES:
        return []

    segments = path.split("/")
    if segments[0] not in ROOT_ALIASES:
        raise InvalidPath(path, context=path)

    steps = []
    for segment in segments[1:]:
        match = _SEGMENT.fullmatch(segment)
        if match is None:
            raise InvalidPath(path, context=segment)

        index = int(match.group(1))
        if index > XKEYS.MAX_INDEX:
            raise InvalidPath(path, context=segment)

        # Hardened iff the segment is not the plain decimal rendering of its index
        steps.append((index, segment != str(index)))
    return steps


def derive_from_path(root, path: str):
    """
    Folds derive_child over the path steps, starting from root. A bare root alias returns root itself.
    """
    result = root
    for index, hardened in parse_path(path):
        result = result.derive_child(index, hardened)
    return result
