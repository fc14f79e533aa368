"""
Tests for derivation path parsing
"""
import pytest

from bitkeys.core import InvalidDerivationArgument, InvalidPath
from bitkeys.wallet import ROOT_ALIASES, parse_path


def test_root_aliases():
    assert ROOT_ALIASES == ("m", "M", "m'", "M'")
    for alias in ROOT_ALIASES:
        assert parse_path(alias) == []


def test_parse_steps():
    assert parse_path("m/0'/1h/2H/3") == [(0, True), (1, True), (2, True), (3, False)]
    assert parse_path("M'/44'/0'/0'/0/12") == [(44, True), (0, True), (0, True), (0, False), (12, False)]
    assert parse_path("m/4294967295") == [(4294967295, False)]


@pytest.mark.parametrize("path", ["", "0/1", "n/0", "m/", "m//1", "m/a", "m/01", "m/-1", "m/1''", "m/1x",
                                  "m/ 1", "m/1\n", "m/4294967296"])
def test_invalid_paths(path):
    with pytest.raises(InvalidPath):
        parse_path(path)


def test_path_type():
    with pytest.raises(InvalidDerivationArgument):
        parse_path(44)
