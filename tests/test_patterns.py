"""Tests for the reusable pattern fragments."""

import re

import pytest

from library import patterns


@pytest.mark.parametrize("fragment", [
    patterns.SIMPLE_NAME,
    patterns.QUALIFIED_NAME,
    patterns.HEX,
    patterns.SHA_1,
    patterns.SLASHED_PATH,
    patterns.NUMERIC,
    patterns.COORDINATE_NAME,
])
def test_fragments_do_not_capture(fragment):
    """Fragments must be embeddable without adding groups."""
    assert re.compile(fragment).groups == 0


def test_simple_name():
    assert patterns.full_match(patterns.SIMPLE_NAME_P, "foo_bar-1")
    assert patterns.full_match(patterns.SIMPLE_NAME_P, "_x")
    assert patterns.full_match(patterns.SIMPLE_NAME_P, "überlib")
    assert not patterns.full_match(patterns.SIMPLE_NAME_P, "1foo")
    assert not patterns.full_match(patterns.SIMPLE_NAME_P, "org.foo")


def test_qualified_name():
    assert patterns.full_match(patterns.QUALIFIED_NAME_P, "org.foo.bar")
    assert not patterns.full_match(patterns.QUALIFIED_NAME_P, ".org")


def test_hex_runs_are_pairs():
    assert patterns.full_match(patterns.HEX_P, "0a0B")
    assert not patterns.full_match(patterns.HEX_P, "0a0")
    assert not patterns.full_match(patterns.HEX_P, "0g")


def test_sha_1_is_exactly_40_digits():
    assert patterns.full_match(patterns.SHA_1_P, "ab" * 20)
    assert not patterns.full_match(patterns.SHA_1_P, "ab" * 19)
    assert not patterns.full_match(patterns.SHA_1_P, "ab" * 21)


def test_slashed_path():
    assert patterns.full_match(patterns.SLASHED_PATH_P, "org.foo/bar/baz")
    assert not patterns.full_match(patterns.SLASHED_PATH_P, "org.foo//bar")


def test_numeric():
    assert patterns.full_match(patterns.NUMERIC_P, "0042")
    assert not patterns.full_match(patterns.NUMERIC_P, "4a")


def test_full_match_none():
    assert patterns.full_match(patterns.NUMERIC_P, None) is False


@pytest.mark.parametrize("qualifier,expected", [
    (None, True),
    ("", True),
    ("RELEASE", True),
    ("final", True),
    ("Ga", True),
    ("GOLD", True),
    ("SNAPSHOT", False),
    ("RC1", False),
])
def test_master_qualifier(qualifier, expected):
    assert patterns.is_master_qualifier(qualifier) is expected


@pytest.mark.parametrize("text", ["½", "²", "Ⅷ", "xⅧ"])
def test_numeric_symbols_are_not_letters(text):
    """Vulgar fractions, superscripts and roman numerals are not names."""
    assert not patterns.full_match(patterns.QUALIFIED_NAME_P, text)
    assert not patterns.full_match(re.compile(patterns.LETTER + "+"), text)


def test_letters_of_other_scripts():
    assert patterns.full_match(patterns.SIMPLE_NAME_P, "библио")
    assert patterns.full_match(patterns.SIMPLE_NAME_P, "库")
