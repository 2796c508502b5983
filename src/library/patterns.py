"""Reusable regular expression fragments.

Fragments never contain capturing groups so they can be embedded in larger
expressions (see ``library.coordinate``) without shifting group numbers.
Compiled ``*_P`` forms are module constants built once at import time.
"""

import re
import sys


def _numeric_ranges() -> str:
    """Character class body for numerics that are not decimal digits.

    ``re`` counts these (``½``, ``²``, ``Ⅷ``) as word characters, so they are
    subtracted to leave letters only.
    """
    parts = []
    start = prev = None
    for cp in range(sys.maxunicode + 1):
        ch = chr(cp)
        if ch.isnumeric() and not ch.isdecimal():
            if prev is not None and cp == prev + 1:
                prev = cp
                continue
            if start is not None:
                parts.append((start, prev))
            start = prev = cp
    if start is not None:
        parts.append((start, prev))
    return "".join(
        rf"\U{lo:08x}" if lo == hi else rf"\U{lo:08x}-\U{hi:08x}" for lo, hi in parts
    )


# Unicode letter: a word character that is not a digit, numeric or underscore
LETTER = rf"(?:(?![{_numeric_ranges()}])[^\W\d_])"

SIMPLE_NAME = rf"(?:{LETTER}|_)(?:{LETTER}|[-0-9_])*"
QUALIFIED_NAME = rf"(?:{LETTER}|_)(?:{LETTER}|[-0-9_.])*"
HEX = r"(?:[0-9a-fA-F]{2})+"
SHA_1 = r"(?:[0-9a-fA-F]{2}){20}"
SLASHED_PATH = QUALIFIED_NAME + r"(?:/" + QUALIFIED_NAME + r")*"
NUMERIC = r"[0-9]+"

# Group/artifact/classifier tokens inside a coordinate: dotted names that may
# also start with a digit or dash (e.g. "org.foo", "2d-engine").
COORDINATE_NAME = rf"(?:{LETTER}|[-0-9_.])+"

SIMPLE_NAME_P = re.compile(SIMPLE_NAME)
QUALIFIED_NAME_P = re.compile(QUALIFIED_NAME)
HEX_P = re.compile(HEX)
SHA_1_P = re.compile(SHA_1)
SLASHED_PATH_P = re.compile(SLASHED_PATH)
NUMERIC_P = re.compile(NUMERIC)
COORDINATE_NAME_P = re.compile(COORDINATE_NAME)

# Single-token shorthand check: a bare 40 digit hex string names a SHA
SHA_TOKEN_P = re.compile(r"[a-f0-9]{40}", re.IGNORECASE)

# Qualifiers treated as a final release rather than a pre-release
MASTER_QUALIFIER_P = re.compile(r"|RELEASE|FINAL|GA|GM|GOLD", re.IGNORECASE)


def full_match(pattern: "re.Pattern[str]", text: str) -> bool:
    """Return True when ``text`` matches ``pattern`` in its entirety."""
    if text is None:
        return False
    return pattern.fullmatch(text) is not None


def is_master_qualifier(qualifier) -> bool:
    """True for an absent qualifier or one of the release spellings."""
    return full_match(MASTER_QUALIFIER_P, qualifier or "")
