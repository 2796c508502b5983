"""Coordinate grammar, parser and classifier.

A coordinate designates a program, or a range of its revisions, by text::

    coordinate ::= group [ ':' artifact [ ':' classifier? ] ] [ '@' version? modifier? ]
    group      ::= name
    artifact   ::= hex-run | name
    classifier ::= name
    version    ::= baseline ( '.' qualifier )?
    baseline   ::= digits ( '.' digits ( '.' digits )? )?
    modifier   ::= '=' | '*' | '~' | '!'

Examples::

    org.foo:bar:sources@1.2.3=     maven artifact, master only
    org.foo:bar@1.2*               staged or released 1.2.0
    bar                            simple name, group inferred
    3e4f...(40 hex digits)         content addressed by SHA-1

A literal ``__`` is read as ``:`` so coordinates survive in file names.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

from common.logging_utils import extra_context, is_debug_enabled

from . import patterns
from .errors import CoordinateError, InvalidIdentifierError
from .phase import Phase, is_exact, visible_phases

logger = logging.getLogger(__name__)

SHA_GROUP = "sha"
OSGI_GROUP = "osgi"
SIMPLE_GROUP = ""
WILDCARD_VERSION = "@*"
SHA_VERSION = "0.0.0"

ESCAPED_SEPARATOR = "__"

_ARTIFACT = patterns.HEX + "|" + patterns.COORDINATE_NAME
_GROUP = patterns.COORDINATE_NAME
_CLASSIFIER = "(?:" + patterns.COORDINATE_NAME + ")"
_BASELINE = r"[0-9]+(?:\.[0-9]+(?:\.[0-9]+)?)?"
_QUALIFIER = r"[-A-Za-z0-9_.]*"
_VERSION_TEXT = r"(" + _BASELINE + r")(\." + _QUALIFIER + r")?"
_VERSION = r"(?:@(" + _VERSION_TEXT + r")?([*=~!])?)?"

COORDINATE = (
    "(" + _GROUP + ")(?::(" + _ARTIFACT + ")(?::(" + _CLASSIFIER + ")?)?)?" + _VERSION
)
COORDINATE_P = re.compile(COORDINATE, re.IGNORECASE)
COORDINATE_VERSION_P = re.compile(_VERSION_TEXT, re.IGNORECASE)

# Readable form of the grammar, used in error messages
COORDINATE_SYNTAX = "group[:artifact[:classifier]][@[version][modifier]]"


class Group(Enum):
    """How the group id of a coordinate is interpreted."""
    SIMPLE = "simple"
    OSGI = "osgi"
    SHA = "sha"
    MAVEN = "maven"


def _classify_group(group_id: str) -> Group:
    if group_id == SHA_GROUP:
        return Group.SHA
    if group_id == OSGI_GROUP:
        return Group.OSGI
    if group_id == SIMPLE_GROUP:
        return Group.SIMPLE
    return Group.MAVEN


def _normalize_baseline(baseline: str) -> str:
    """Pad a 1-3 segment baseline to ``major.minor.patch``."""
    numbers = [0, 0, 0]
    for index, part in enumerate(baseline.split(".")[:3]):
        numbers[index] = int(part)
    return "%d.%d.%d" % tuple(numbers)


def _unescape(text: str) -> str:
    return text.replace(ESCAPED_SEPARATOR, ":")


@dataclass(frozen=True, eq=False)
class Coordinate:
    """Parsed, immutable coordinate.

    Equality and hashing follow ``original_text`` only; ``str()`` returns it
    verbatim rather than re-synthesizing text from the parsed fields.
    """
    group: Group
    group_id: str
    artifact_id: str
    classifier: Optional[str]
    version: Optional[str]
    baseline: Optional[str]
    qualifier: Optional[str]
    exact: bool
    phases: FrozenSet[Phase]
    original_text: str

    @classmethod
    def parse(cls, text: str) -> "Coordinate":
        """Parse coordinate text.

        Raises:
            CoordinateError: when the text does not match the grammar.
            InvalidIdentifierError: for a SHA group whose artifact id is not
                a 40 digit hex string.
        """
        if text is None:
            raise CoordinateError("None does not match coordinate pattern: " + COORDINATE_SYNTAX)
        rewritten = _unescape(text)
        match = COORDINATE_P.fullmatch(rewritten)
        if match is None:
            raise CoordinateError(
                f"{text!r} does not match coordinate pattern: {COORDINATE_SYNTAX}"
            )

        group_id = match.group(1)
        artifact_id = match.group(2)
        classifier = match.group(3)
        version = match.group(4)
        baseline = match.group(5)
        qualifier = match.group(6)
        modifier = match.group(7)

        # A lone token is an artifact; the group is inferred from its shape
        if artifact_id is None and classifier is None:
            artifact_id = group_id
            if patterns.full_match(patterns.SHA_TOKEN_P, group_id):
                group_id = SHA_GROUP
                version = SHA_VERSION
                baseline = SHA_VERSION
            else:
                group_id = SIMPLE_GROUP
            if is_debug_enabled(logger):
                logger.debug(
                    "Single token coordinate",
                    extra=extra_context(
                        event="decision",
                        component="coordinate",
                        action="infer_group",
                        outcome="sha" if group_id == SHA_GROUP else "simple",
                    ),
                )

        group = _classify_group(group_id)
        if group is Group.SHA and not patterns.full_match(patterns.SHA_1_P, artifact_id):
            raise InvalidIdentifierError(f"Not a valid SHA-1 {artifact_id}")

        if qualifier:
            qualifier = qualifier[1:] if qualifier.startswith(".") else qualifier
        qualifier = qualifier or None

        return cls(
            group=group,
            group_id=group_id,
            artifact_id=artifact_id,
            classifier=classifier or None,
            version=version,
            baseline=_normalize_baseline(baseline) if version is not None else None,
            qualifier=qualifier,
            exact=is_exact(modifier),
            phases=visible_phases(modifier),
            original_text=match.group(0),
        )

    @staticmethod
    def is_valid(text: str) -> bool:
        """True when ``text`` matches the grammar (SHA shape is not checked)."""
        if text is None:
            return False
        return COORDINATE_P.fullmatch(_unescape(text)) is not None

    @staticmethod
    def construct(group_id: Optional[str], artifact_id: str, classifier: Optional[str] = None,
                  version: Optional[str] = None, exact: bool = False,
                  staging: bool = False) -> str:
        """Build coordinate text for a program or revision.

        Produces ``group:artifact[:classifier][@[version][=|*]]``. The group
        prefix is left out for the simple (empty) group so the text stays
        parseable as a single-token coordinate.

        Raises:
            CoordinateError: when ``version`` is not ``baseline[.qualifier]``,
                e.g. a Maven ``1.0-SNAPSHOT``.
        """
        if version is not None and not patterns.full_match(COORDINATE_VERSION_P, version):
            raise CoordinateError(f"Not a coordinate version: {version!r}")
        parts = [group_id + ":" + artifact_id if group_id else artifact_id]
        if classifier:
            parts.append(":" + classifier)
        if version is None and staging and not exact:
            parts.append(WILDCARD_VERSION)
        elif version is not None or exact or staging:
            parts.append("@")
            if version is not None:
                parts.append(version)
            if exact:
                parts.append("=")
            elif staging:
                parts.append("*")
        return "".join(parts)

    @classmethod
    def of(cls, group_id: str, artifact_id: str, classifier: Optional[str] = None,
           version: Optional[str] = None) -> "Coordinate":
        """Coordinate for a program, or for one exact version of it."""
        exact = version is not None
        return cls.parse(cls.construct(group_id, artifact_id, classifier, version, exact, False))

    @classmethod
    def from_revision(cls, revision) -> "Coordinate":
        return cls.parse(cls.construct(revision.group_id, revision.artifact_id,
                                       revision.classifier, revision.version, True, True))

    @classmethod
    def from_revision_ref(cls, ref) -> "Coordinate":
        return cls.parse(cls.construct(ref.group_id, ref.artifact_id,
                                       ref.classifier, ref.version, True, False))

    def is_sha(self) -> bool:
        return self.group is Group.SHA

    def get_sha(self) -> Optional[bytes]:
        """Artifact id decoded from hex; None unless this is a SHA coordinate."""
        if not self.is_sha():
            return None
        return bytes.fromhex(self.artifact_id)

    def is_visible(self, phase: Phase) -> bool:
        return phase in self.phases

    def is_exact(self) -> bool:
        return self.exact

    def has_classifier(self) -> bool:
        return self.classifier is not None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self.original_text == other.original_text

    def __hash__(self) -> int:
        return hash(self.original_text)

    def __str__(self) -> str:
        return self.original_text
