"""Data records for revisions, programs and their supporting types.

Records are plain dataclasses validated once at construction. Copies between
record types (``RevisionRef.from_revision``, ``apply_pom``) are written out
field by field; nothing here copies by reflection.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError, dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Set

from . import patterns
from .coordinate import Coordinate
from .errors import RecordValidationError
from .phase import Phase


def _check_name(value: Optional[str], pattern, what: str) -> None:
    """Validate an optional name against a compiled pattern."""
    if value and not patterns.full_match(pattern, value):
        raise RecordValidationError(f"Invalid {what}: {value!r}")


def _check_id(value, what: str) -> None:
    if not isinstance(value, (bytes, bytearray)) or not value:
        raise RecordValidationError(f"{what} must be a non-empty byte string")


def _is_unset(value) -> bool:
    return value is None or (hasattr(value, "__len__") and len(value) == 0) or value == 0


# ---------------------------------------------------------------------------
# POM snapshot
# ---------------------------------------------------------------------------

@dataclass
class License:
    name: Optional[str] = None
    url: Optional[str] = None
    distribution: Optional[str] = None
    comments: Optional[str] = None


@dataclass
class Organization:
    name: Optional[str] = None
    url: Optional[str] = None


@dataclass
class SCM:
    """Source control block of a POM."""
    connection: Optional[str] = None
    developer_connection: Optional[str] = None
    tag: Optional[str] = None
    url: Optional[str] = None


@dataclass
class Contributor:
    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    organization: Optional[str] = None
    organization_url: Optional[str] = None
    roles: List[str] = field(default_factory=list)
    timezone: int = 0


@dataclass
class RepoPom:
    """The parts of a Maven POM kept with a revision."""
    model_version: Optional[str] = None
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    classifier: Optional[str] = None
    packaging: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    inception_year: int = 0
    licenses: List[License] = field(default_factory=list)
    organization: Optional[Organization] = None
    developers: List[Contributor] = field(default_factory=list)
    contributors: List[Contributor] = field(default_factory=list)
    scm: Optional[SCM] = None


# ---------------------------------------------------------------------------
# Requirements and capabilities
# ---------------------------------------------------------------------------

@dataclass
class Namespace:
    """Namespaced property map (OSGi style)."""
    ns: str
    ps: Dict[str, Any] = field(default_factory=dict)
    name: Optional[str] = None

    def __post_init__(self):
        if not self.ns:
            raise RecordValidationError("Namespace requires a non-empty ns")


@dataclass
class Requirement(Namespace):
    """Something a revision needs from its environment."""


@dataclass
class Capability(Namespace):
    """Something a revision provides to its environment."""


@dataclass
class Relocation:
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    message: Optional[str] = None


# ---------------------------------------------------------------------------
# Revision
# ---------------------------------------------------------------------------

# Fields that may be filled once and never overwritten afterwards
_WRITE_ONCE = frozenset({"id", "bsn", "baseline", "qualifier", "size", "md5", "hashes", "urls", "pom"})

# Write-once collections, held as frozensets
_FROZEN_SETS = frozenset({"hashes", "urls"})


@dataclass
class Revision:
    """One immutable, content-addressed artifact.

    ``id`` is the SHA-1 of the artifact bytes. ``phase``, ``message``,
    categories, keywords and the error/warning lists change only through the
    methods below; findings accumulate without touching the id.
    """
    id: bytes
    group_id: str = ""
    artifact_id: str = ""
    version: Optional[str] = None
    classifier: Optional[str] = None
    packaging: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    title: Optional[str] = None
    bsn: Optional[str] = None
    baseline: Optional[str] = None
    qualifier: Optional[str] = None
    phase: Phase = Phase.STAGING
    size: int = 0
    md5: Optional[bytes] = None
    hashes: FrozenSet[str] = field(default_factory=frozenset)
    urls: FrozenSet[str] = field(default_factory=frozenset)
    pom_url: Optional[str] = None
    pom: Optional[RepoPom] = None
    receipt: Optional[str] = None
    created: int = 0
    modified: int = 0
    message: Optional[str] = None
    owner: Optional[str] = None
    release_summary: Optional[str] = None
    signers: List[str] = field(default_factory=list)
    category: Set[str] = field(default_factory=set)
    keywords: Set[str] = field(default_factory=set)
    metadata: Dict[str, Any] = field(default_factory=dict)
    requirements: List[Requirement] = field(default_factory=list)
    capabilities: List[Capability] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    packages: List[str] = field(default_factory=list)
    repositories: List[str] = field(default_factory=list)
    main_class: Optional[str] = None
    doc_url: Optional[str] = None
    icon: Optional[str] = None
    readme: Optional[str] = None
    relocation: Optional[Relocation] = None
    expire: int = 0

    def __post_init__(self):
        _check_id(self.id, "Revision id")
        self.id = bytes(self.id)
        _check_name(self.group_id, patterns.COORDINATE_NAME_P, "group id")
        _check_name(self.artifact_id, patterns.COORDINATE_NAME_P, "artifact id")
        _check_name(self.classifier, patterns.COORDINATE_NAME_P, "classifier")
        _check_name(self.bsn, patterns.QUALIFIED_NAME_P, "bsn")
        if self.size < 0:
            raise RecordValidationError(f"Negative size: {self.size}")
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name, value):
        if (name in _WRITE_ONCE and getattr(self, "_sealed", False)
                and not _is_unset(getattr(self, name, None))):
            raise FrozenInstanceError(f"cannot assign to field {name!r}")
        if name in _FROZEN_SETS and value is not None:
            value = frozenset(value)
        super().__setattr__(name, value)

    @property
    def tag(self) -> Optional[str]:
        """SCM tag from the POM snapshot, if any."""
        if self.pom is not None and self.pom.scm is not None:
            return self.pom.scm.tag
        return None

    def hex_id(self) -> str:
        return self.id.hex()

    def coordinate(self) -> Coordinate:
        return Coordinate.from_revision(self)

    def set_phase(self, phase: Phase, message: Optional[str] = None, modified: Optional[int] = None) -> None:
        self.phase = phase
        if message is not None:
            self.message = message
        if modified is not None:
            self.modified = modified

    def record_error(self, error: str) -> None:
        self.errors.append(error)

    def record_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def categorize(self, *categories: str) -> None:
        self.category.update(categories)

    def add_keywords(self, *keywords: str) -> None:
        self.keywords.update(keywords)


def apply_pom(revision: Revision, pom: RepoPom) -> Revision:
    """Merge a POM snapshot into a revision.

    Only fields the revision has not set yet are taken from the POM; the
    snapshot itself is attached when the revision has none.
    """
    if not revision.group_id and pom.group_id:
        revision.group_id = pom.group_id
    if not revision.artifact_id and pom.artifact_id:
        revision.artifact_id = pom.artifact_id
    if revision.version is None:
        revision.version = pom.version
    if revision.classifier is None:
        revision.classifier = pom.classifier or None
    if revision.packaging is None:
        revision.packaging = pom.packaging
    if revision.name is None:
        revision.name = pom.name
    if revision.description is None:
        revision.description = pom.description
    if revision.pom is None:
        revision.pom = pom
    return revision


@dataclass
class RevisionRef:
    """Lightweight summary of a revision, as listed in a program."""
    revision: bytes
    urls: Set[str] = field(default_factory=set)
    md5: Optional[bytes] = None
    group_id: str = ""
    artifact_id: str = ""
    version: Optional[str] = None
    classifier: Optional[str] = None
    packaging: Optional[str] = None
    bsn: Optional[str] = None
    title: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    baseline: Optional[str] = None
    qualifier: Optional[str] = None
    tag: Optional[str] = None
    phase: Optional[Phase] = None
    release_summary: Optional[str] = None
    created: int = 0
    errors: int = 0
    size: int = 0

    def __post_init__(self):
        _check_id(self.revision, "RevisionRef revision")

    @classmethod
    def from_revision(cls, revision: Revision) -> "RevisionRef":
        return cls(
            revision=revision.id,
            urls=set(revision.urls),
            md5=revision.md5,
            group_id=revision.group_id,
            artifact_id=revision.artifact_id,
            version=revision.version,
            classifier=revision.classifier,
            packaging=revision.packaging,
            bsn=revision.bsn,
            title=revision.title,
            name=revision.name,
            description=revision.description,
            baseline=revision.baseline,
            qualifier=revision.qualifier,
            tag=revision.tag,
            phase=revision.phase,
            release_summary=revision.release_summary,
            created=revision.created,
            errors=len(revision.errors),
            size=revision.size,
        )

    def coordinate(self) -> Coordinate:
        return Coordinate.from_revision_ref(self)


# ---------------------------------------------------------------------------
# Program
# ---------------------------------------------------------------------------

@dataclass
class Wiki:
    text: Optional[str] = None
    author: Optional[str] = None
    modified: int = 0


@dataclass
class Category:
    """Named grouping that programs refer to from their ``category`` set."""
    name: str
    id: Optional[str] = None
    summary: Optional[str] = None
    wiki: Optional[Wiki] = None
    icon: Optional[str] = None

    def __post_init__(self):
        if not self.name:
            raise RecordValidationError("Category requires a name")


@dataclass
class Program:
    """All revisions sharing one group+artifact identity.

    The closure statistics (``depth`` through ``overlap``) are filled in by
    the external closure computation.
    """
    group_id: str
    artifact_id: str
    id: Optional[bytes] = None
    icon: Optional[str] = None
    wiki: Optional[Wiki] = None
    rating: List[int] = field(default_factory=lambda: [0] * 5)
    modified: int = 0
    revisions: List[RevisionRef] = field(default_factory=list)
    last: Optional[Revision] = None
    category: Set[str] = field(default_factory=set)
    keywords: Set[str] = field(default_factory=set)
    classifiers: Set[str] = field(default_factory=set)
    search: Set[str] = field(default_factory=set)
    home: Optional[str] = None
    # Number of elements on the collapsed runtime classpath
    depth: int = 0
    # Incoming links
    vote: int = 0
    # Total bytes on the collapsed classpath
    weight: float = 0.0
    inbound: Set[str] = field(default_factory=set)
    classpath: Set[str] = field(default_factory=set)
    cycles: List[str] = field(default_factory=list)
    overlap: Set[str] = field(default_factory=set)
    rank: int = 0
    depository: Optional[str] = None
    domain: Optional[str] = None

    def __post_init__(self):
        _check_name(self.group_id, patterns.COORDINATE_NAME_P, "group id")
        if not self.artifact_id:
            raise RecordValidationError("Program requires an artifact id")
        _check_name(self.artifact_id, patterns.COORDINATE_NAME_P, "artifact id")
        if len(self.rating) != 5:
            raise RecordValidationError("Program rating must have 5 buckets")

    def coordinate(self) -> Coordinate:
        return Coordinate.of(self.group_id, self.artifact_id)


@dataclass
class ScanRequest:
    """Request to fetch and scan an artifact, handed to a scan queue."""
    url: str
    unique: bool = False
    sha: Optional[bytes] = None
    repository: Optional[str] = None
    message: Optional[str] = None
    user: Optional[bytes] = None
    osgi: bool = False
    phase: Optional[Phase] = None
    nostage: bool = False
    expire: Optional[int] = None
