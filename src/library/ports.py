"""Narrow interfaces to the collaborators around the core.

The resolver depends on ``RevisionStore`` and ``ProgramStore`` only. The
remaining ports describe what scanning, closure computation and phase
promotion look like from the core's side; none are implemented here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from .models import Category, Program, Revision, RevisionRef, ScanRequest
from .phase import Phase
from .query import Find
from .revisions import Revisions


class RevisionStore(ABC):
    """Query access to stored revisions."""

    @abstractmethod
    def find_revision(self) -> Find[Revision]:
        """Start a new revision query."""

    @abstractmethod
    def get_revision(self, sha: bytes) -> Optional[Revision]:
        """Fetch a revision by content id, or None."""


class ProgramStore(ABC):
    """Query access to stored programs."""

    @abstractmethod
    def find_program(self) -> Find[Program]:
        """Start a new program query."""

    @abstractmethod
    def get_program(self, group_id: str, artifact_id: str) -> Optional[Program]:
        """Fetch a program by identity, or None."""


class CategoryStore(ABC):
    """Lookup of program categories."""

    @abstractmethod
    def find_category(self) -> Find[Category]:
        """Start a new category query."""

    @abstractmethod
    def get_category(self, name: str) -> Optional[Category]:
        """Fetch a category by name, or None."""


class RevisionSetStore(ABC):
    """Persistence for content-addressed revision sets."""

    @abstractmethod
    def create_revisions(self, revisions: Revisions) -> Revisions:
        """Store a set under its id; storing an existing id is a no-op."""

    @abstractmethod
    def get_revisions(self, set_id: bytes) -> Optional[Revisions]:
        """Fetch a set by id, or None."""


class PhaseStore(ABC):
    """Phase transitions.

    Implementations must make ``set_phase`` atomic and serialized per
    program identity, so two concurrent promotions to MASTER within one
    program cannot both succeed.
    """

    @abstractmethod
    def set_phase(self, revision_id: bytes, phase: Phase) -> None:
        """Move a revision to ``phase``."""


class ClosureProvider(ABC):
    """Transitive dependency closure of a revision."""

    @abstractmethod
    def get_closure(self, revision_id: bytes, optionals: bool = False) -> Iterable[RevisionRef]:
        """Revisions on the collapsed classpath rooted at ``revision_id``."""


class ScanQueue(ABC):
    """Deferred fetching and scanning of artifacts."""

    @abstractmethod
    def queue_scan(self, request: ScanRequest) -> None:
        """Queue ``request`` for scanning."""
