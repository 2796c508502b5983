"""Coordinate resolution and content identity for artifact revisions.

This package parses coordinate text into structured coordinates, applies the
phase visibility policy, picks revisions out of a repository through an
abstract query contract, and computes content ids for revision sets.
"""

from .coordinate import Coordinate, Group
from .errors import CoordinateError, InvalidIdentifierError, LibraryError, RecordValidationError
from .models import Capability, Category, Program, Requirement, Revision, RevisionRef, apply_pom
from .phase import Phase, Strategy
from .resolver import CoordinateResolver
from .revisions import Revisions

__all__ = [
    "Coordinate",
    "Group",
    "CoordinateError",
    "InvalidIdentifierError",
    "LibraryError",
    "RecordValidationError",
    "Capability",
    "Category",
    "Program",
    "Requirement",
    "Revision",
    "RevisionRef",
    "apply_pom",
    "Phase",
    "Strategy",
    "CoordinateResolver",
    "Revisions",
]
