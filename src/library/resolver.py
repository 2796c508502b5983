"""Resolve coordinates to revisions.

The resolver breaks a coordinate into group, artifact and classifier,
queries the revision store, keeps what the coordinate's phases allow and
what its version admits, and orders the rest by version. Which end of that
order wins depends on the ``Strategy``.

SHA coordinates bypass all of this and look the revision up by id. A pinned
SHA names bytes rather than a release channel, so its phase is not checked,
except that a withdrawn revision is only returned when the coordinate makes
WITHDRAWN visible.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple, Union

from packaging import version as pkg_version

from common.logging_utils import Timer, extra_context, is_debug_enabled

from .coordinate import Coordinate, Group
from .models import Program, Revision
from .patterns import is_master_qualifier
from .phase import Phase, Strategy
from .ports import ClosureProvider, ProgramStore, RevisionSetStore, RevisionStore
from .revisions import Revisions

logger = logging.getLogger(__name__)

CoordinateLike = Union[str, Coordinate]


def _as_coordinate(coordinate: CoordinateLike) -> Coordinate:
    if isinstance(coordinate, Coordinate):
        return coordinate
    return Coordinate.parse(coordinate)


def _parse_baseline(baseline: Optional[str]) -> pkg_version.Version:
    """Parse a baseline for ordering; missing or odd baselines sort lowest."""
    try:
        return pkg_version.Version(baseline or "0.0.0")
    except pkg_version.InvalidVersion:
        return pkg_version.Version("0.0.0")


def revision_order_key(revision: Revision) -> Tuple:
    """Ascending order: baseline, then master qualifiers, qualifier, creation."""
    return (
        _parse_baseline(revision.baseline),
        is_master_qualifier(revision.qualifier),
        revision.qualifier or "",
        revision.created,
    )


class CoordinateResolver:
    """Picks revisions for coordinates out of a revision store."""

    def __init__(self, revisions: RevisionStore, programs: Optional[ProgramStore] = None,
                 strategy: Strategy = Strategy.HIGHEST, by_value: bool = False):
        """Initialize the resolver.

        Args:
            revisions: Store queried for candidate revisions.
            programs: Optional store used by ``program()``.
            strategy: How to choose among several matching revisions.
            by_value: Deduplicate revision set members by value rather than
                by identity.
        """
        self.revisions = revisions
        self.programs = programs
        self.strategy = strategy
        self.by_value = by_value

    @classmethod
    def from_settings(cls, settings, revisions: RevisionStore,
                      programs: Optional[ProgramStore] = None) -> "CoordinateResolver":
        """Build a resolver from loaded ``common.config.Settings``."""
        return cls(revisions, programs, strategy=settings.strategy,
                   by_value=settings.dedup_by_value)

    def resolve(self, coordinate: CoordinateLike) -> Optional[Revision]:
        """Return the best revision for ``coordinate`` or None.

        Raises:
            CoordinateError: when ``coordinate`` is malformed text.
        """
        coord = _as_coordinate(coordinate)
        if coord.is_sha():
            return self._resolve_sha(coord)

        with Timer() as timer:
            candidates = self.candidates(coord)
        chosen = candidates[0] if candidates else None
        if is_debug_enabled(logger):
            logger.debug(
                "Resolved coordinate",
                extra=extra_context(
                    event="decision",
                    component="resolver",
                    action="resolve",
                    coordinate=str(coord),
                    strategy=self.strategy.name,
                    outcome="found" if chosen else "absent",
                    count=len(candidates),
                    duration_ms=timer.duration_ms(),
                ),
            )
        return chosen

    def candidates(self, coordinate: CoordinateLike) -> List[Revision]:
        """All revisions admitted by ``coordinate``, best first."""
        coord = _as_coordinate(coordinate)
        if coord.is_sha():
            found = self._resolve_sha(coord)
            return [found] if found is not None else []

        query = (
            self.revisions.find_revision()
            .where("group_id", coord.group_id)
            .where("artifact_id", coord.artifact_id)
            .where("classifier", coord.classifier)
            .where("phase", *sorted(coord.phases, key=lambda p: p.value))
        )
        matches = [r for r in query if coord.is_visible(r.phase) and self._admits(coord, r)]
        strategy = Strategy.EQUAL if coord.is_exact() and coord.version is not None else self.strategy
        matches.sort(key=revision_order_key, reverse=strategy is not Strategy.LOWEST)
        return matches

    def program(self, coordinate: CoordinateLike) -> Optional[Program]:
        """The program named by ``coordinate``'s group and artifact, or None."""
        if self.programs is None:
            return None
        coord = _as_coordinate(coordinate)
        return self.programs.get_program(coord.group_id, coord.artifact_id)

    def programs_for(self, coordinate: CoordinateLike) -> List[Program]:
        """Programs matching ``coordinate``.

        A single-token name matches that artifact in any group. A SHA
        coordinate names the program of the revision with that id.
        """
        if self.programs is None:
            return []
        coord = _as_coordinate(coordinate)
        if coord.is_sha():
            revision = self._resolve_sha(coord)
            if revision is None:
                return []
            found = self.programs.get_program(revision.group_id, revision.artifact_id)
            return [found] if found is not None else []

        query = self.programs.find_program().where("artifact_id", coord.artifact_id)
        if coord.group is not Group.SIMPLE:
            query = query.where("group_id", coord.group_id)
        return list(query.ascending("group_id"))

    def resolve_set(self, coordinates: Iterable[CoordinateLike]) -> Optional[Revisions]:
        """Resolve every coordinate and name the result as one revision set.

        Returns None when any coordinate resolves to nothing.
        """
        resolved = []
        for coordinate in coordinates:
            revision = self.resolve(coordinate)
            if revision is None:
                logger.info("No revision for %s; revision set not formed", coordinate)
                return None
            resolved.append(revision)
        return Revisions.from_revisions(resolved, by_value=self.by_value)

    def install_set(self, coordinate: CoordinateLike, closure: ClosureProvider,
                    optionals: bool = False,
                    store: Optional[RevisionSetStore] = None) -> Optional[Revisions]:
        """Revision set of a resolved revision plus its dependency closure.

        The set is saved to ``store`` when one is given.
        """
        root = self.resolve(coordinate)
        if root is None:
            return None
        ids = [root.id]
        ids.extend(ref.revision for ref in closure.get_closure(root.id, optionals))
        revisions = Revisions.from_ids(ids, by_value=self.by_value)
        if store is not None:
            revisions = store.create_revisions(revisions)
        return revisions

    def _resolve_sha(self, coord: Coordinate) -> Optional[Revision]:
        revision = self.revisions.get_revision(coord.get_sha())
        if revision is None:
            return None
        if revision.phase is Phase.WITHDRAWN and not coord.is_visible(Phase.WITHDRAWN):
            logger.warning("Revision %s is withdrawn; not returned for %s",
                           revision.hex_id(), coord)
            return None
        return revision

    def _admits(self, coord: Coordinate, revision: Revision) -> bool:
        """Check a revision against the coordinate's version constraint."""
        if coord.version is None:
            return True
        if coord.qualifier is not None and revision.qualifier != coord.qualifier:
            return False
        if not coord.is_exact() and self.strategy is Strategy.BASELINE:
            wanted = _parse_baseline(coord.baseline)
            found = _parse_baseline(revision.baseline)
            return found.major == wanted.major and found >= wanted
        return revision.baseline == coord.baseline
