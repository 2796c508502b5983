"""Shared fixtures: an in-memory repository behind the query contract."""

import hashlib
from typing import Any, Callable, List, Optional

import pytest

from library.models import Program, Revision
from library.phase import Phase
from library.ports import ProgramStore, RevisionStore
from library.query import Find


class MemoryFind(Find):
    """List-backed ``Find`` used to exercise the resolver."""

    def __init__(self, records):
        self._records = list(records)
        self._filters: List[Callable[[Any], bool]] = []
        self._sort: Optional[tuple] = None
        self._skip = 0
        self._limit: Optional[int] = None

    def _eq(self, field, value):
        self._filters.append(lambda r: getattr(r, field, None) == value)
        return self

    def bsn(self, bsn):
        return self._eq("bsn", bsn)

    def baseline(self, baseline):
        return self._eq("baseline", baseline)

    def version(self, version):
        return self._eq("version", version)

    def qualifier(self, qualifier):
        return self._eq("qualifier", qualifier)

    def from_date(self, date):
        self._filters.append(lambda r: r.created >= date)
        return self

    def until(self, date):
        self._filters.append(lambda r: r.created < date)
        return self

    def skip(self, n):
        self._skip = n
        return self

    def limit(self, n):
        self._limit = n
        return self

    def ascending(self, field):
        self._sort = (field, False)
        return self

    def descending(self, field):
        self._sort = (field, True)
        return self

    def where(self, field, *args):
        self._filters.append(lambda r: getattr(r, field, None) in args)
        return self

    def template(self, revision):
        for name in ("group_id", "artifact_id", "classifier", "version", "bsn"):
            value = getattr(revision, name, None)
            if value:
                self._eq(name, value)
        return self

    def query(self, text):
        needle = text.lower()
        self._filters.append(
            lambda r: any(needle in (getattr(r, f, None) or "").lower()
                          for f in ("name", "description", "artifact_id"))
        )
        return self

    def capability(self, ns, key, value):
        self._filters.append(
            lambda r: any(c.ns == ns and c.ps.get(key) == value for c in r.capabilities)
        )
        return self

    def _results(self):
        results = [r for r in self._records if all(f(r) for f in self._filters)]
        if self._sort:
            field, reverse = self._sort
            results.sort(key=lambda r: getattr(r, field), reverse=reverse)
        results = results[self._skip:]
        if self._limit is not None:
            results = results[:self._limit]
        return results

    def one(self):
        results = self._results()
        return results[0] if len(results) == 1 else None

    def first(self):
        results = self._results()
        return results[0] if results else None

    def count(self):
        return len(self._results())

    def __iter__(self):
        return iter(self._results())


class MemoryStore(RevisionStore, ProgramStore):
    """Revisions and programs kept in plain lists."""

    def __init__(self, revisions=(), programs=()):
        self.revisions: List[Revision] = list(revisions)
        self.programs: List[Program] = list(programs)

    def find_revision(self):
        return MemoryFind(self.revisions)

    def get_revision(self, sha):
        for revision in self.revisions:
            if revision.id == sha:
                return revision
        return None

    def find_program(self):
        return MemoryFind(self.programs)

    def get_program(self, group_id, artifact_id):
        return (MemoryFind(self.programs)
                .where("group_id", group_id)
                .where("artifact_id", artifact_id)
                .one())


def sha_of(seed: str) -> bytes:
    return hashlib.sha1(seed.encode("utf-8")).digest()


def make_revision(seed: str, baseline: str, phase: Phase = Phase.MASTER, qualifier=None,
                  classifier=None, group_id="org.foo", artifact_id="bar", created=0,
                  **kwargs) -> Revision:
    version = baseline if qualifier is None else f"{baseline}.{qualifier}"
    return Revision(
        id=sha_of(seed),
        group_id=group_id,
        artifact_id=artifact_id,
        classifier=classifier,
        version=version,
        baseline=baseline,
        qualifier=qualifier,
        phase=phase,
        created=created,
        **kwargs,
    )


@pytest.fixture
def revisions():
    """A small history for org.foo:bar across every interesting phase."""
    return {
        "r1": make_revision("r1", "1.0.0", Phase.MASTER, created=1),
        "r2": make_revision("r2", "1.2.3", Phase.MASTER, created=2),
        "r3": make_revision("r3", "1.3.0", Phase.STAGING, created=3),
        "r4": make_revision("r4", "2.0.0", Phase.WITHDRAWN, created=4),
        "r5": make_revision("r5", "1.2.3", Phase.MASTER, classifier="sources", created=5),
        "r6": make_revision("r6", "1.2.3", Phase.LOCKED, qualifier="SNAPSHOT", created=6),
        "simple": make_revision("simple", "0.1.0", Phase.MASTER, group_id="", artifact_id="tool"),
    }


@pytest.fixture
def store(revisions):
    program = Program(group_id="org.foo", artifact_id="bar", last=revisions["r2"])
    return MemoryStore(revisions.values(), [program])
