"""Tests for the query contract and collaborator ports."""

import pytest

from library.phase import Phase
from library.ports import (
    CategoryStore,
    ClosureProvider,
    PhaseStore,
    ProgramStore,
    RevisionSetStore,
    RevisionStore,
    ScanQueue,
)
from library.query import Find
from library.models import Capability, Category, ScanRequest
from library.revisions import Revisions

from conftest import MemoryFind, make_revision


@pytest.mark.parametrize("port", [
    Find, RevisionStore, ProgramStore, CategoryStore, RevisionSetStore, PhaseStore,
    ClosureProvider, ScanQueue,
])
def test_ports_are_abstract(port):
    with pytest.raises(TypeError):
        port()


class TestFindContract:
    """Chaining and terminals, exercised through the in-memory query."""

    @pytest.fixture
    def find(self):
        return MemoryFind([
            make_revision("a", "1.0.0", created=10, bsn="org.foo.bar"),
            make_revision("b", "1.1.0", created=20, bsn="org.foo.bar",
                          capabilities=[Capability(ns="osgi.identity", ps={"type": "bundle"})]),
            make_revision("c", "2.0.0", created=30, bsn="org.foo.baz", name="Baz client"),
        ])

    def test_chaining_returns_query(self, find):
        assert find.bsn("org.foo.bar").descending("created") is find

    def test_terminals(self, find):
        assert find.bsn("org.foo.bar").count() == 2

    def test_sort_skip_limit(self, find):
        result = find.descending("created").skip(1).limit(1).one()
        assert result.baseline == "1.1.0"

    def test_date_range(self, find):
        assert [r.baseline for r in find.from_date(15).until(30)] == ["1.1.0"]

    def test_capability(self, find):
        assert find.capability("osgi.identity", "type", "bundle").one().baseline == "1.1.0"

    def test_free_text(self, find):
        assert find.query("client").first().baseline == "2.0.0"

    def test_callback_visits_all(self, find):
        seen = []
        assert find.ascending("created").callback(lambda r: seen.append(r.baseline)) is True
        assert seen == ["1.0.0", "1.1.0", "2.0.0"]

    def test_callback_stops(self, find):
        seen = []

        def visitor(record):
            seen.append(record)
            return False

        assert find.callback(visitor) is False
        assert len(seen) == 1


class _Sets(RevisionSetStore):
    def __init__(self):
        self.saved = {}

    def create_revisions(self, revisions):
        return self.saved.setdefault(revisions.id, revisions)

    def get_revisions(self, set_id):
        return self.saved.get(set_id)


class _Phases(PhaseStore):
    def __init__(self):
        self.moves = []

    def set_phase(self, revision_id, phase):
        self.moves.append((revision_id, phase))


class _Queue(ScanQueue):
    def __init__(self):
        self.requests = []

    def queue_scan(self, request):
        self.requests.append(request)


def test_revision_set_store_keeps_first_copy():
    sets = _Sets()
    r = make_revision("a", "1.0.0")
    first = sets.create_revisions(Revisions.singleton(r))
    again = sets.create_revisions(Revisions.singleton(r))
    assert again is first
    assert sets.get_revisions(r.id) is first


def test_phase_store_and_scan_queue_implementations():
    phases, queue = _Phases(), _Queue()
    r = make_revision("a", "1.0.0")
    phases.set_phase(r.id, Phase.MASTER)
    queue.queue_scan(ScanRequest(url="https://example.org/a.jar", sha=r.id))
    assert phases.moves == [(r.id, Phase.MASTER)]
    assert queue.requests[0].sha == r.id


class _Categories(CategoryStore):
    def __init__(self, categories):
        self.categories = list(categories)

    def find_category(self):
        return MemoryFind(self.categories)

    def get_category(self, name):
        return self.find_category().where("name", name).one()


def test_category_store():
    store = _Categories([Category(name="network", summary="Networking"), Category(name="xml")])
    assert store.get_category("network").summary == "Networking"
    assert store.get_category("graphics") is None
    assert store.find_category().ascending("name").first().name == "network"
