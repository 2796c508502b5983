"""Chainable query contract over stored programs and revisions.

The core only issues queries through ``Find``; a repository adapter supplies
the implementation. Narrowing methods return the query itself so calls
chain::

    store.find_revision().where("group_id", "org.foo").descending("created").first()

Field names are record attribute names (``group_id``, ``phase``, ...).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")

# Visitor for push-style retrieval; returning False stops the walk
Callback = Callable[[T], bool]


class Find(ABC, Generic[T]):
    """Abstract query builder over records of type ``T``."""

    @abstractmethod
    def bsn(self, bsn: str) -> "Find[T]":
        """Narrow to a logical (bundle symbolic) name."""

    @abstractmethod
    def baseline(self, baseline: str) -> "Find[T]":
        """Narrow to a normalized ``major.minor.patch`` baseline."""

    @abstractmethod
    def version(self, version: str) -> "Find[T]":
        """Narrow to a raw version string."""

    @abstractmethod
    def qualifier(self, qualifier: str) -> "Find[T]":
        """Narrow to a version qualifier."""

    @abstractmethod
    def from_date(self, date: int) -> "Find[T]":
        """Only records created at or after ``date`` (epoch millis)."""

    @abstractmethod
    def until(self, date: int) -> "Find[T]":
        """Only records created before ``date`` (epoch millis)."""

    @abstractmethod
    def skip(self, n: int) -> "Find[T]":
        """Drop the first ``n`` results."""

    @abstractmethod
    def limit(self, n: int) -> "Find[T]":
        """Return at most ``n`` results."""

    @abstractmethod
    def ascending(self, field: str) -> "Find[T]":
        """Sort ascending by ``field``."""

    @abstractmethod
    def descending(self, field: str) -> "Find[T]":
        """Sort descending by ``field``."""

    @abstractmethod
    def where(self, field: str, *args: Any) -> "Find[T]":
        """Keep records whose ``field`` equals one of ``args``."""

    @abstractmethod
    def template(self, revision: Any) -> "Find[T]":
        """Keep records matching every set field of an example record."""

    @abstractmethod
    def query(self, text: str) -> "Find[T]":
        """Free-text search."""

    @abstractmethod
    def capability(self, ns: str, key: str, value: Any) -> "Find[T]":
        """Keep records providing capability ``ns`` with ``key == value``."""

    @abstractmethod
    def one(self) -> Optional[T]:
        """The single matching record, or None when nothing matches."""

    @abstractmethod
    def first(self) -> Optional[T]:
        """The first record in sort order, or None when nothing matches."""

    @abstractmethod
    def count(self) -> int:
        """Number of matching records."""

    @abstractmethod
    def __iter__(self) -> Iterator[T]:
        """Iterate all matching records in sort order."""

    def callback(self, visitor: Callback) -> bool:
        """Push each matching record to ``visitor``.

        Returns:
            True when every record was visited, False when the visitor
            stopped the walk by returning False.
        """
        for record in self:
            if visitor(record) is False:
                return False
        return True
