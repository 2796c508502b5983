"""Content-addressed sets of revisions.

The id of a set depends only on its sorted, deduplicated members. A set with
a single member is identified by that member's id; larger sets are
identified by the SHA-1 of their members fed in sorted order.

Members sort as signed bytes (byte values 0x80-0xff order before 0x00), with
a shorter id ordering before any longer id it prefixes. Duplicate removal
compares adjacent sorted members by object identity unless ``by_value`` is
requested; value-equal but distinct ``bytes`` objects are otherwise both
kept and both hashed.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import InitVar, dataclass, field
from typing import Iterable, Iterator, List, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

logger = logging.getLogger(__name__)


def _signed_key(member: bytes) -> Tuple[int, ...]:
    return tuple(b - 256 if b > 127 else b for b in member)


def canonical_members(ids: Iterable[bytes], by_value: bool = False) -> List[bytes]:
    """Sort ``ids`` and drop members equal to the previously retained one."""
    retained: List[bytes] = []
    last = None
    for member in sorted(ids, key=_signed_key):
        duplicate = (member == last) if by_value else (member is last)
        if duplicate:
            continue
        retained.append(member)
        last = member
    return retained


def checksum(ids: Iterable[bytes], by_value: bool = False) -> bytes:
    """Return the content id of the set formed by ``ids``."""
    members = canonical_members(ids, by_value)
    if len(members) == 1:
        return members[0]

    digester = hashlib.new(Constants.CHECKSUM_ALGORITHM)
    for member in members:
        digester.update(member)
    if is_debug_enabled(logger):
        logger.debug(
            "Revision set checksum",
            extra=extra_context(
                event="checksum",
                component="revisions",
                count=len(members),
                by_value=by_value,
            ),
        )
    return digester.digest()


@dataclass(frozen=True)
class Revisions:
    """An ordered, deduplicated collection of revision ids and its id.

    ``content`` is canonicalized and ``id`` derived from it at construction,
    so a set can never carry an id that disagrees with its members.
    """
    id: bytes = field(init=False)
    content: Tuple[bytes, ...] = ()
    by_value: InitVar[bool] = False

    checksum = staticmethod(checksum)

    def __post_init__(self, by_value: bool):
        members = tuple(canonical_members(self.content, by_value))
        object.__setattr__(self, "content", members)
        object.__setattr__(self, "id", checksum(members, by_value))

    @classmethod
    def singleton(cls, revision) -> "Revisions":
        """A one-member set; its id is the revision's id, no hashing."""
        return cls((revision.id,))

    @classmethod
    def from_revisions(cls, revisions: Iterable, by_value: bool = False) -> "Revisions":
        return cls(tuple(r.id for r in revisions), by_value)

    @classmethod
    def from_ids(cls, ids: Iterable[bytes], by_value: bool = False) -> "Revisions":
        return cls(tuple(ids), by_value)

    def hex_id(self) -> str:
        return self.id.hex()

    def __contains__(self, revision_id) -> bool:
        return any(member == revision_id for member in self.content)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)
