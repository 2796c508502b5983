"""Revision lifecycle phases, version strategies and the visibility policy.

Phase attributes live in a single static table keyed by ``Phase``; the enum
members carry no state of their own. The modifier table maps the trailing
coordinate modifier to the set of phases a matching revision may be in.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional


class Phase(Enum):
    """Lifecycle stage of a revision."""
    PENDING = "pending"
    STAGING = "staging"
    LOCKED = "locked"
    MASTER = "master"
    RETIRED = "retired"
    WITHDRAWN = "withdrawn"
    UNKNOWN = "unknown"

    @property
    def locked(self) -> bool:
        """No longer subject to mutation."""
        return PHASE_TABLE[self].locked

    @property
    def listable(self) -> bool:
        """Visible in normal browsing."""
        return PHASE_TABLE[self].listable

    @property
    def permanent(self) -> bool:
        """Cannot transition any further."""
        return PHASE_TABLE[self].permanent

    @property
    def identifier(self) -> str:
        return PHASE_TABLE[self].identifier

    @property
    def symbol(self) -> str:
        return PHASE_TABLE[self].symbol

    def is_staging(self) -> bool:
        """True for STAGING and LOCKED only."""
        return self in (Phase.STAGING, Phase.LOCKED)

    @classmethod
    def from_identifier(cls, identifier: str) -> "Phase":
        """Look a phase up by its one-character identifier.

        Raises:
            ValueError: for an unknown identifier.
        """
        key = (identifier or "").upper()
        for phase, attrs in PHASE_TABLE.items():
            if attrs.identifier == key:
                return phase
        raise ValueError(f"Unknown phase identifier: {identifier!r}")

    @classmethod
    def listable_phases(cls) -> FrozenSet["Phase"]:
        return frozenset(p for p in cls if p.listable)


@dataclass(frozen=True)
class PhaseAttributes:
    """Static attributes of one phase."""
    locked: bool
    listable: bool
    permanent: bool
    identifier: str
    symbol: str


PHASE_TABLE: Dict[Phase, PhaseAttributes] = {
    Phase.PENDING: PhaseAttributes(False, False, False, "P", "?"),
    Phase.STAGING: PhaseAttributes(False, False, False, "S", "◑"),
    Phase.LOCKED: PhaseAttributes(True, False, False, "L", "⊘"),
    Phase.MASTER: PhaseAttributes(True, True, True, "M", "⬤"),
    Phase.RETIRED: PhaseAttributes(True, False, True, "R", "◐"),
    Phase.WITHDRAWN: PhaseAttributes(True, False, True, "W", "⊗"),
    Phase.UNKNOWN: PhaseAttributes(True, False, False, "U", "?"),
}


LOWEST_VERSION = "<"
HIGHEST_VERSION = ">"
EQUAL_VERSION = "="
BASELINE_VERSION = "~"


class Strategy(Enum):
    """Which of several matching revisions a resolver picks."""
    HIGHEST = HIGHEST_VERSION
    LOWEST = LOWEST_VERSION
    BASELINE = BASELINE_VERSION
    EQUAL = EQUAL_VERSION

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> "Strategy":
        return cls(symbol)

    @classmethod
    def from_name(cls, name: str) -> "Strategy":
        """Case-insensitive lookup by member name (``"highest"`` etc.)."""
        try:
            return cls[str(name).strip().upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown strategy: {name!r}") from exc


DEFAULT_MODIFIER = "="

# Trailing coordinate modifier -> phases a matching revision may be in
MODIFIER_PHASES: Dict[str, FrozenSet[Phase]] = {
    "=": frozenset({Phase.MASTER}),
    "*": frozenset({Phase.LOCKED, Phase.MASTER, Phase.STAGING}),
    "~": frozenset(Phase),
    "!": frozenset({Phase.WITHDRAWN, Phase.RETIRED, Phase.UNKNOWN, Phase.PENDING}),
}


def visible_phases(modifier: Optional[str]) -> FrozenSet[Phase]:
    """Return the phases visible under ``modifier``.

    An absent modifier means ``=``; an unrecognized one falls back to the
    ``=`` row as well.
    """
    key = (modifier or DEFAULT_MODIFIER)[:1]
    return MODIFIER_PHASES.get(key, MODIFIER_PHASES[DEFAULT_MODIFIER])


def is_exact(modifier: Optional[str]) -> bool:
    """Exact matching applies only when the modifier is literally ``=``."""
    return (modifier or DEFAULT_MODIFIER) == DEFAULT_MODIFIER
