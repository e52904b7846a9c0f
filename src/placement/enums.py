from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Type


class PlacementTier(str, Enum):
    """Offer tier, ordered regular < dream < superDream."""

    REGULAR = "regular"
    DREAM = "dream"
    SUPER_DREAM = "superDream"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]

    @property
    def label(self) -> str:
        return _TIER_LABEL[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PlacementTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, PlacementTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, PlacementTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, PlacementTier):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: Any) -> "PlacementTier":
        """
        Coerce a stored tier value into the enum.

        The legacy ``super_dream`` spelling is folded into ``superDream`` here so
        nothing past the ingestion boundary ever sees it.
        """
        if isinstance(value, PlacementTier):
            return value
        if not isinstance(value, str):
            raise TypeError(f"Tier must be a string, got {type(value)!r}")
        key = value.strip()
        if key in _LEGACY_TIER_SPELLINGS:
            return _LEGACY_TIER_SPELLINGS[key]
        try:
            return cls(key)
        except ValueError as exc:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown tier {value!r}; expected one of {valid}") from exc


_TIER_RANK = {
    PlacementTier.REGULAR: 1,
    PlacementTier.DREAM: 2,
    PlacementTier.SUPER_DREAM: 3,
}

_TIER_LABEL = {
    PlacementTier.REGULAR: "Regular",
    PlacementTier.DREAM: "Dream",
    PlacementTier.SUPER_DREAM: "Super Dream",
}

_LEGACY_TIER_SPELLINGS = {
    "super_dream": PlacementTier.SUPER_DREAM,
    "superdream": PlacementTier.SUPER_DREAM,
}


class EligibilityState(str, Enum):
    UNPLACED = "UNPLACED"
    REGULAR_HOLDER = "REGULAR_HOLDER"
    DREAM_HOLDER = "DREAM_HOLDER"
    SUPER_DREAM_HOLDER = "SUPER_DREAM_HOLDER"
    DEBARRED = "DEBARRED"


class DriveStatus(str, Enum):
    DRAFT = "draft"
    UPCOMING = "upcoming"
    OPEN = "open"
    REGISTRATION_OPEN = "registration_open"
    CLOSED = "closed"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def accepts_applications(self) -> bool:
        return _DRIVE_ACCEPTS[self]


_DRIVE_ACCEPTS = {
    DriveStatus.DRAFT: False,
    DriveStatus.UPCOMING: True,
    DriveStatus.OPEN: True,
    DriveStatus.REGISTRATION_OPEN: True,
    DriveStatus.CLOSED: False,
    DriveStatus.IN_PROGRESS: False,
    DriveStatus.COMPLETED: False,
    DriveStatus.CANCELLED: False,
}


class ApplicationStatus(str, Enum):
    APPLIED = "applied"
    SHORTLISTED = "shortlisted"
    ROUND_1 = "round-1"
    ROUND_2 = "round-2"
    ROUND_3 = "round-3"
    SELECTED = "selected"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"

    @property
    def is_final(self) -> bool:
        return _APPLICATION_FINAL[self]


_APPLICATION_FINAL = {
    ApplicationStatus.APPLIED: False,
    ApplicationStatus.SHORTLISTED: False,
    ApplicationStatus.ROUND_1: False,
    ApplicationStatus.ROUND_2: False,
    ApplicationStatus.ROUND_3: False,
    ApplicationStatus.SELECTED: True,
    ApplicationStatus.REJECTED: True,
    ApplicationStatus.WITHDRAWN: True,
}


class SlotStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    NO_SHOW = "no-show"
    RESCHEDULED = "rescheduled"

    def can_transition_to(self, target: "SlotStatus") -> bool:
        return target in _SLOT_TRANSITIONS[self]


_SLOT_TRANSITIONS: dict[SlotStatus, frozenset[SlotStatus]] = {
    SlotStatus.SCHEDULED: frozenset(
        {SlotStatus.COMPLETED, SlotStatus.NO_SHOW, SlotStatus.RESCHEDULED}
    ),
    SlotStatus.COMPLETED: frozenset(),
    SlotStatus.NO_SHOW: frozenset(),
    SlotStatus.RESCHEDULED: frozenset(),
}


def ensure_exhaustive(table: Mapping[Any, Any], enum_cls: Type[Enum], name: str) -> None:
    """Raise if `table` does not have exactly one entry per member of `enum_cls`."""
    missing = [m for m in enum_cls if m not in table]
    extra = [k for k in table if not isinstance(k, enum_cls)]
    if missing or extra:
        raise RuntimeError(
            f"{name} must cover every {enum_cls.__name__}: "
            f"missing={[m.value for m in missing]}, unexpected={extra}"
        )


ensure_exhaustive(_TIER_RANK, PlacementTier, "_TIER_RANK")
ensure_exhaustive(_TIER_LABEL, PlacementTier, "_TIER_LABEL")
ensure_exhaustive(_DRIVE_ACCEPTS, DriveStatus, "_DRIVE_ACCEPTS")
ensure_exhaustive(_APPLICATION_FINAL, ApplicationStatus, "_APPLICATION_FINAL")
ensure_exhaustive(_SLOT_TRANSITIONS, SlotStatus, "_SLOT_TRANSITIONS")
