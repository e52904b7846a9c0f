from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from placement.enums import DriveStatus, PlacementTier
from placement.jsonio import json_entries, normalize_date, read_json


def _dedup(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


@dataclass(slots=True)
class PlacedOffer:
    drive_id: str
    company_name: str
    tier: PlacementTier
    package_lpa: float
    company_id: str = ""
    offer_date: Optional[date] = None

    def __post_init__(self) -> None:
        self.tier = PlacementTier.parse(self.tier)
        self.offer_date = normalize_date(self.offer_date, "offer_date")


@dataclass(slots=True)
class PlacementStatus:
    """
    A student's placement record. Only admin placement actions and offer
    acceptance change it; see `record_offer` and `debar`.
    """

    is_placed: bool = False
    current_tier: Optional[PlacementTier] = None
    offers: list[PlacedOffer] = field(default_factory=list)
    is_debarred: bool = False
    debarment_reason: Optional[str] = None
    debarment_date: Optional[date] = None

    def __post_init__(self) -> None:
        if self.current_tier is not None:
            self.current_tier = PlacementTier.parse(self.current_tier)
        self.offers = list(self.offers)
        self.debarment_date = normalize_date(self.debarment_date, "debarment_date")

    def validate(self) -> None:
        """`current_tier` is set iff the student is placed with at least one offer."""
        has_tier = self.current_tier is not None
        placed_with_offer = self.is_placed and bool(self.offers)
        if has_tier != placed_with_offer:
            raise ValueError(
                "current_tier must be set if and only if is_placed is true and "
                "at least one offer exists."
            )


def record_offer(status: PlacementStatus, offer: PlacedOffer) -> PlacementStatus:
    """
    Return the status after accepting `offer`. The accepted offer's tier becomes
    the current tier, as the portal's accept/mark-placed actions do.
    """
    return replace(
        status,
        is_placed=True,
        current_tier=offer.tier,
        offers=[*status.offers, offer],
    )


def debar(status: PlacementStatus, reason: str, on: date | None = None) -> PlacementStatus:
    return replace(
        status,
        is_debarred=True,
        debarment_reason=reason,
        debarment_date=on or date.today(),
    )


@dataclass(slots=True)
class Student:
    """
    Snapshot of the fields the engines read. Loading and validating the full
    profile is the caller's job.
    """

    id: str
    cgpa: float
    active_backlogs: int
    program_code: str
    batch: str
    placement_status: PlacementStatus = field(default_factory=PlacementStatus)
    applied_drives: set[str] = field(default_factory=set)
    name: str = ""
    roll_number: str = ""
    email: str = ""

    def __post_init__(self) -> None:
        self.applied_drives = set(self.applied_drives)

    def __repr__(self) -> str:
        tier = self.placement_status.current_tier
        return (
            f"Student(id='{self.id}', roll='{self.roll_number}', "
            f"cgpa={self.cgpa:.2f}, backlogs={self.active_backlogs}, "
            f"program={self.program_code}, batch={self.batch}, "
            f"tier={tier.value if tier else None}, "
            f"debarred={self.placement_status.is_debarred})"
        )


@dataclass(slots=True)
class DriveEligibility:
    min_cgpa: float = 0.0
    max_backlogs: Optional[int] = None
    allowed_programs: list[str] = field(default_factory=list)
    allowed_batches: Optional[list[str]] = None

    def __post_init__(self) -> None:
        self.allowed_programs = _dedup(self.allowed_programs)
        if self.allowed_batches is not None:
            self.allowed_batches = _dedup(self.allowed_batches)


@dataclass(slots=True)
class Drive:
    id: str
    tier: PlacementTier
    status: DriveStatus
    eligibility: DriveEligibility = field(default_factory=DriveEligibility)
    company_name: str = ""
    package_lpa: Optional[float] = None

    def __post_init__(self) -> None:
        self.tier = PlacementTier.parse(self.tier)
        if not isinstance(self.status, DriveStatus):
            self.status = DriveStatus(self.status)


# ----------------------------
# JSON loaders
# ----------------------------
def placement_status_from_dict(raw: Mapping[str, Any] | None) -> PlacementStatus:
    if not raw:
        return PlacementStatus()
    offers = [
        PlacedOffer(
            drive_id=str(o.get("driveId", "")),
            company_name=str(o.get("companyName", "")),
            tier=o["tier"],
            package_lpa=float(o.get("packageLPA", 0.0)),
            company_id=str(o.get("companyId", "")),
            offer_date=o.get("offerDate"),
        )
        for o in raw.get("offers") or []
    ]
    return PlacementStatus(
        is_placed=bool(raw.get("isPlaced", False)),
        current_tier=raw.get("currentTier"),
        offers=offers,
        is_debarred=bool(raw.get("isDebarred", False)),
        debarment_reason=raw.get("debarmentReason"),
        debarment_date=raw.get("debarmentDate"),
    )


def student_from_dict(raw: Mapping[str, Any]) -> Student:
    if not isinstance(raw, Mapping):
        raise TypeError("Each student entry must be an object/dict.")
    student_id = raw.get("uid", raw.get("id"))
    if student_id in (None, ""):
        raise ValueError("Student entry missing 'uid'/'id'.")
    try:
        cgpa = float(raw.get("cgpa", 0.0))
        backlogs = int(raw.get("activeBacklogs", 0))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid academic fields for student {student_id!r}") from exc
    return Student(
        id=str(student_id),
        name=str(raw.get("fullName", raw.get("name", ""))),
        roll_number=str(raw.get("rollNumber", "")),
        email=str(raw.get("email", "")),
        cgpa=cgpa,
        active_backlogs=backlogs,
        program_code=str(raw.get("programCode", "")),
        batch=str(raw.get("batch", "")),
        placement_status=placement_status_from_dict(raw.get("placementStatus")),
        applied_drives=set(raw.get("appliedDrives") or []),
    )


def drive_from_dict(raw: Mapping[str, Any]) -> Drive:
    if not isinstance(raw, Mapping):
        raise TypeError("Each drive entry must be an object/dict.")
    elig = raw.get("eligibility") or {}
    batches = elig.get("allowedBatches")
    package = raw.get("packageLPA")
    return Drive(
        id=str(raw["id"]),
        tier=raw["tier"],
        status=raw["status"],
        eligibility=DriveEligibility(
            min_cgpa=float(elig.get("minCGPA", 0.0)),
            max_backlogs=elig.get("maxBacklogs"),
            allowed_programs=list(elig.get("allowedPrograms") or []),
            allowed_batches=list(batches) if batches is not None else None,
        ),
        company_name=str(raw.get("companyName", "")),
        package_lpa=float(package) if package is not None else None,
    )


def students_from_json(path: str | Path) -> list[Student]:
    """
    Load students from a JSON file holding either a list or an object with a
    top-level `students`/`users` array (the portal's camelCase field names).
    """
    data = read_json(path, "students_from_json")
    return [student_from_dict(r) for r in json_entries(data, ("students", "users"), "student")]


def drives_from_json(path: str | Path) -> list[Drive]:
    data = read_json(path, "drives_from_json")
    return [drive_from_dict(r) for r in json_entries(data, ("drives",), "drive")]
