from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from placement.enums import DriveStatus, PlacementTier
from placement.students import (
    Drive,
    DriveEligibility,
    PlacedOffer,
    PlacementStatus,
    debar,
    drives_from_json,
    record_offer,
    student_from_dict,
    students_from_json,
)


def _offer(tier: str = "dream") -> PlacedOffer:
    return PlacedOffer(drive_id="d0", company_name="Acme", tier=tier, package_lpa=6.0)


def test_placement_status_invariant() -> None:
    PlacementStatus().validate()
    PlacementStatus(
        is_placed=True, current_tier=PlacementTier.DREAM, offers=[_offer()]
    ).validate()

    with pytest.raises(ValueError):
        PlacementStatus(is_placed=False, current_tier=PlacementTier.DREAM).validate()
    with pytest.raises(ValueError):
        PlacementStatus(is_placed=True, current_tier=None, offers=[_offer()]).validate()


def test_record_offer_returns_new_status() -> None:
    before = PlacementStatus()
    after = record_offer(before, _offer("regular"))
    assert before.is_placed is False and before.offers == []
    assert after.is_placed is True
    assert after.current_tier is PlacementTier.REGULAR
    after.validate()

    upgraded = record_offer(after, _offer("superDream"))
    assert upgraded.current_tier is PlacementTier.SUPER_DREAM
    assert len(upgraded.offers) == 2


def test_debar_keeps_offers() -> None:
    placed = record_offer(PlacementStatus(), _offer())
    barred = debar(placed, "Skipped interview", on=date(2025, 9, 1))
    assert barred.is_debarred
    assert barred.debarment_reason == "Skipped interview"
    assert barred.debarment_date == date(2025, 9, 1)
    assert barred.offers == placed.offers


def test_offer_tier_accepts_legacy_spelling() -> None:
    assert _offer("super_dream").tier is PlacementTier.SUPER_DREAM


def test_drive_coerces_tier_and_status() -> None:
    drive = Drive(id="d1", tier="super_dream", status="open")  # type: ignore[arg-type]
    assert drive.tier is PlacementTier.SUPER_DREAM
    assert drive.status is DriveStatus.OPEN
    with pytest.raises(ValueError):
        Drive(id="d2", tier="dream", status="paused")  # type: ignore[arg-type]


def test_drive_eligibility_deduplicates_programs() -> None:
    elig = DriveEligibility(allowed_programs=["MCA_INT", "MCA_INT", "MBA_MS"])
    assert elig.allowed_programs == ["MCA_INT", "MBA_MS"]
    assert elig.allowed_batches is None


def test_student_from_dict_reads_portal_fields() -> None:
    student = student_from_dict(
        {
            "uid": "u1",
            "fullName": "Riya Nair",
            "rollNumber": "IC-2K23-4",
            "email": "riya@iips.edu.in",
            "cgpa": "8.25",
            "activeBacklogs": 0,
            "programCode": "MCA_INT",
            "batch": "2023-2029",
            "placementStatus": {
                "isPlaced": True,
                "currentTier": "super_dream",
                "offers": [
                    {
                        "driveId": "d9",
                        "companyName": "Big Co",
                        "tier": "super_dream",
                        "packageLPA": 14,
                        "offerDate": "2025-08-30",
                    }
                ],
            },
            "appliedDrives": ["d9", "d9"],
        }
    )
    assert student.id == "u1"
    assert student.name == "Riya Nair"
    assert student.cgpa == pytest.approx(8.25)
    assert student.placement_status.current_tier is PlacementTier.SUPER_DREAM
    assert student.placement_status.offers[0].offer_date == date(2025, 8, 30)
    assert student.applied_drives == {"d9"}


def test_student_from_dict_requires_id() -> None:
    with pytest.raises(ValueError, match="uid"):
        student_from_dict({"cgpa": 7.0})


def test_students_from_json_accepts_users_key(tmp_path: Path) -> None:
    path = tmp_path / "students.json"
    path.write_text(
        json.dumps({"users": [{"uid": "a", "cgpa": 7}, {"id": "b", "cgpa": 8}]})
    )
    assert [s.id for s in students_from_json(path)] == ["a", "b"]


def test_students_from_json_rejects_wrong_shape(tmp_path: Path) -> None:
    path = tmp_path / "students.json"
    path.write_text(json.dumps({"people": []}))
    with pytest.raises(ValueError):
        students_from_json(path)

    with pytest.raises(FileNotFoundError):
        students_from_json(tmp_path / "nope.json")


def test_drives_from_json(tmp_path: Path) -> None:
    path = tmp_path / "drives.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "d1",
                    "tier": "dream",
                    "status": "registration_open",
                    "packageLPA": 7.5,
                    "eligibility": {
                        "minCGPA": 7.0,
                        "maxBacklogs": 1,
                        "allowedPrograms": ["MCA_INT"],
                    },
                }
            ]
        )
    )
    (drive,) = drives_from_json(path)
    assert drive.status is DriveStatus.REGISTRATION_OPEN
    assert drive.eligibility.min_cgpa == 7.0
    assert drive.eligibility.max_backlogs == 1
    assert drive.eligibility.allowed_batches is None
    assert drive.package_lpa == 7.5
