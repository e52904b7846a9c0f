from __future__ import annotations

from datetime import date

import pytest

from placement.enums import DriveStatus, PlacementTier
from placement.generate.cohort import (
    CohortGenConfig,
    create_drive,
    create_students,
    drive_status_for_deadline,
    students_to_dataframe,
)
from placement.roll_parser import is_valid_roll_number, parse_roll_number

REF = date(2025, 9, 1)


def test_cohort_is_reproducible_with_seed():
    cfg = CohortGenConfig(n=30, seed=11, reference_date=REF)
    first = create_students(cfg)
    second = create_students(cfg)
    assert [s.id for s in first] == [s.id for s in second]
    assert [s.cgpa for s in first] == [s.cgpa for s in second]


def test_generated_students_are_consistent():
    cfg = CohortGenConfig(n=40, lateral_entry_pct=0.3, reference_date=REF)
    students = create_students(cfg)

    assert len(students) == 40
    assert len({s.id for s in students}) == 40
    for s in students:
        assert is_valid_roll_number(s.roll_number)
        parsed = parse_roll_number(s.roll_number, today=REF).data
        assert parsed is not None
        assert s.program_code == parsed.program_code
        assert s.batch == parsed.batch
        assert 5.5 <= s.cgpa <= 9.8
        assert s.email.endswith("@iips.edu.in") and s.email == s.email.lower()
        assert s.id.startswith("student_")


def test_program_mix_follows_probabilities():
    cfg = CohortGenConfig(
        n=10, prefixes=("IC", "BC"), prefix_probs=(0.7, 0.3), reference_date=REF
    )
    codes = [s.program_code for s in create_students(cfg)]
    assert codes.count("MCA_INT") == 7
    assert codes.count("BCOM_HONS") == 3


def test_placed_and_debarred_flags():
    cfg = CohortGenConfig(
        n=20,
        placed_pct=1.0,
        placed_tier_probs=(0.0, 1.0, 0.0),
        debarred_pct=1.0,
        reference_date=REF,
    )
    for s in create_students(cfg):
        status = s.placement_status
        status.validate()
        assert status.current_tier is PlacementTier.DREAM
        assert 5.0 <= status.offers[0].package_lpa <= 9.99
        assert status.is_debarred


def test_students_to_dataframe():
    students = create_students(CohortGenConfig(n=5, reference_date=REF))
    frame = students_to_dataframe(students)
    assert len(frame) == 5
    assert {"roll_number", "cgpa", "current_tier", "is_debarred"} <= set(frame.columns)
    assert not frame["is_placed"].any()


@pytest.mark.parametrize(
    "overrides",
    [
        {"n": 0},
        {"prefix_probs": (0.5, 0.5)},
        {"prefixes": ("ZZ", "IC", "IM", "IT")},
        {"prefix_probs": (0.5, 0.3, 0.1, 0.0)},
        {"cgpa_edges": (9.0, 8.0), "cgpa_probs": (1.0,)},
        {"cgpa_probs": (1.0,)},
        {"placed_tier_probs": (0.5, 0.5)},
        {"placed_pct": 1.5},
        {"admission_years": ()},
    ],
)
def test_invalid_config_raises(overrides):
    with pytest.raises(ValueError):
        CohortGenConfig(**overrides).validate()


@pytest.mark.parametrize(
    "days, status",
    [
        (-6, DriveStatus.COMPLETED),
        (-5, DriveStatus.CLOSED),
        (-1, DriveStatus.CLOSED),
        (0, DriveStatus.OPEN),
        (7, DriveStatus.OPEN),
        (8, DriveStatus.UPCOMING),
    ],
)
def test_drive_status_for_deadline(days, status):
    assert drive_status_for_deadline(days) is status


def test_create_drive_by_package():
    regular = create_drive(4.0)
    assert regular.tier is PlacementTier.REGULAR
    assert regular.eligibility.max_backlogs == 1
    assert regular.eligibility.min_cgpa == 6.0

    dream = create_drive(7.0, drive_id="d2", company_name="Mid Co")
    assert dream.tier is PlacementTier.DREAM
    assert dream.id == "d2" and dream.company_name == "Mid Co"
    assert "MBA_MS" in dream.eligibility.allowed_programs

    top = create_drive(18.0, status=DriveStatus.UPCOMING)
    assert top.tier is PlacementTier.SUPER_DREAM
    assert top.status is DriveStatus.UPCOMING
    assert top.eligibility.allowed_programs == ["MCA_INT", "MTECH_IT"]
    assert top.package_lpa == 18.0
