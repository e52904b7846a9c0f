# tests/conftest.py
from __future__ import annotations

import os
import random
from datetime import date
from pathlib import Path
from typing import Any, Callable

import numpy as np
import pytest

from placement.enums import DriveStatus, PlacementTier
from placement.scheduling.config import InterviewPanel
from placement.students import Drive, DriveEligibility, Student


# -----------------------------
# Global, deterministic seeding
# -----------------------------
@pytest.fixture(autouse=True, scope="session")
def _seed_everything() -> None:
    """
    Make tests deterministic across runs. If you need a different seed in a test,
    override locally.
    """
    seed = int(os.environ.get("PYTEST_SEED", "1234"))
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    if np is not None:  # pragma: no branch
        np.random.seed(seed)


# -----------------------------
# Path helpers
# -----------------------------
@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root (where pyproject.toml lives)."""
    return Path(__file__).resolve().parents[1]


# -----------------------------
# Domain builders
# -----------------------------
@pytest.fixture(scope="session")
def today() -> date:
    """Fixed 'now' for roll-number maths (academic year 2025-26)."""
    return date(2025, 9, 1)


@pytest.fixture
def make_student() -> Callable[..., Student]:
    def _make(**overrides: Any) -> Student:
        fields: dict[str, Any] = {
            "id": "s1",
            "name": "Test Student",
            "roll_number": "IC-2K23-1",
            "email": "s1@iips.edu.in",
            "cgpa": 7.0,
            "active_backlogs": 0,
            "program_code": "MCA_INT",
            "batch": "2023-2029",
        }
        fields.update(overrides)
        return Student(**fields)

    return _make


@pytest.fixture
def make_drive() -> Callable[..., Drive]:
    def _make(
        tier: PlacementTier | str = PlacementTier.DREAM,
        status: DriveStatus | str = DriveStatus.OPEN,
        **criteria: Any,
    ) -> Drive:
        criteria.setdefault("min_cgpa", 6.5)
        criteria.setdefault("allowed_programs", ["MCA_INT"])
        return Drive(
            id="d1",
            tier=tier,
            status=status,
            eligibility=DriveEligibility(**criteria),
            company_name="Acme",
        )

    return _make


@pytest.fixture
def two_panels() -> list[InterviewPanel]:
    return [InterviewPanel(id="P1", name="Panel A"), InterviewPanel(id="P2", name="Panel B")]
