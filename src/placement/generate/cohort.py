# placement/generate/cohort.py
from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from placement.config import DEFAULT_ELIGIBILITY_CONFIG, EligibilityConfig
from placement.enums import DriveStatus, PlacementTier
from placement.roll_parser import (
    PROGRAM_PREFIX_MAP,
    generate_roll_number,
    parse_roll_number,
)
from placement.students import (
    Drive,
    DriveEligibility,
    PlacedOffer,
    PlacementStatus,
    Student,
    debar,
    record_offer,
)
from placement.tiers import tier_from_package

FIRST_NAMES = (
    "Aarav", "Aditi", "Akash", "Ananya", "Arjun", "Bhavya", "Chirag", "Deepika",
    "Dev", "Diya", "Gaurav", "Ishita", "Karan", "Kavya", "Kunal", "Meera",
    "Nikhil", "Neha", "Pranav", "Pooja", "Rahul", "Riya", "Rohan", "Sakshi",
    "Siddharth", "Shreya", "Tanmay", "Tanvi", "Varun", "Vidhi", "Yash", "Zara",
)  # fmt: skip
LAST_NAMES = (
    "Agarwal", "Bansal", "Chauhan", "Deshmukh", "Dubey", "Gupta", "Iyer", "Jain",
    "Joshi", "Kapoor", "Kulkarni", "Mishra", "Nair", "Patil", "Rao", "Sharma",
    "Shukla", "Singh", "Tiwari", "Verma", "Yadav",
)  # fmt: skip

# Package ranges (LPA) seeded offers are drawn from, per tier.
OFFER_PACKAGE_RANGES: dict[PlacementTier, Tuple[float, float]] = {
    PlacementTier.REGULAR: (3.25, 4.99),
    PlacementTier.DREAM: (5.0, 9.99),
    PlacementTier.SUPER_DREAM: (10.0, 40.0),
}


# ----------------------------
# Configuration container
# ----------------------------
@dataclass(slots=True)
class CohortGenConfig:
    """
    Configuration for generation of a synthetic student cohort.
    """

    n: int = 50

    # Program mix by roll prefix (weights must sum to 1.0)
    prefixes: Tuple[str, ...] = ("IC", "IM", "IT", "BC")
    prefix_probs: Tuple[float, ...] = (0.40, 0.30, 0.20, 0.10)

    # Admission years to draw from; None means the three years before `reference_date`
    admission_years: Optional[Tuple[int, ...]] = None

    # CGPA bands: consecutive edges with a probability per band
    cgpa_edges: Tuple[float, ...] = (5.5, 6.5, 7.0, 8.0, 8.5, 9.0, 9.8)
    cgpa_probs: Tuple[float, ...] = (0.05, 0.15, 0.30, 0.30, 0.15, 0.05)

    lateral_entry_pct: float = 0.0
    # Share of students already holding an offer, and the tier mix of those offers
    placed_pct: float = 0.0
    placed_tier_probs: Tuple[float, ...] = (0.60, 0.30, 0.10)
    debarred_pct: float = 0.0

    # Date roll numbers are parsed against (current year, batch status)
    reference_date: Optional[date] = None

    # RNG seed
    seed: Optional[int] = 7

    def validate(self) -> None:
        if self.n <= 0:
            raise ValueError("n must be > 0.")
        if len(self.prefixes) != len(self.prefix_probs):
            raise ValueError("prefixes and prefix_probs must be same length.")
        unknown = [p for p in self.prefixes if p not in PROGRAM_PREFIX_MAP]
        if unknown:
            raise ValueError(f"Unknown program prefixes: {unknown}")
        if not np.isclose(sum(self.prefix_probs), 1.0, atol=1e-9):
            raise ValueError("prefix_probs must sum to 1.0")
        if len(self.cgpa_edges) != len(self.cgpa_probs) + 1:
            raise ValueError("cgpa_edges must have one more entry than cgpa_probs.")
        if list(self.cgpa_edges) != sorted(self.cgpa_edges):
            raise ValueError("cgpa_edges must be ascending.")
        if self.cgpa_edges[0] < 0.0 or self.cgpa_edges[-1] > 10.0:
            raise ValueError("cgpa_edges must lie within [0,10].")
        if not np.isclose(sum(self.cgpa_probs), 1.0, atol=1e-9):
            raise ValueError("cgpa_probs must sum to 1.0")
        if len(self.placed_tier_probs) != len(PlacementTier):
            raise ValueError("placed_tier_probs needs one entry per tier.")
        if not np.isclose(sum(self.placed_tier_probs), 1.0, atol=1e-9):
            raise ValueError("placed_tier_probs must sum to 1.0")
        for x in (self.lateral_entry_pct, self.placed_pct, self.debarred_pct):
            if not (0.0 <= x <= 1.0):
                raise ValueError(
                    "lateral_entry_pct, placed_pct and debarred_pct must be in [0,1]."
                )
        if self.admission_years is not None and not self.admission_years:
            raise ValueError("admission_years must not be empty.")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError("seed must be an int or None.")


# ----------------------------
# Generation helpers
# ----------------------------
def _rng(seed: Optional[int]) -> np.random.Generator:
    return np.random.default_rng(seed) if seed is not None else np.random.default_rng()


def _deterministic_counts(n: int, probs: np.ndarray) -> np.ndarray:
    """
    Turn probabilities into integer counts that sum to n with minimal rounding error.
    """
    expected = probs * n
    floors = np.floor(expected).astype(int)
    shortfall = n - floors.sum()
    if shortfall > 0:
        remainders = expected - floors
        bump_idx = np.argsort(remainders)[::-1][:shortfall]
        floors[bump_idx] += 1
    return floors


def _student_id(roll_number: str) -> str:
    return "student_" + re.sub(r"[^A-Za-z0-9]", "_", roll_number)


def _backlogs(g: np.random.Generator, cgpa: float) -> int:
    if cgpa < 6.5:
        return int(g.integers(1, 4)) if g.random() < 0.5 else 0
    if cgpa < 7.0:
        return 1 if g.random() < 0.2 else 0
    return 0


# ----------------------------
# Core API
# ----------------------------
def create_students(cfg: CohortGenConfig) -> list[Student]:
    cfg.validate()
    g = _rng(cfg.seed)
    today = cfg.reference_date or date.today()
    years = cfg.admission_years or (today.year - 1, today.year - 2, today.year - 3)

    # Assign programs deterministically close to target mix
    counts = _deterministic_counts(cfg.n, np.array(cfg.prefix_probs, dtype=float))
    prefix_values = np.concatenate(
        [np.full(count, p, dtype=object) for p, count in zip(cfg.prefixes, counts)]
    )
    g.shuffle(prefix_values)

    year_draws = g.choice(np.array(years, dtype=int), size=cfg.n)
    lateral_flags = g.random(cfg.n) < cfg.lateral_entry_pct
    placed_flags = g.random(cfg.n) < cfg.placed_pct
    debarred_flags = g.random(cfg.n) < cfg.debarred_pct

    band_idx = g.choice(
        len(cfg.cgpa_probs), size=cfg.n, p=np.array(cfg.cgpa_probs, dtype=float)
    )
    tiers = list(PlacementTier)
    tier_idx = g.choice(
        len(tiers), size=cfg.n, p=np.array(cfg.placed_tier_probs, dtype=float)
    )

    sequence: Counter[tuple[str, int]] = Counter()
    students: list[Student] = []
    for i in range(cfg.n):
        prefix = str(prefix_values[i])
        year = int(year_draws[i])
        sequence[(prefix, year)] += 1
        roll = generate_roll_number(
            prefix, year, sequence[(prefix, year)], lateral_entry=bool(lateral_flags[i])
        )
        parsed = parse_roll_number(roll, today=today)
        if not parsed.success or parsed.data is None:
            raise RuntimeError(f"Invalid generated roll number: {roll}")

        lo = cfg.cgpa_edges[band_idx[i]]
        hi = cfg.cgpa_edges[band_idx[i] + 1]
        cgpa = round(float(g.uniform(lo, hi)), 2)

        first = str(g.choice(FIRST_NAMES))
        last = str(g.choice(LAST_NAMES))

        status = PlacementStatus()
        if placed_flags[i]:
            tier = tiers[int(tier_idx[i])]
            p_lo, p_hi = OFFER_PACKAGE_RANGES[tier]
            status = record_offer(
                status,
                PlacedOffer(
                    drive_id=f"seed_drive_{i}",
                    company_name="Seeded Company",
                    tier=tier,
                    package_lpa=round(float(g.uniform(p_lo, p_hi)), 2),
                    offer_date=today,
                ),
            )
        if debarred_flags[i]:
            status = debar(status, "Seeded debarment", on=today)

        students.append(
            Student(
                id=_student_id(parsed.data.roll_number),
                cgpa=cgpa,
                active_backlogs=_backlogs(g, cgpa),
                program_code=parsed.data.program_code,
                batch=parsed.data.batch,
                placement_status=status,
                name=f"{first} {last}",
                roll_number=parsed.data.roll_number,
                email=f"{first}.{last}@iips.edu.in".lower(),
            )
        )
    return students


def drive_status_for_deadline(days_until_deadline: int) -> DriveStatus:
    """Status a drive has relative to its application deadline."""
    if days_until_deadline < -5:
        return DriveStatus.COMPLETED
    if days_until_deadline < 0:
        return DriveStatus.CLOSED
    if days_until_deadline <= 7:
        return DriveStatus.OPEN
    return DriveStatus.UPCOMING


def create_drive(
    package_lpa: float,
    *,
    drive_id: str = "drive_1",
    company_name: str = "",
    status: DriveStatus = DriveStatus.OPEN,
    config: EligibilityConfig = DEFAULT_ELIGIBILITY_CONFIG,
) -> Drive:
    """
    Build a drive whose tier follows its package, with the portal's usual
    criteria for that tier (stricter CGPA and programs for higher tiers).
    """
    tier = tier_from_package(package_lpa, config)
    all_programs = [info.code for info in PROGRAM_PREFIX_MAP.values()]
    if tier is PlacementTier.SUPER_DREAM:
        criteria = DriveEligibility(
            min_cgpa=7.5, max_backlogs=0, allowed_programs=["MCA_INT", "MTECH_IT"]
        )
    elif tier is PlacementTier.DREAM:
        criteria = DriveEligibility(
            min_cgpa=7.0, max_backlogs=0, allowed_programs=all_programs
        )
    else:
        criteria = DriveEligibility(
            min_cgpa=6.0, max_backlogs=1, allowed_programs=all_programs
        )
    return Drive(
        id=drive_id,
        tier=tier,
        status=status,
        eligibility=criteria,
        company_name=company_name,
        package_lpa=package_lpa,
    )


# ----------------------------
# Convenience utilities
# ----------------------------
def students_to_dataframe(students: list[Student]) -> pd.DataFrame:
    rows = []
    for s in students:
        tier = s.placement_status.current_tier
        rows.append(
            {
                "id": s.id,
                "roll_number": s.roll_number,
                "name": s.name,
                "email": s.email,
                "program_code": s.program_code,
                "batch": s.batch,
                "cgpa": s.cgpa,
                "active_backlogs": s.active_backlogs,
                "is_placed": s.placement_status.is_placed,
                "current_tier": tier.value if tier else None,
                "is_debarred": s.placement_status.is_debarred,
            }
        )
    return pd.DataFrame(rows)
