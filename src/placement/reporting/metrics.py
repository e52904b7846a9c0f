from __future__ import annotations

from typing import Mapping

import numpy as np
import pandas as pd

from placement.eligibility.engine import EligibilityResult
from placement.scheduling.allocator import AllocationResult

from .data_models import PanelLoadSummary

_PANEL_LOAD_COLUMNS = ["panel_id", "panel_name", "slots", "first_start", "last_end"]
_ELIGIBILITY_COLUMNS = [
    "student_id",
    "eligible",
    "state",
    "current_tier",
    "target_tier",
    "can_upgrade",
    "blocked_by",
    "reason",
]


def panel_load_frame(result: AllocationResult) -> pd.DataFrame:
    """Per-panel slot counts and first/last times, in panel order."""
    per_panel = result.statistics.slots_per_panel
    if not per_panel:
        return pd.DataFrame(columns=_PANEL_LOAD_COLUMNS)

    rows = []
    for panel_id, count in per_panel.items():
        slots = result.slots_for_panel(panel_id)
        rows.append(
            {
                "panel_id": panel_id,
                "panel_name": slots[0].panel_name if slots else panel_id,
                "slots": int(count),
                "first_start": slots[0].start_time if slots else None,
                "last_end": slots[-1].end_time if slots else None,
            }
        )
    return pd.DataFrame(rows, columns=_PANEL_LOAD_COLUMNS)


def panel_load_summary(
    result: AllocationResult, capacity: int | None = None
) -> PanelLoadSummary:
    """
    Summarise panel fill for an allocation.

    `capacity` is the number of (time slot, panel) pairs that were available;
    pass ``len(generate_time_slots(config)) * len(panels)`` to get utilisation.
    """
    counts = np.asarray(list(result.statistics.slots_per_panel.values()), dtype=float)
    scheduled = len(result.slots)

    if counts.size:
        mean = float(np.mean(counts))
        std = float(np.std(counts, ddof=1)) if counts.size > 1 else 0.0
        spread = int(np.max(counts) - np.min(counts))
    else:
        mean, std, spread = 0.0, 0.0, 0

    utilisation = scheduled / capacity if capacity else None
    return PanelLoadSummary(
        panels=int(counts.size),
        scheduled=scheduled,
        unassigned=len(result.unassigned),
        mean_per_panel=mean,
        std_per_panel=std,
        spread=spread,
        utilisation=utilisation,
    )


def eligibility_frame(results: Mapping[str, EligibilityResult]) -> pd.DataFrame:
    """One row per student from `batch_check_eligibility` output."""
    rows = [
        {
            "student_id": student_id,
            "eligible": r.eligible,
            "state": r.state.value,
            "current_tier": r.current_tier.value if r.current_tier else None,
            "target_tier": r.target_tier.value,
            "can_upgrade": r.can_upgrade,
            "blocked_by": ", ".join(r.blocked_by),
            "reason": r.reason,
        }
        for student_id, r in results.items()
    ]
    return pd.DataFrame(rows, columns=_ELIGIBILITY_COLUMNS)


def blocked_reason_counts(results: Mapping[str, EligibilityResult]) -> pd.Series:
    """Count blocking tags across ineligible results, most common first."""
    tags = [tag for r in results.values() if not r.eligible for tag in r.blocked_by]
    if not tags:
        return pd.Series(dtype=int, name="students")
    return pd.Series(tags).value_counts().rename("students")
