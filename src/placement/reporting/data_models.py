from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PanelLoadSummary:
    """How evenly an allocation spread students over its panels."""

    panels: int
    scheduled: int
    unassigned: int
    mean_per_panel: float
    std_per_panel: float
    spread: int  # max - min slots on any panel; round-robin keeps this <= 1
    utilisation: float | None  # scheduled / capacity, None when capacity unknown
