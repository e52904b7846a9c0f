from __future__ import annotations

from .data_models import PanelLoadSummary
from .metrics import (
    blocked_reason_counts,
    eligibility_frame,
    panel_load_frame,
    panel_load_summary,
)
from .plots import plot_panel_schedule
from .text_report import (
    ReportDocument,
    get_active_report,
    render_allocation_report,
    render_eligibility_report,
    set_active_report,
)

__all__ = [
    "PanelLoadSummary",
    "blocked_reason_counts",
    "eligibility_frame",
    "panel_load_frame",
    "panel_load_summary",
    "plot_panel_schedule",
    "ReportDocument",
    "get_active_report",
    "render_allocation_report",
    "render_eligibility_report",
    "set_active_report",
]
