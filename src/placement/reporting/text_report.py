from __future__ import annotations

from io import StringIO
from pathlib import Path
from typing import Mapping, Optional

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages

from placement.eligibility.engine import EligibilityResult, EligibilityStats
from placement.scheduling.allocator import AllocationResult
from placement.scheduling.export import slots_to_dataframe

from .metrics import panel_load_frame, panel_load_summary


class ReportDocument:
    """Collects printed report lines and figures, then writes them as one PDF."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.lines: list[str] = []
        self.figures: list[plt.Figure] = []

    def add_text(self, text: str) -> None:
        self.lines.append(text)

    def add_figure(self, fig: plt.Figure) -> None:
        self.figures.append(fig)

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(self.path) as pdf:
            if self.lines:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.01,
                    0.99,
                    "\n".join(self.lines),
                    ha="left",
                    va="top",
                    fontsize=8,
                    family="monospace",
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            elif not self.figures:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.5,
                    0.5,
                    "Report contains no data.",
                    ha="center",
                    va="center",
                    fontsize=12,
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            for fig in self.figures:
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)


_ACTIVE_REPORT: Optional[ReportDocument] = None


def set_active_report(doc: Optional[ReportDocument]) -> None:
    global _ACTIVE_REPORT
    _ACTIVE_REPORT = doc


def get_active_report() -> Optional[ReportDocument]:
    return _ACTIVE_REPORT


def _log_print(*args, **kwargs) -> None:
    buf = StringIO()
    kwargs_copy = kwargs.copy()
    kwargs_copy["file"] = buf
    print(*args, **kwargs_copy)
    print(*args, **kwargs)
    if _ACTIVE_REPORT is not None:
        _ACTIVE_REPORT.add_text(buf.getvalue().rstrip("\n"))


def _fmt_pct(x: float | None, nd: int = 1) -> str:
    if x is None or pd.isna(x):
        return "n/a"
    return f"{100 * float(x):.{nd}f}%"


def render_allocation_report(
    result: AllocationResult,
    *,
    capacity: int | None = None,
    num_print_examples: int = 6,
) -> None:
    """Print a summary of an allocation run (and mirror it into the active PDF)."""
    if not result.success:
        _log_print(f"Allocation failed: {result.error}")
        if result.unassigned:
            _log_print(f"{len(result.unassigned)} student(s) left unassigned.")
        return

    stats = result.statistics
    _log_print(
        f"Scheduled {stats.total_slots} of {stats.total_students} students; "
        f"last interview ends at {stats.estimated_end_time}."
    )

    summary = panel_load_summary(result, capacity=capacity)
    _log_print(
        f"Panels: {summary.panels} | mean per panel={summary.mean_per_panel:.2f} | "
        f"std={summary.std_per_panel:.2f} | spread={summary.spread} | "
        f"utilisation={_fmt_pct(summary.utilisation)}"
    )

    _log_print("\nSlots per panel:")
    _log_print(panel_load_frame(result).to_string(index=False))

    if result.slots:
        _log_print(f"\nFirst {num_print_examples} slots:")
        df = slots_to_dataframe(result.slots[:num_print_examples])
        _log_print(
            df[
                [
                    "slot_number",
                    "start_time",
                    "end_time",
                    "panel_name",
                    "student_roll_number",
                    "student_name",
                ]
            ].to_string(index=False)
        )

    if result.unassigned:
        ids = [getattr(s, "id", str(s)) for s in result.unassigned]
        preview = ", ".join(ids[:num_print_examples])
        more = f" (+{len(ids) - num_print_examples} more)" if len(ids) > num_print_examples else ""
        _log_print(
            f"\nNot enough slots: {len(ids)} student(s) unassigned: {preview}{more}"
        )
    else:
        _log_print("\nEvery student has a slot.")


def render_eligibility_report(
    stats: EligibilityStats,
    results: Mapping[str, EligibilityResult] | None = None,
    *,
    num_print_examples: int = 6,
) -> None:
    """Print eligibility totals and the most common blocking checks."""
    rate = stats.eligible / stats.total if stats.total else None
    _log_print(
        f"Eligibility: {stats.eligible} eligible / {stats.ineligible} ineligible "
        f"of {stats.total} ({_fmt_pct(rate)} eligible)"
    )
    if stats.blocked_reasons:
        _log_print("Blocked by:")
        for tag, count in sorted(
            stats.blocked_reasons.items(), key=lambda kv: (-kv[1], kv[0])
        ):
            _log_print(f"  - {tag}: {count}")
    elif stats.ineligible:
        _log_print("Ineligible students were blocked by debarment or drive status.")

    if results:
        upgrades = [sid for sid, r in results.items() if r.can_upgrade]
        if upgrades:
            _log_print(f"Upgrade candidates: {len(upgrades)}")
        ineligible = [(sid, r) for sid, r in results.items() if not r.eligible]
        if ineligible:
            _log_print(f"\nExample reasons (up to {num_print_examples}):")
            for sid, r in ineligible[:num_print_examples]:
                _log_print(f"  {sid}: {r.reason}")
