from __future__ import annotations

from datetime import datetime
from pathlib import Path

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
from matplotlib.colors import LinearSegmentedColormap

from placement.scheduling.allocator import AllocationResult
from placement.scheduling.config import parse_clock

from .text_report import get_active_report


def _save(fig: plt.Figure, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=fig.dpi, bbox_inches="tight")


def plot_panel_schedule(
    result: AllocationResult,
    path: str | Path | None = None,
    *,
    label_students: bool = True,
) -> plt.Figure | None:
    """
    Gantt chart of the interview day: one row per panel, one bar per slot.

    Returns the figure (or None when nothing was scheduled). When `path` is
    given the PNG is written there.
    """
    if not result.slots:
        return None

    panel_ids = list(result.statistics.slots_per_panel) or list(
        dict.fromkeys(s.panel_id for s in result.slots)
    )
    names = {s.panel_id: s.panel_name for s in result.slots}
    n = len(panel_ids)

    gradient = LinearSegmentedColormap.from_list(
        "green_blue_purple",
        ["#6EE7B7", "#34D399", "#3B82F6", "#6366F1", "#C4B5FD"],
    )
    denom = max(n - 1, 1)
    colors = {pid: gradient(i / denom) for i, pid in enumerate(panel_ids)}

    fig_height = 2 + n * 0.5
    fig, ax = plt.subplots(figsize=(9, fig_height), dpi=150)

    y_positions = {pid: y for pid, y in zip(panel_ids, range(n)[::-1])}
    for slot in result.slots:
        start = datetime.combine(slot.date, parse_clock(slot.start_time))
        end = datetime.combine(slot.date, parse_clock(slot.end_time))
        left = mdates.date2num(start)
        width = mdates.date2num(end) - left
        y = y_positions[slot.panel_id]
        ax.barh(
            y,
            width=width,
            left=left,
            height=0.7,
            color=colors[slot.panel_id],
            align="center",
            edgecolor="white",
            linewidth=0.8,
            alpha=0.9,
            zorder=3,
        )
        if label_students:
            ax.text(
                left + width / 2,
                y,
                slot.student_roll_number or slot.student_id,
                ha="center",
                va="center",
                fontsize=5,
                zorder=4,
            )

    ax.set_yticks(
        [y_positions[pid] for pid in panel_ids],
        [names.get(pid, pid) for pid in panel_ids],
    )
    ax.set_ylabel("Panel")
    ax.set_xlabel("Time of day")
    day = result.slots[0].formatted_date
    ax.set_title(
        f"Interview schedule {day} ({len(result.slots)} students, {n} panels)",
        fontsize=11,
    )
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%H:%M"))
    ax.set_ylim(-0.5, n - 0.5)
    for spine in ("top", "right"):
        ax.spines[spine].set_visible(False)
    ax.grid(axis="x", alpha=0.3, zorder=0)
    fig.tight_layout()

    if path is not None:
        _save(fig, Path(path))
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)
    return fig
