from __future__ import annotations

import csv
import logging
from collections import Counter
from typing import Iterable, Sequence

import pandas as pd

from placement.scheduling.allocator import AllocatedSlot
from placement.scheduling.config import InterviewPanel

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Slot #",
    "Date",
    "Time",
    "Panel",
    "Roll Number",
    "Student Name",
    "Email",
]

_FRAME_COLUMNS = [
    "slot_number",
    "date",
    "start_time",
    "end_time",
    "panel_id",
    "panel_name",
    "student_id",
    "student_roll_number",
    "student_name",
    "student_email",
    "status",
]


def slots_to_dataframe(slots: Iterable[AllocatedSlot]) -> pd.DataFrame:
    """One row per allocated slot, in slot-number order."""
    rows = [
        {
            "slot_number": s.slot_number,
            "date": s.date,
            "start_time": s.start_time,
            "end_time": s.end_time,
            "panel_id": s.panel_id,
            "panel_name": s.panel_name,
            "student_id": s.student_id,
            "student_roll_number": s.student_roll_number,
            "student_name": s.student_name,
            "student_email": s.student_email,
            "status": s.status.value,
        }
        for s in slots
    ]
    return pd.DataFrame(rows, columns=_FRAME_COLUMNS)


def export_slots_to_csv(slots: Sequence[AllocatedSlot]) -> str:
    """
    Render slots as CSV text: an unquoted header row, then one fully quoted row
    per slot, newline-joined without a trailing newline.
    """
    header = ",".join(CSV_HEADERS)
    if not slots:
        return header

    table = pd.DataFrame(
        [
            [
                str(s.slot_number),
                s.formatted_date,
                s.formatted_time,
                s.panel_name,
                s.student_roll_number,
                s.student_name,
                s.student_email,
            ]
            for s in slots
        ],
        columns=CSV_HEADERS,
    )
    body = table.to_csv(
        index=False, header=False, quoting=csv.QUOTE_ALL, lineterminator="\n"
    )
    return header + "\n" + body.rstrip("\n")


def _panel_keys(panels: Sequence[tuple[str, str]]) -> dict[str, str]:
    """Map panel id to its output key; a name shared by panels gets the id appended."""
    counts = Counter(name for _, name in panels)
    keys: dict[str, str] = {}
    for panel_id, name in panels:
        if counts[name] > 1:
            logger.warning(
                "Panel name %r is used by %d panels; exporting %s as %r",
                name,
                counts[name],
                panel_id,
                f"{name} ({panel_id})",
            )
            keys[panel_id] = f"{name} ({panel_id})"
        else:
            keys[panel_id] = name
    return keys


def export_slots_by_panel(
    slots: Sequence[AllocatedSlot],
    panels: Sequence[InterviewPanel] | None = None,
) -> dict[str, str]:
    """
    Split slots by panel id and return {panel name: CSV}.

    With `panels`, every listed panel gets an entry (header-only when it has
    no slots) in panel order; otherwise panels appear in first-slot order.
    Panels sharing a display name are keyed ``"<name> (<panel id>)"``.
    """
    if panels is not None:
        keys = _panel_keys([(panel.id, panel.name) for panel in panels])
        return {
            keys[panel.id]: export_slots_to_csv(
                [s for s in slots if s.panel_id == panel.id]
            )
            for panel in panels
        }

    grouped: dict[str, list[AllocatedSlot]] = {}
    names: dict[str, str] = {}
    for s in slots:
        grouped.setdefault(s.panel_id, []).append(s)
        names.setdefault(s.panel_id, s.panel_name)
    keys = _panel_keys(list(names.items()))
    return {keys[pid]: export_slots_to_csv(group) for pid, group in grouped.items()}
