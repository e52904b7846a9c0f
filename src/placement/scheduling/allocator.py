# placement/scheduling/allocator.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Optional, Protocol, Sequence

from placement.enums import SlotStatus
from placement.scheduling.config import InterviewPanel, ScheduleConfig
from placement.scheduling.timeslots import generate_time_slots

logger = logging.getLogger(__name__)


class Schedulable(Protocol):
    """Anything with the student fields a slot records (e.g. `Student`)."""

    @property
    def id(self) -> str: ...
    @property
    def name(self) -> str: ...
    @property
    def roll_number(self) -> str: ...
    @property
    def email(self) -> str: ...


@dataclass(frozen=True)
class AllocatedSlot:
    student_id: str
    student_name: str
    student_roll_number: str
    student_email: str
    panel_id: str
    panel_name: str
    date: date
    start_time: str
    end_time: str
    slot_number: int
    status: SlotStatus = SlotStatus.SCHEDULED

    @property
    def formatted_date(self) -> str:
        return self.date.strftime("%d %b %Y")

    @property
    def formatted_time(self) -> str:
        return f"{self.start_time} - {self.end_time}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "studentId": self.student_id,
            "studentName": self.student_name,
            "studentRollNumber": self.student_roll_number,
            "studentEmail": self.student_email,
            "panelId": self.panel_id,
            "panelName": self.panel_name,
            "date": self.date.isoformat(),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "status": self.status.value,
            "slotNumber": self.slot_number,
            "formattedDate": self.formatted_date,
            "formattedTime": self.formatted_time,
        }


@dataclass(frozen=True)
class AllocationStatistics:
    total_students: int = 0
    total_slots: int = 0
    slots_per_panel: dict[str, int] = field(default_factory=dict)
    estimated_end_time: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalStudents": self.total_students,
            "totalSlots": self.total_slots,
            "slotsPerPanel": dict(self.slots_per_panel),
            "estimatedEndTime": self.estimated_end_time,
        }


@dataclass(frozen=True)
class AllocationResult:
    """Structured output of an allocation run."""

    success: bool
    slots: list[AllocatedSlot]
    unassigned: list[Any]
    statistics: AllocationStatistics
    error: Optional[str] = None

    def slots_for_panel(self, panel_id: str) -> list[AllocatedSlot]:
        return [s for s in self.slots if s.panel_id == panel_id]

    def slot_for_student(self, student_id: str) -> Optional[AllocatedSlot]:
        return next((s for s in self.slots if s.student_id == student_id), None)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "success": self.success,
            "slots": [s.to_dict() for s in self.slots],
            "unassigned": [getattr(s, "id", s) for s in self.unassigned],
            "statistics": self.statistics.to_dict(),
        }
        if self.error is not None:
            out["error"] = self.error
        return out


def _failure(error: str, unassigned: Sequence[Any]) -> AllocationResult:
    return AllocationResult(
        success=False,
        slots=[],
        unassigned=list(unassigned),
        statistics=AllocationStatistics(),
        error=error,
    )


def allocate_slots(
    students: Sequence[Schedulable],
    panels: Sequence[InterviewPanel],
    config: ScheduleConfig,
) -> AllocationResult:
    """
    Assign students to (time slot, panel) pairs round-robin.

    Students are taken in input order. Panels cycle fastest: every panel gets
    time slot 0 before anyone gets time slot 1. When the time slots run out the
    remaining students are returned in `unassigned`, in their original order.

    Unsatisfiable inputs (no students, no panels, no time slots) come back as
    `success=False`; a capacity shortfall is only logged.
    """
    if not students:
        return _failure("No students provided for scheduling", [])
    if not panels:
        return _failure("No panels provided for scheduling", students)

    time_slots = generate_time_slots(config)
    if not time_slots:
        return _failure(
            "No valid time slots available with given configuration", students
        )

    capacity = len(time_slots) * len(panels)
    if capacity < len(students):
        logger.warning(
            "Not enough slots (%d) for all students (%d); %d will be unassigned",
            capacity,
            len(students),
            len(students) - capacity,
        )

    slots_per_panel = {panel.id: 0 for panel in panels}
    slots: list[AllocatedSlot] = []

    for i, student in enumerate(students[:capacity]):
        time_index, panel_index = divmod(i, len(panels))
        panel = panels[panel_index]
        window = time_slots[time_index]
        slots.append(
            AllocatedSlot(
                student_id=student.id,
                student_name=student.name,
                student_roll_number=student.roll_number,
                student_email=student.email,
                panel_id=panel.id,
                panel_name=panel.name,
                date=config.date,
                start_time=window.start,
                end_time=window.end,
                slot_number=i + 1,
            )
        )
        slots_per_panel[panel.id] += 1

    unassigned = list(students[capacity:])
    logger.info(
        "Allocated %d of %d students across %d panels and %d time slots",
        len(slots),
        len(students),
        len(panels),
        len(time_slots),
    )

    return AllocationResult(
        success=True,
        slots=slots,
        unassigned=unassigned,
        statistics=AllocationStatistics(
            total_students=len(students),
            total_slots=len(slots),
            slots_per_panel=slots_per_panel,
            estimated_end_time=slots[-1].end_time if slots else config.start_time,
        ),
    )


def transition_slot(slot: AllocatedSlot, status: SlotStatus) -> AllocatedSlot:
    """Move a slot along scheduled -> completed / no-show / rescheduled."""
    if not slot.status.can_transition_to(status):
        raise ValueError(
            f"Cannot move slot #{slot.slot_number} from {slot.status.value} "
            f"to {status.value}."
        )
    return replace(slot, status=status)
