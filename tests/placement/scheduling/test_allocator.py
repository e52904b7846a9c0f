from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

import pytest

from placement.enums import SlotStatus
from placement.scheduling import (
    InterviewPanel,
    LunchBreak,
    ScheduleConfig,
    allocate_slots,
    transition_slot,
)

DAY = date(2026, 11, 2)


@dataclass(frozen=True)
class Candidate:
    id: str
    name: str = ""
    roll_number: str = ""
    email: str = ""


def _students(n: int) -> list[Candidate]:
    return [
        Candidate(
            id=f"s{i}",
            name=f"Student {i}",
            roll_number=f"IC-2K22-{i}",
            email=f"s{i}@iips.edu.in",
        )
        for i in range(1, n + 1)
    ]


def _config(start: str = "09:00", end: str = "11:00", slot: int = 30) -> ScheduleConfig:
    return ScheduleConfig(date=DAY, start_time=start, end_time=end, slot_duration=slot)


def test_round_robin_scenario(two_panels) -> None:
    result = allocate_slots(_students(5), two_panels, _config())

    assert result.success and result.error is None
    assert result.unassigned == []
    assert result.statistics.slots_per_panel == {"P1": 3, "P2": 2}
    assert [(s.student_id, s.panel_id, s.start_time) for s in result.slots] == [
        ("s1", "P1", "09:00"),
        ("s2", "P2", "09:00"),
        ("s3", "P1", "09:30"),
        ("s4", "P2", "09:30"),
        ("s5", "P1", "10:00"),
    ]
    assert [s.slot_number for s in result.slots] == [1, 2, 3, 4, 5]
    assert result.statistics.total_students == 5
    assert result.statistics.total_slots == 5
    assert result.statistics.estimated_end_time == "10:30"


def test_slots_copy_student_and_panel_fields(two_panels) -> None:
    slot = allocate_slots(_students(1), two_panels, _config()).slots[0]
    assert slot.student_name == "Student 1"
    assert slot.student_roll_number == "IC-2K22-1"
    assert slot.student_email == "s1@iips.edu.in"
    assert slot.panel_name == "Panel A"
    assert slot.date == DAY
    assert slot.status is SlotStatus.SCHEDULED
    assert slot.formatted_date == "02 Nov 2026"
    assert slot.formatted_time == "09:00 - 09:30"


def test_load_is_balanced(two_panels) -> None:
    result = allocate_slots(_students(10), two_panels, _config(end="13:00"))
    counts = result.statistics.slots_per_panel
    assert max(counts.values()) - min(counts.values()) <= 1
    assert sum(counts.values()) == 10


def test_no_double_booking(two_panels) -> None:
    result = allocate_slots(_students(8), two_panels, _config())
    pairs = [(s.panel_id, s.start_time) for s in result.slots]
    assert len(pairs) == len(set(pairs))


def test_overflow_goes_to_unassigned_in_order(two_panels, caplog) -> None:
    students = _students(8)
    with caplog.at_level(logging.WARNING, logger="placement.scheduling.allocator"):
        result = allocate_slots(students, two_panels, _config(end="10:30"))

    assert result.success
    assert len(result.slots) == 6
    assert result.unassigned == students[6:]
    assert result.slot_for_student("s7") is None
    assert "Not enough slots" in caplog.text


def test_failures_return_structured_errors(two_panels) -> None:
    empty = allocate_slots([], two_panels, _config())
    assert not empty.success
    assert empty.error == "No students provided for scheduling"
    assert empty.unassigned == []

    students = _students(3)
    no_panels = allocate_slots(students, [], _config())
    assert no_panels.error == "No panels provided for scheduling"
    assert no_panels.unassigned == students
    assert no_panels.slots == []

    no_time = allocate_slots(students, two_panels, _config(start="09:00", end="09:10"))
    assert no_time.error == "No valid time slots available with given configuration"
    assert no_time.unassigned == students
    assert no_time.statistics.total_slots == 0


def test_lunch_covering_the_whole_window_fails(two_panels) -> None:
    students = _students(2)
    config = ScheduleConfig(
        date=DAY,
        start_time="12:00",
        end_time="13:00",
        slot_duration=30,
        lunch_break=LunchBreak("12:00", "13:00"),
    )
    result = allocate_slots(students, two_panels, config)
    assert result.success is False
    assert result.error == "No valid time slots available with given configuration"
    assert result.unassigned == students
    assert result.slots == []


def test_allocation_is_deterministic(two_panels) -> None:
    students = _students(7)
    assert allocate_slots(students, two_panels, _config()) == allocate_slots(
        students, two_panels, _config()
    )


def test_lookup_helpers(two_panels) -> None:
    result = allocate_slots(_students(5), two_panels, _config())
    assert [s.student_id for s in result.slots_for_panel("P2")] == ["s2", "s4"]
    found = result.slot_for_student("s3")
    assert found is not None and found.panel_id == "P1"


def test_result_to_dict(two_panels) -> None:
    students = _students(3)
    single = [InterviewPanel(id="P1", name="Panel A")]
    payload = allocate_slots(students, single, _config(end="10:00")).to_dict()
    assert payload["success"] is True
    assert payload["unassigned"] == ["s3"]
    assert payload["statistics"] == {
        "totalStudents": 3,
        "totalSlots": 2,
        "slotsPerPanel": {"P1": 2},
        "estimatedEndTime": "10:00",
    }
    first = payload["slots"][0]
    assert first["studentId"] == "s1"
    assert first["date"] == "2026-11-02"
    assert first["status"] == "scheduled"
    assert first["formattedTime"] == "09:00 - 09:30"
    assert "error" not in payload


def test_transition_slot(two_panels) -> None:
    slot = allocate_slots(_students(1), two_panels, _config()).slots[0]
    done = transition_slot(slot, SlotStatus.COMPLETED)
    assert done.status is SlotStatus.COMPLETED
    assert slot.status is SlotStatus.SCHEDULED

    with pytest.raises(ValueError, match="Cannot move slot #1"):
        transition_slot(done, SlotStatus.NO_SHOW)
