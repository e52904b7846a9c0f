from __future__ import annotations

import math

MIN_SLOT_MINUTES = 15
MAX_SLOT_MINUTES = 60
SLOT_STEP_MINUTES = 5


def calculate_optimal_slot_duration(
    student_count: int,
    panel_count: int,
    available_hours: float,
    break_duration: int = 5,
) -> int:
    """
    Largest slot length (minutes) that still fits every student.

    The result is rounded down to a multiple of 5 and clamped to [15, 60];
    the lower clamp means a very tight day can still overflow.
    """
    if panel_count <= 0:
        raise ValueError("panel_count must be > 0.")
    if student_count <= 0:
        return MAX_SLOT_MINUTES

    total_minutes = available_hours * 60
    slots_needed = math.ceil(student_count / panel_count)
    max_duration = math.floor(total_minutes / slots_needed) - break_duration

    optimal = max(
        MIN_SLOT_MINUTES, (max_duration // SLOT_STEP_MINUTES) * SLOT_STEP_MINUTES
    )
    return int(min(optimal, MAX_SLOT_MINUTES))
