from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from placement.scheduling.config import ScheduleConfig, parse_clock


@dataclass(frozen=True)
class TimeSlot:
    start: str
    end: str

    @property
    def label(self) -> str:
        return f"{self.start} - {self.end}"


def _at(config: ScheduleConfig, clock: str) -> datetime:
    return datetime.combine(config.date, parse_clock(clock))


def generate_time_slots(config: ScheduleConfig) -> list[TimeSlot]:
    """
    Carve the working window into back-to-back slots.

    A slot is only emitted whole: if it would run past `end_time` generation
    stops, and if it touches the lunch break in any way (ending exactly at
    lunch start counts) the cursor jumps to lunch end and the same width is
    tried again. After each slot the cursor moves on by slot + break minutes.
    """
    if config.slot_duration <= 0:
        return []

    cursor = _at(config, config.start_time)
    day_end = _at(config, config.end_time)
    slot_len = timedelta(minutes=config.slot_duration)
    gap = timedelta(minutes=max(config.break_duration, 0))

    lunch = None
    if config.lunch_break is not None:
        lunch = (
            _at(config, config.lunch_break.start),
            _at(config, config.lunch_break.end),
        )

    slots: list[TimeSlot] = []
    while cursor < day_end:
        slot_end = cursor + slot_len
        if slot_end > day_end:
            break

        if lunch is not None and cursor < lunch[1] and slot_end >= lunch[0]:
            cursor = lunch[1]
            continue

        slots.append(TimeSlot(cursor.strftime("%H:%M"), slot_end.strftime("%H:%M")))
        cursor = slot_end + gap

    return slots
