from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Mapping, Optional

from placement.jsonio import json_entries, normalize_date, read_json


def parse_clock(value: str) -> time:
    """Parse an ``HH:mm`` string."""
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid time {value!r}; expected HH:mm") from exc


def minutes_of_day(value: str) -> int:
    t = parse_clock(value)
    return t.hour * 60 + t.minute


@dataclass(frozen=True)
class LunchBreak:
    start: str
    end: str


@dataclass(frozen=True)
class ScheduleConfig:
    """
    One interview day.

    start_time / end_time / lunch_break use ``HH:mm``; durations are minutes.
    """

    date: date
    start_time: str = "09:00"
    end_time: str = "17:00"
    slot_duration: int = 30
    break_duration: int = 0
    lunch_break: Optional[LunchBreak] = None
    drive_id: str = ""

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ScheduleConfig":
        day = normalize_date(raw.get("date"), "date")
        if day is None:
            raise ValueError("Schedule config requires a 'date'.")
        lunch = raw.get("lunchBreak")
        try:
            slot_duration = int(raw.get("slotDuration", 30))
            break_duration = int(raw.get("breakDuration") or 0)
        except (TypeError, ValueError) as exc:
            raise ValueError("slotDuration/breakDuration must be integers.") from exc
        return cls(
            date=day,
            start_time=str(raw.get("startTime", "09:00")),
            end_time=str(raw.get("endTime", "17:00")),
            slot_duration=slot_duration,
            break_duration=break_duration,
            lunch_break=LunchBreak(str(lunch["start"]), str(lunch["end"])) if lunch else None,
            drive_id=str(raw.get("driveId", "")),
        )


@dataclass(frozen=True)
class InterviewPanel:
    id: str
    name: str
    interviewers: tuple[str, ...] = field(default_factory=tuple)
    room: Optional[str] = None
    # Not enforced by the allocator beyond one student per panel per slot
    capacity: int = 1

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "InterviewPanel":
        if not isinstance(raw, Mapping):
            raise TypeError("Each panel entry must be an object/dict.")
        if raw.get("id") in (None, ""):
            raise ValueError("Panel entry missing 'id'.")
        return cls(
            id=str(raw["id"]),
            name=str(raw.get("name") or raw["id"]),
            interviewers=tuple(str(i) for i in raw.get("interviewers") or ()),
            room=raw.get("room"),
            capacity=int(raw.get("capacity", 1)),
        )


def panels_from_json(path: str | Path) -> list[InterviewPanel]:
    data = read_json(path, "panels_from_json")
    return [InterviewPanel.from_dict(r) for r in json_entries(data, ("panels",), "panel")]


def schedule_config_from_json(path: str | Path) -> ScheduleConfig:
    data = read_json(path, "schedule_config_from_json")
    if not isinstance(data, Mapping):
        raise TypeError("Schedule config JSON must be an object.")
    return ScheduleConfig.from_dict(data)


def validate_schedule_config(config: ScheduleConfig) -> list[str]:
    """Return human-readable problems with `config`; an empty list means usable."""
    errors: list[str] = []

    if config.slot_duration < 10:
        errors.append("Slot duration should be at least 10 minutes")
    if config.slot_duration > 120:
        errors.append("Slot duration should not exceed 120 minutes")
    if config.break_duration < 0:
        errors.append("Break duration cannot be negative")

    try:
        start = minutes_of_day(config.start_time)
        end = minutes_of_day(config.end_time)
    except ValueError as exc:
        errors.append(str(exc))
        return errors

    if start >= end:
        errors.append("End time must be after start time")

    if config.lunch_break is not None:
        try:
            lunch_start = minutes_of_day(config.lunch_break.start)
            lunch_end = minutes_of_day(config.lunch_break.end)
        except ValueError as exc:
            errors.append(str(exc))
            return errors
        if lunch_start < start or lunch_end > end:
            errors.append("Lunch break must be within schedule hours")
        if lunch_start >= lunch_end:
            errors.append("Lunch break end must be after its start")

    return errors
