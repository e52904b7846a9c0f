from __future__ import annotations

from .allocator import (
    AllocatedSlot,
    AllocationResult,
    AllocationStatistics,
    allocate_slots,
    transition_slot,
)
from .config import (
    InterviewPanel,
    LunchBreak,
    ScheduleConfig,
    panels_from_json,
    schedule_config_from_json,
    validate_schedule_config,
)
from .estimate import calculate_optimal_slot_duration
from .export import export_slots_by_panel, export_slots_to_csv, slots_to_dataframe
from .timeslots import TimeSlot, generate_time_slots

__all__ = [
    "AllocatedSlot",
    "AllocationResult",
    "AllocationStatistics",
    "allocate_slots",
    "transition_slot",
    "InterviewPanel",
    "LunchBreak",
    "ScheduleConfig",
    "panels_from_json",
    "schedule_config_from_json",
    "validate_schedule_config",
    "calculate_optimal_slot_duration",
    "export_slots_by_panel",
    "export_slots_to_csv",
    "slots_to_dataframe",
    "TimeSlot",
    "generate_time_slots",
]
