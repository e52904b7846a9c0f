from .config import DEFAULT_ELIGIBILITY_CONFIG, EligibilityConfig
from .eligibility import check_eligibility
from .enums import DriveStatus, EligibilityState, PlacementTier, SlotStatus
from .main import run_allocation
from .roll_parser import parse_roll_number
from .scheduling import InterviewPanel, ScheduleConfig, allocate_slots
from .students import Drive, Student

__all__ = [
    "DEFAULT_ELIGIBILITY_CONFIG",
    "EligibilityConfig",
    "check_eligibility",
    "DriveStatus",
    "EligibilityState",
    "PlacementTier",
    "SlotStatus",
    "run_allocation",
    "parse_roll_number",
    "InterviewPanel",
    "ScheduleConfig",
    "allocate_slots",
    "Drive",
    "Student",
]
