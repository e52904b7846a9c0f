from __future__ import annotations

from .base import Check, CheckContext, CheckSpec, Verdict
from .engine import (
    EligibilityResult,
    EligibilityStats,
    batch_check_eligibility,
    check_eligibility,
    eligibility_stats,
    filter_eligible_students,
)
from .registry import default_check_specs, normalize_check_specs

__all__ = [
    "Check",
    "CheckContext",
    "CheckSpec",
    "Verdict",
    "EligibilityResult",
    "EligibilityStats",
    "batch_check_eligibility",
    "check_eligibility",
    "eligibility_stats",
    "filter_eligible_students",
    "default_check_specs",
    "normalize_check_specs",
]
