from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence, Type

from placement.config import DEFAULT_ELIGIBILITY_CONFIG, EligibilityConfig
from placement.eligibility.base import Check, CheckContext, CheckSpec
from placement.eligibility.registry import build_checks
from placement.enums import EligibilityState, PlacementTier
from placement.students import Drive, Student
from placement.tiers import format_tier_name, placement_state

CheckList = Sequence[CheckSpec | Type[Check]]


@dataclass(frozen=True)
class EligibilityResult:
    eligible: bool
    state: EligibilityState
    reason: str
    can_upgrade: bool
    current_tier: Optional[PlacementTier]
    target_tier: PlacementTier
    blocked_by: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "eligible": self.eligible,
            "state": self.state.value,
            "reason": self.reason,
            "canUpgrade": self.can_upgrade,
            "currentTier": self.current_tier.value if self.current_tier else None,
            "targetTier": self.target_tier.value,
            "blockedBy": list(self.blocked_by),
        }


@dataclass
class EligibilityStats:
    total: int = 0
    eligible: int = 0
    ineligible: int = 0
    blocked_reasons: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "eligible": self.eligible,
            "ineligible": self.ineligible,
            "blockedReasons": dict(self.blocked_reasons),
        }


def _evaluate(
    student: Student, drive: Drive, config: EligibilityConfig, checks: list[Check]
) -> EligibilityResult:
    status = student.placement_status
    ctx = CheckContext(
        student=student,
        drive=drive,
        config=config,
        state=placement_state(status),
    )

    for check in checks:
        verdict = check.evaluate(ctx)
        if verdict is not None:
            return EligibilityResult(
                eligible=False,
                state=ctx.state,
                reason=verdict.reason,
                can_upgrade=False,
                current_tier=status.current_tier,
                target_tier=drive.tier,
                blocked_by=verdict.blocked_by,
            )

    current = status.current_tier
    can_upgrade = (
        ctx.state is not EligibilityState.UNPLACED
        and current is not None
        and drive.tier > current
    )
    if can_upgrade and current is not None:
        reason = (
            f"You are eligible to upgrade from {format_tier_name(current)} "
            f"to {format_tier_name(drive.tier)}."
        )
    else:
        reason = "You meet all eligibility criteria for this drive."

    return EligibilityResult(
        eligible=True,
        state=ctx.state,
        reason=reason,
        can_upgrade=can_upgrade,
        current_tier=current,
        target_tier=drive.tier,
    )


def check_eligibility(
    student: Student,
    drive: Drive,
    config: EligibilityConfig = DEFAULT_ELIGIBILITY_CONFIG,
    checks: CheckList | None = None,
) -> EligibilityResult:
    """
    Decide whether `student` may apply to `drive`.

    Parameters
    ----------
    config:
        Tier thresholds and rule toggles; only the backlog fallback is read here.
    checks:
        Optional check list (CheckSpec or Check subclasses). `None` uses the
        default pipeline: debarment, drive status, CGPA, backlogs, program,
        batch, placement tier, already applied.

    Returns
    -------
    EligibilityResult
        Ineligibility is a normal outcome, reported through `eligible=False`
        with a reason and the tag of the blocking check.
    """
    return _evaluate(student, drive, config, build_checks(checks))


def batch_check_eligibility(
    students: Iterable[Student],
    drive: Drive,
    config: EligibilityConfig = DEFAULT_ELIGIBILITY_CONFIG,
    checks: CheckList | None = None,
) -> dict[str, EligibilityResult]:
    built = build_checks(checks)
    return {s.id: _evaluate(s, drive, config, built) for s in students}


def filter_eligible_students(
    students: Iterable[Student],
    drive: Drive,
    config: EligibilityConfig = DEFAULT_ELIGIBILITY_CONFIG,
    checks: CheckList | None = None,
) -> list[Student]:
    built = build_checks(checks)
    return [s for s in students if _evaluate(s, drive, config, built).eligible]


def eligibility_stats(
    students: Iterable[Student],
    drive: Drive,
    config: EligibilityConfig = DEFAULT_ELIGIBILITY_CONFIG,
    checks: CheckList | None = None,
) -> EligibilityStats:
    built = build_checks(checks)
    stats = EligibilityStats()
    for student in students:
        stats.total += 1
        result = _evaluate(student, drive, config, built)
        if result.eligible:
            stats.eligible += 1
            continue
        stats.ineligible += 1
        for tag in result.blocked_by:
            stats.blocked_reasons[tag] = stats.blocked_reasons.get(tag, 0) + 1
    return stats
