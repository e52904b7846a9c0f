from __future__ import annotations

from placement.eligibility.base import Check, CheckContext, Verdict
from placement.enums import EligibilityState, PlacementTier, ensure_exhaustive
from placement.tiers import ALLOWED_TIERS, format_tier_name

STATE_DESCRIPTIONS: dict[EligibilityState, str] = {
    EligibilityState.UNPLACED: (
        "You are currently unplaced and eligible for all placement drives."
    ),
    EligibilityState.REGULAR_HOLDER: (
        "You hold a Regular offer. You can only apply for Dream and Super Dream drives."
    ),
    EligibilityState.DREAM_HOLDER: (
        "You hold a Dream offer. You can only apply for Super Dream drives."
    ),
    EligibilityState.SUPER_DREAM_HOLDER: (
        "You hold a Super Dream offer. Your placement journey is complete!"
    ),
    EligibilityState.DEBARRED: "You have been debarred from placement activities.",
}

ensure_exhaustive(STATE_DESCRIPTIONS, EligibilityState, "STATE_DESCRIPTIONS")


class DebarredCheck(Check):
    order = 10
    name = "Debarred"

    def evaluate(self, ctx: CheckContext) -> Verdict | None:
        if ctx.state is not EligibilityState.DEBARRED:
            return None
        return self.block(
            "You have been debarred from placement activities. "
            "Please contact the TPO office."
        )


class DriveStatusCheck(Check):
    order = 20
    name = "DriveStatus"

    def evaluate(self, ctx: CheckContext) -> Verdict | None:
        status = ctx.drive.status
        if status.accepts_applications:
            return None
        return self.block(
            f"This drive is currently {status.value}. "
            "Applications are not being accepted."
        )


class CgpaCheck(Check):
    order = 30
    name = "CGPA"
    tag = "CGPA"

    def evaluate(self, ctx: CheckContext) -> Verdict | None:
        required = ctx.drive.eligibility.min_cgpa
        if ctx.student.cgpa >= required:
            return None
        return self.block(
            f"Your CGPA ({ctx.student.cgpa:.2f}) does not meet the minimum "
            f"requirement ({required:.2f})."
        )


class BacklogCheck(Check):
    """
    Drive-specific backlog limit. When the drive sets none the `max_backlogs`
    setting applies, then EligibilityRules.max_backlogs_allowed.
    """

    order = 40
    name = "Backlogs"
    tag = "Backlogs"

    def evaluate(self, ctx: CheckContext) -> Verdict | None:
        limit = ctx.drive.eligibility.max_backlogs
        if limit is None:
            limit = self.setting("max_backlogs", ctx.config.rules.max_backlogs_allowed)
        backlogs = ctx.student.active_backlogs
        if backlogs <= limit:
            return None
        return self.block(
            f"You have {backlogs} active backlog(s). Maximum allowed: {limit}."
        )


class ProgramCheck(Check):
    order = 50
    name = "Program"
    tag = "Program"

    def evaluate(self, ctx: CheckContext) -> Verdict | None:
        allowed = ctx.drive.eligibility.allowed_programs
        if not allowed or ctx.student.program_code in allowed:
            return None
        return self.block(
            f"Your program ({ctx.student.program_code}) is not eligible for this drive."
        )


class BatchCheck(Check):
    order = 60
    name = "Batch"
    tag = "Batch"

    def evaluate(self, ctx: CheckContext) -> Verdict | None:
        allowed = ctx.drive.eligibility.allowed_batches
        if not allowed or ctx.student.batch in allowed:
            return None
        return self.block(
            f"Your batch ({ctx.student.batch}) is not eligible for this drive."
        )


class TierCheck(Check):
    """Dream Offer Policy: only strictly higher tiers stay open once placed."""

    order = 70
    name = "PlacementTier"
    tag = "Placement Tier"

    def evaluate(self, ctx: CheckContext) -> Verdict | None:
        target = ctx.drive.tier
        if target in ALLOWED_TIERS[ctx.state]:
            return None
        return self.block(self._reason(ctx, target))

    @staticmethod
    def _reason(ctx: CheckContext, target: PlacementTier) -> str:
        current = ctx.student.placement_status.current_tier
        current_label = format_tier_name(current) if current else "none"
        target_label = format_tier_name(target)

        if ctx.state is EligibilityState.SUPER_DREAM_HOLDER:
            return (
                "Congratulations! You already hold a Super Dream offer. Your placement "
                "journey is complete and you cannot apply to more drives."
            )
        if ctx.state is EligibilityState.DREAM_HOLDER:
            return (
                "You hold a Dream offer and can only apply to Super Dream drives. "
                f"This is a {target_label} drive."
            )
        if ctx.state is EligibilityState.REGULAR_HOLDER:
            if target is PlacementTier.REGULAR:
                return (
                    "You already hold a Regular offer. You cannot apply to another "
                    "Regular drive. Only Dream and Super Dream drives are available to you."
                )
            return (
                f"You hold a {current_label} offer. "
                "Only Dream and Super Dream drives are available."
            )
        return STATE_DESCRIPTIONS[ctx.state]


class AlreadyAppliedCheck(Check):
    order = 80
    name = "AlreadyApplied"
    tag = "Already Applied"

    def evaluate(self, ctx: CheckContext) -> Verdict | None:
        if ctx.drive.id not in ctx.student.applied_drives:
            return None
        return self.block("You have already applied to this drive.")
