from __future__ import annotations

import math
from typing import Optional

from placement.config import DEFAULT_ELIGIBILITY_CONFIG, RUPEES_PER_LAKH, EligibilityConfig
from placement.enums import EligibilityState, PlacementTier, ensure_exhaustive
from placement.students import PlacementStatus

# Tiers a student in each state may still apply to (Dream Offer Policy)
ALLOWED_TIERS: dict[EligibilityState, tuple[PlacementTier, ...]] = {
    EligibilityState.UNPLACED: (
        PlacementTier.REGULAR,
        PlacementTier.DREAM,
        PlacementTier.SUPER_DREAM,
    ),
    EligibilityState.REGULAR_HOLDER: (PlacementTier.DREAM, PlacementTier.SUPER_DREAM),
    EligibilityState.DREAM_HOLDER: (PlacementTier.SUPER_DREAM,),
    EligibilityState.SUPER_DREAM_HOLDER: (),
    EligibilityState.DEBARRED: (),
}

_HOLDER_STATE: dict[PlacementTier, EligibilityState] = {
    PlacementTier.REGULAR: EligibilityState.REGULAR_HOLDER,
    PlacementTier.DREAM: EligibilityState.DREAM_HOLDER,
    PlacementTier.SUPER_DREAM: EligibilityState.SUPER_DREAM_HOLDER,
}

ensure_exhaustive(ALLOWED_TIERS, EligibilityState, "ALLOWED_TIERS")
ensure_exhaustive(_HOLDER_STATE, PlacementTier, "_HOLDER_STATE")


def placement_state(status: PlacementStatus) -> EligibilityState:
    if status.is_debarred:
        return EligibilityState.DEBARRED
    if not status.is_placed or status.current_tier is None:
        return EligibilityState.UNPLACED
    return _HOLDER_STATE[status.current_tier]


def available_tiers(status: PlacementStatus) -> list[PlacementTier]:
    return list(ALLOWED_TIERS[placement_state(status)])


def format_tier_name(tier: PlacementTier) -> str:
    return tier.label


def can_upgrade_offer(
    current_tier: Optional[PlacementTier], target_tier: PlacementTier
) -> bool:
    if current_tier is None:
        return True
    return target_tier > current_tier


def tier_from_package(
    package_lpa: float, config: EligibilityConfig = DEFAULT_ELIGIBILITY_CONFIG
) -> PlacementTier:
    amount = package_lpa * RUPEES_PER_LAKH
    if amount >= config.threshold(PlacementTier.SUPER_DREAM).min:
        return PlacementTier.SUPER_DREAM
    if amount >= config.threshold(PlacementTier.DREAM).min:
        return PlacementTier.DREAM
    return PlacementTier.REGULAR


def _lpa(amount: float) -> str:
    value = amount / RUPEES_PER_LAKH
    return f"{value:g}"


def tier_package_range(
    tier: PlacementTier, config: EligibilityConfig = DEFAULT_ELIGIBILITY_CONFIG
) -> str:
    """Display text such as "< 5 LPA", "5 - 10 LPA" or "> 10 LPA"."""
    if tier is PlacementTier.REGULAR:
        return f"< {_lpa(config.threshold(PlacementTier.DREAM).min)} LPA"
    band = config.threshold(tier)
    if tier is PlacementTier.SUPER_DREAM or math.isinf(band.max):
        return f"> {_lpa(band.min)} LPA"
    return f"{_lpa(band.min)} - {_lpa(band.max)} LPA"
