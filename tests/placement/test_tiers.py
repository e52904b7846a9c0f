from __future__ import annotations

import pytest

from placement.config import EligibilityConfig, TierThreshold
from placement.enums import EligibilityState, PlacementTier
from placement.students import PlacedOffer, PlacementStatus, debar, record_offer
from placement.tiers import (
    available_tiers,
    can_upgrade_offer,
    format_tier_name,
    placement_state,
    tier_from_package,
    tier_package_range,
)


def _holding(tier: PlacementTier) -> PlacementStatus:
    return record_offer(
        PlacementStatus(),
        PlacedOffer(drive_id="d0", company_name="Acme", tier=tier, package_lpa=4.0),
    )


def test_placement_state_follows_status() -> None:
    assert placement_state(PlacementStatus()) is EligibilityState.UNPLACED
    assert placement_state(_holding(PlacementTier.REGULAR)) is EligibilityState.REGULAR_HOLDER
    assert placement_state(_holding(PlacementTier.DREAM)) is EligibilityState.DREAM_HOLDER
    assert (
        placement_state(_holding(PlacementTier.SUPER_DREAM))
        is EligibilityState.SUPER_DREAM_HOLDER
    )


def test_debarment_overrides_held_tier() -> None:
    status = debar(_holding(PlacementTier.DREAM), "misconduct")
    assert placement_state(status) is EligibilityState.DEBARRED
    assert available_tiers(status) == []


def test_placed_without_tier_counts_as_unplaced() -> None:
    status = PlacementStatus(is_placed=True, current_tier=None)
    assert placement_state(status) is EligibilityState.UNPLACED


def test_available_tiers_are_strictly_higher() -> None:
    assert available_tiers(PlacementStatus()) == list(PlacementTier)
    assert available_tiers(_holding(PlacementTier.REGULAR)) == [
        PlacementTier.DREAM,
        PlacementTier.SUPER_DREAM,
    ]
    assert available_tiers(_holding(PlacementTier.DREAM)) == [PlacementTier.SUPER_DREAM]
    assert available_tiers(_holding(PlacementTier.SUPER_DREAM)) == []


def test_can_upgrade_offer() -> None:
    assert can_upgrade_offer(None, PlacementTier.REGULAR)
    assert can_upgrade_offer(PlacementTier.REGULAR, PlacementTier.DREAM)
    assert not can_upgrade_offer(PlacementTier.DREAM, PlacementTier.DREAM)
    assert not can_upgrade_offer(PlacementTier.SUPER_DREAM, PlacementTier.DREAM)


@pytest.mark.parametrize(
    "lpa, tier",
    [
        (0.0, PlacementTier.REGULAR),
        (4.99, PlacementTier.REGULAR),
        (5.0, PlacementTier.DREAM),
        (9.99, PlacementTier.DREAM),
        (10.0, PlacementTier.SUPER_DREAM),
        (42.0, PlacementTier.SUPER_DREAM),
    ],
)
def test_tier_from_package_boundaries(lpa: float, tier: PlacementTier) -> None:
    assert tier_from_package(lpa) is tier


def test_tier_from_package_uses_config() -> None:
    cfg = EligibilityConfig(
        thresholds={
            PlacementTier.REGULAR: TierThreshold(0, 600_000),
            PlacementTier.DREAM: TierThreshold(600_000, 1_200_000),
            PlacementTier.SUPER_DREAM: TierThreshold(1_200_000),
        }
    )
    assert tier_from_package(5.5, cfg) is PlacementTier.REGULAR
    assert tier_from_package(11.0, cfg) is PlacementTier.DREAM
    assert tier_package_range(PlacementTier.DREAM, cfg) == "6 - 12 LPA"


def test_display_helpers() -> None:
    assert format_tier_name(PlacementTier.SUPER_DREAM) == "Super Dream"
    assert tier_package_range(PlacementTier.REGULAR) == "< 5 LPA"
    assert tier_package_range(PlacementTier.DREAM) == "5 - 10 LPA"
    assert tier_package_range(PlacementTier.SUPER_DREAM) == "> 10 LPA"
