from __future__ import annotations

import pytest

from placement.enums import (
    ApplicationStatus,
    DriveStatus,
    PlacementTier,
    SlotStatus,
    ensure_exhaustive,
)


def test_tiers_are_totally_ordered() -> None:
    assert PlacementTier.REGULAR < PlacementTier.DREAM < PlacementTier.SUPER_DREAM
    assert PlacementTier.SUPER_DREAM >= PlacementTier.DREAM
    assert sorted(
        [PlacementTier.SUPER_DREAM, PlacementTier.REGULAR, PlacementTier.DREAM]
    ) == [PlacementTier.REGULAR, PlacementTier.DREAM, PlacementTier.SUPER_DREAM]


def test_tier_parse_folds_legacy_spelling() -> None:
    assert PlacementTier.parse("super_dream") is PlacementTier.SUPER_DREAM
    assert PlacementTier.parse("superDream") is PlacementTier.SUPER_DREAM
    assert PlacementTier.parse(" dream ") is PlacementTier.DREAM
    assert PlacementTier.parse(PlacementTier.REGULAR) is PlacementTier.REGULAR


def test_tier_parse_rejects_unknown_values() -> None:
    with pytest.raises(ValueError):
        PlacementTier.parse("platinum")
    with pytest.raises(TypeError):
        PlacementTier.parse(3)


def test_tier_labels() -> None:
    assert [t.label for t in PlacementTier] == ["Regular", "Dream", "Super Dream"]


@pytest.mark.parametrize(
    "status, accepts",
    [
        (DriveStatus.UPCOMING, True),
        (DriveStatus.OPEN, True),
        (DriveStatus.REGISTRATION_OPEN, True),
        (DriveStatus.DRAFT, False),
        (DriveStatus.CLOSED, False),
        (DriveStatus.IN_PROGRESS, False),
        (DriveStatus.COMPLETED, False),
        (DriveStatus.CANCELLED, False),
    ],
)
def test_drive_status_accepts_applications(status: DriveStatus, accepts: bool) -> None:
    assert status.accepts_applications is accepts


def test_application_final_states() -> None:
    finals = {s for s in ApplicationStatus if s.is_final}
    assert finals == {
        ApplicationStatus.SELECTED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.WITHDRAWN,
    }


def test_slot_status_transitions_only_leave_scheduled() -> None:
    assert SlotStatus.SCHEDULED.can_transition_to(SlotStatus.COMPLETED)
    assert SlotStatus.SCHEDULED.can_transition_to(SlotStatus.NO_SHOW)
    assert SlotStatus.SCHEDULED.can_transition_to(SlotStatus.RESCHEDULED)
    for terminal in (SlotStatus.COMPLETED, SlotStatus.NO_SHOW, SlotStatus.RESCHEDULED):
        assert not any(terminal.can_transition_to(s) for s in SlotStatus)


def test_ensure_exhaustive_reports_missing_members() -> None:
    with pytest.raises(RuntimeError, match="superDream"):
        ensure_exhaustive(
            {PlacementTier.REGULAR: 1, PlacementTier.DREAM: 2}, PlacementTier, "demo"
        )
