from __future__ import annotations

import logging
from typing import Sequence, Tuple, Type

from placement.eligibility.base import Check, CheckSpec
from placement.eligibility.checks import (
    AlreadyAppliedCheck,
    BacklogCheck,
    BatchCheck,
    CgpaCheck,
    DebarredCheck,
    DriveStatusCheck,
    ProgramCheck,
    TierCheck,
)

logger = logging.getLogger(__name__)

CheckTemplate = Tuple[Type[Check], int]

DEBARRED_CHECK_TEMPLATE: CheckTemplate = (DebarredCheck, 10)
DRIVE_STATUS_CHECK_TEMPLATE: CheckTemplate = (DriveStatusCheck, 20)
CGPA_CHECK_TEMPLATE: CheckTemplate = (CgpaCheck, 30)
BACKLOG_CHECK_TEMPLATE: CheckTemplate = (BacklogCheck, 40)
PROGRAM_CHECK_TEMPLATE: CheckTemplate = (ProgramCheck, 50)
BATCH_CHECK_TEMPLATE: CheckTemplate = (BatchCheck, 60)
TIER_CHECK_TEMPLATE: CheckTemplate = (TierCheck, 70)
ALREADY_APPLIED_CHECK_TEMPLATE: CheckTemplate = (AlreadyAppliedCheck, 80)

_DEFAULT_CHECK_TEMPLATES: list[CheckTemplate] = [
    DEBARRED_CHECK_TEMPLATE,
    DRIVE_STATUS_CHECK_TEMPLATE,
    CGPA_CHECK_TEMPLATE,
    BACKLOG_CHECK_TEMPLATE,
    PROGRAM_CHECK_TEMPLATE,
    BATCH_CHECK_TEMPLATE,
    TIER_CHECK_TEMPLATE,
    ALREADY_APPLIED_CHECK_TEMPLATE,
]


def default_check_specs() -> list[CheckSpec]:
    """Return fresh copies of the default check specifications."""
    return [CheckSpec(cls=cls, order=order) for cls, order in _DEFAULT_CHECK_TEMPLATES]


def normalize_check_specs(
    checks: Sequence[CheckSpec | Type[Check]] | None,
) -> list[CheckSpec]:
    """Turn user-provided checks into CheckSpec objects."""
    if checks is None:
        return default_check_specs()

    normalized: list[CheckSpec] = []
    for item in checks:
        if isinstance(item, CheckSpec):
            normalized.append(item)
        elif isinstance(item, type) and issubclass(item, Check):
            normalized.append(CheckSpec(cls=item))
        else:
            raise TypeError(
                "Checks must be CheckSpec instances or Check subclasses; "
                f"got {type(item)!r}"
            )
    return normalized


def build_checks(checks: Sequence[CheckSpec | Type[Check]] | None = None) -> list[Check]:
    """Instantiate enabled checks sorted by order (stable for equal orders)."""
    built: list[Check] = []
    for spec in normalize_check_specs(checks):
        if not spec.enabled:
            logger.debug("Skipping disabled check %s", spec.cls.__name__)
            continue
        check = spec.cls(**spec.settings)
        if spec.order is not None:
            check.order = spec.order
        if check.enabled:
            built.append(check)
    return sorted(built, key=lambda c: c.order)
