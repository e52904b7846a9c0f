from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Protocol

from placement.enums import PlacementTier
from placement.jsonio import read_json

RUPEES_PER_LAKH = 100_000


@dataclass(frozen=True)
class TierThreshold:
    """Absolute package range `[min, max)` in rupees for one tier."""

    min: float
    max: float = math.inf


def _default_thresholds() -> dict[PlacementTier, TierThreshold]:
    return {
        PlacementTier.REGULAR: TierThreshold(0, 500_000),
        PlacementTier.DREAM: TierThreshold(500_000, 1_000_000),
        PlacementTier.SUPER_DREAM: TierThreshold(1_000_000, math.inf),
    }


@dataclass(frozen=True)
class EligibilityRules:
    allow_multiple_regular: bool = False
    allow_backlog_students: bool = False

    # Used when a drive does not set its own backlog limit
    max_backlogs_allowed: int = 0

    allow_debarred_after_period: bool = False
    debarment_period_days: int = 365


@dataclass(frozen=True)
class EligibilityConfig:
    # Package thresholds per tier (absolute rupees)
    thresholds: Mapping[PlacementTier, TierThreshold] = field(
        default_factory=_default_thresholds
    )

    rules: EligibilityRules = field(default_factory=EligibilityRules)

    updated_by: str = "system"

    def __post_init__(self) -> None:
        object.__setattr__(self, "thresholds", MappingProxyType(dict(self.thresholds)))

    def threshold(self, tier: PlacementTier) -> TierThreshold:
        return self.thresholds[tier]

    def validate(self) -> None:
        """
        Validate that the thresholds partition [0, inf) into three contiguous
        ranges ordered regular < dream < superDream.
        """
        ordered = sorted(PlacementTier, key=lambda t: t.rank)
        missing = [t.value for t in ordered if t not in self.thresholds]
        if missing:
            raise ValueError(f"Missing tier thresholds for: {', '.join(missing)}.")

        bounds = [self.thresholds[t] for t in ordered]
        if bounds[0].min != 0:
            raise ValueError("The regular tier must start at 0.")
        if not math.isinf(bounds[-1].max):
            raise ValueError("The superDream tier must be unbounded above.")
        for tier, band in zip(ordered, bounds):
            if not band.min < band.max:
                raise ValueError(f"Threshold for {tier.value} must satisfy min < max.")
        for (lo_tier, lo), (hi_tier, hi) in zip(
            zip(ordered, bounds), zip(ordered[1:], bounds[1:])
        ):
            if lo.max != hi.min:
                raise ValueError(
                    f"Thresholds for {lo_tier.value} and {hi_tier.value} must be "
                    f"contiguous (got max={lo.max}, min={hi.min})."
                )
        if self.rules.max_backlogs_allowed < 0:
            raise ValueError("max_backlogs_allowed must be non-negative.")
        if self.rules.debarment_period_days < 0:
            raise ValueError("debarment_period_days must be non-negative.")


DEFAULT_ELIGIBILITY_CONFIG = EligibilityConfig()


class EligibilityConfigProvider(Protocol):
    """Source of the eligibility config for a call site."""

    def get_config(self) -> EligibilityConfig: ...


class StaticConfigProvider:
    def __init__(self, config: EligibilityConfig = DEFAULT_ELIGIBILITY_CONFIG) -> None:
        config.validate()
        self._config = config

    def get_config(self) -> EligibilityConfig:
        return self._config


class JsonConfigProvider:
    """Reads the config from a JSON file on each call, falling back to the default."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def get_config(self) -> EligibilityConfig:
        if not self.path.exists():
            return DEFAULT_ELIGIBILITY_CONFIG
        return eligibility_config_from_json(self.path)


def eligibility_config_from_dict(raw: Mapping[str, Any]) -> EligibilityConfig:
    """
    Build a validated EligibilityConfig from the portal's stored shape:

        {"thresholds": {"regular": {"min": 0, "max": 500000}, ...},
         "rules": {"maxBacklogsAllowed": 0, ...},
         "updatedBy": "admin"}

    Missing sections fall back to the defaults; a null/absent `max` is unbounded.
    """
    thresholds = dict(_default_thresholds())
    raw_thresholds = raw.get("thresholds") or {}
    if not isinstance(raw_thresholds, Mapping):
        raise TypeError("'thresholds' must be an object.")
    for key, band in raw_thresholds.items():
        tier = PlacementTier.parse(key)
        if not isinstance(band, Mapping):
            raise TypeError(f"Threshold for {key!r} must be an object.")
        upper = band.get("max")
        thresholds[tier] = TierThreshold(
            min=_to_number(band.get("min", 0), f"thresholds.{key}.min"),
            max=math.inf if upper is None else _to_number(upper, f"thresholds.{key}.max"),
        )

    raw_rules = raw.get("rules") or {}
    if not isinstance(raw_rules, Mapping):
        raise TypeError("'rules' must be an object.")
    defaults = EligibilityRules()
    rules = EligibilityRules(
        allow_multiple_regular=bool(
            raw_rules.get("allowMultipleRegular", defaults.allow_multiple_regular)
        ),
        allow_backlog_students=bool(
            raw_rules.get("allowBacklogStudents", defaults.allow_backlog_students)
        ),
        max_backlogs_allowed=int(
            raw_rules.get("maxBacklogsAllowed", defaults.max_backlogs_allowed)
        ),
        allow_debarred_after_period=bool(
            raw_rules.get(
                "allowDebarredAfterPeriod", defaults.allow_debarred_after_period
            )
        ),
        debarment_period_days=int(
            raw_rules.get("debarmentPeriodDays", defaults.debarment_period_days)
        ),
    )

    config = EligibilityConfig(
        thresholds=thresholds,
        rules=rules,
        updated_by=str(raw.get("updatedBy", "system")),
    )
    config.validate()
    return config


def eligibility_config_from_json(path: str | Path) -> EligibilityConfig:
    data = read_json(path, "eligibility_config_from_json")
    if not isinstance(data, Mapping):
        raise TypeError("Eligibility config JSON must be an object.")
    return eligibility_config_from_dict(data)


def _to_number(value: Any, field_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid number for '{field_name}': {value!r}") from exc
