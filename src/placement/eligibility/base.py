# src/placement/eligibility/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Type

from placement.enums import EligibilityState

if TYPE_CHECKING:
    from placement.config import EligibilityConfig
    from placement.students import Drive, Student


@dataclass(frozen=True)
class CheckContext:
    """Everything one eligibility evaluation may read."""

    student: Student
    drive: Drive
    config: EligibilityConfig
    state: EligibilityState


@dataclass(frozen=True)
class Verdict:
    """A failed check: the message shown to the student and the block tags."""

    reason: str
    blocked_by: tuple[str, ...] = ()


@dataclass
class CheckSpec:
    cls: Type["Check"]
    order: int | None = None
    enabled: bool = True
    settings: dict[str, Any] = field(default_factory=dict)


class Check(ABC):
    """
    One step of the eligibility pipeline. Checks run in ascending `order` and
    the first one returning a Verdict decides the outcome.
    """

    order: int = 100
    enabled: bool = True
    name: str = "Check"
    tag: Optional[str] = None

    def __init__(self, **settings: Any) -> None:
        self._settings: dict[str, Any] = settings

    @abstractmethod
    def evaluate(self, ctx: CheckContext) -> Verdict | None:
        """Return a Verdict when the student is blocked, else None."""

    def block(self, reason: str) -> Verdict:
        return Verdict(reason=reason, blocked_by=(self.tag,) if self.tag else ())

    # Helper for subclasses to read optional settings
    def setting(self, key: str, default: Any) -> Any:
        return self._settings.get(key, default)
