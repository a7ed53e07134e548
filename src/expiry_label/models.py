"""Data models for the live expiry label."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Unit(str, Enum):
    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"


# Fixed-length approximations in seconds, no calendar lookups
UNIT_SECONDS: dict[Unit, int] = {
    Unit.YEAR: 31_557_600,  # 365.25 days
    Unit.MONTH: 2_629_800,  # year / 12
    Unit.WEEK: 604_800,
    Unit.DAY: 86_400,
    Unit.HOUR: 3_600,
    Unit.MINUTE: 60,
    Unit.SECOND: 1,
}


class Urgency(str, Enum):
    EXPIRED = "expired"
    WARNING = "warning"
    NOTICE = "notice"
    NORMAL = "normal"


# Rich markup wrappers per urgency (Hearth palette)
URGENCY_MARKUP: dict[Urgency, str] = {
    Urgency.EXPIRED: "bold #C67B5C",
    Urgency.WARNING: "bold #F5A623",
    Urgency.NOTICE: "#E8C468",
    Urgency.NORMAL: "#A8B5A2",
}


class CutoffParseError(ValueError):
    """Raised when a cut-off string is not a valid ISO-8601 date-time."""

    def __init__(self, value: str, reason: str = "") -> None:
        self.value = value
        message = f"Invalid cut-off {value!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


@dataclass(frozen=True)
class PhraseConfig:
    before_word: str = "Expires"
    after_word: str = "Expired"
    start_connector: str = "in"
    end_connector: str = "ago"


@dataclass(frozen=True)
class DurationResult:
    """One formatted snapshot of the gap between now and the cut-off."""

    magnitude: int
    unit: Unit
    is_past: bool
    rendered_text: str           # "now" or "<magnitude> <unit>[s]"
    direction_phrase: str
    start_connector: str
    end_connector: str
    next_recompute_delay_ms: int
    diff_seconds: int            # signed, negative once the cut-off has passed

    @property
    def abs_seconds(self) -> int:
        return abs(self.diff_seconds)


@dataclass
class TimerSession:
    """Mutable per-cut-off state owned by LiveLabelController."""

    cutoff_epoch_ms: int
    last_computed_at: int | None = None
    pending_timer_handles: set[Any] = field(default_factory=set)
    current_result: DurationResult | None = None
