"""
Value types shared by the booking time engine.

Times of day are handled as minutes since midnight internally and as
"HH:MM" strings at every boundary (database, API, slot lists).
"""

import json
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any

MINUTES_PER_DAY = 24 * 60


class DayCategory(str, Enum):
    WEEKDAY = "weekday"
    WEEKEND = "weekend"


class HolidaySource(str, Enum):
    ADMIN = "admin"
    API = "api"


class ApprovalStatus(str, Enum):
    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"


# ── Time helpers ─────────────────────────────────────────────────────────


def time_str_to_minutes(value: str | time) -> int:
    """Convert "HH:MM" (or a ``datetime.time``) to minutes since midnight."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute

    try:
        hours_str, minutes_str = value.strip().split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid time of day {value!r}, expected HH:MM") from None

    if len(minutes_str) != 2 or not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time of day {value!r}, expected HH:MM")

    return hours * 60 + minutes


def minutes_to_time_str(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_time_str(value: str | time) -> str:
    """Canonical "HH:MM" form ("9:05" → "09:05")."""
    return minutes_to_time_str(time_str_to_minutes(value))


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


# ── Rule windows ─────────────────────────────────────────────────────────


class WindowStatus(str, Enum):
    OPEN = "open"
    BLOCKED = "blocked"
    OUT_OF_HOURS = "out_of_hours"


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval [start, end) of one rule, in minutes."""

    name: str
    start: int
    end: int
    blocked: bool = False

    def contains(self, minute: int) -> bool:
        return self.start <= minute < self.end

    @property
    def start_time(self) -> str:
        return minutes_to_time_str(self.start)

    @property
    def end_time(self) -> str:
        return minutes_to_time_str(self.end)


@dataclass(frozen=True)
class WindowMatch:
    """Result of evaluating one instant against a category's windows."""

    status: WindowStatus
    rule_name: str | None = None

    @property
    def blocked(self) -> bool:
        return self.status is WindowStatus.BLOCKED

    @property
    def out_of_hours(self) -> bool:
        return self.status is WindowStatus.OUT_OF_HOURS


# ── Holiday cache ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class HolidayCacheEntry:
    """
    One externally sourced holiday set for (year, region).

    Entries are never mutated: a refresh builds a new entry with a higher
    version and the store swaps it in as a whole.
    """

    year: int
    region: str
    holidays: tuple[tuple[date, str], ...]
    fetched_at: datetime
    expires_at: datetime
    version: int = 1

    @classmethod
    def build(
        cls,
        year: int,
        region: str,
        holidays: dict[date, str],
        fetched_at: datetime,
        expires_at: datetime,
        version: int = 1,
    ) -> "HolidayCacheEntry":
        return cls(
            year=year,
            region=region,
            holidays=tuple(sorted(holidays.items())),
            fetched_at=fetched_at,
            expires_at=expires_at,
            version=version,
        )

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def contains(self, target_date: date) -> bool:
        return any(day == target_date for day, _ in self.holidays)

    def as_dict(self) -> dict[date, str]:
        return dict(self.holidays)

    def holidays_json(self) -> str:
        return json.dumps({day.isoformat(): name for day, name in self.holidays})

    def to_json(self) -> str:
        return json.dumps({
            "year": self.year,
            "region": self.region,
            "holidays": {day.isoformat(): name for day, name in self.holidays},
            "fetched_at": self.fetched_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
            "version": self.version,
        })

    @classmethod
    def from_json(cls, raw: str | bytes) -> "HolidayCacheEntry":
        data = json.loads(raw)
        return cls.build(
            year=int(data["year"]),
            region=data["region"],
            holidays=parse_holidays_json(data["holidays"]),
            fetched_at=datetime.fromisoformat(data["fetched_at"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
            version=int(data.get("version", 1)),
        )


def parse_holidays_json(data: str | dict[str, Any]) -> dict[date, str]:
    if isinstance(data, str):
        data = json.loads(data)
    return {date.fromisoformat(day): name for day, name in data.items()}


# ── Validation and reservation results ───────────────────────────────────

REASON_OUTSIDE_HOURS = "outside operating hours"
REASON_INVALID_INPUT = "invalid date or time"
REASON_SLOT_TAKEN = "slot already booked"
REASON_NOT_ON_GRID = "not a bookable slot"
REASON_DATE_IN_PAST = "cannot book dates in the past"
REASON_DATE_BLOCKED = "this date is blocked"


def too_far_ahead_reason(days: int) -> str:
    return f"cannot book more than {days} days in advance"


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: str | None = None
    rule_name: str | None = None
    category: DayCategory | None = None

    @classmethod
    def accepted(cls, category: DayCategory) -> "ValidationResult":
        return cls(ok=True, category=category)

    @classmethod
    def rejected(
        cls,
        reason: str,
        rule_name: str | None = None,
        category: DayCategory | None = None,
    ) -> "ValidationResult":
        return cls(ok=False, reason=reason, rule_name=rule_name, category=category)


class ReserveStatus(str, Enum):
    CREATED = "created"
    CONFLICT = "conflict"
    REJECTED = "rejected"
    SYSTEM_ERROR = "system_error"


@dataclass(frozen=True)
class ReservationOutcome:
    """Tagged result of a reserve attempt. ``reservation`` is set only when created."""

    status: ReserveStatus
    reason: str | None = None
    reservation: Any = field(default=None, compare=False)

    @property
    def created(self) -> bool:
        return self.status is ReserveStatus.CREATED
