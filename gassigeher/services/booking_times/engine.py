"""Wiring of the booking time engine for one database session."""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from sqlalchemy.orm import Session

from ...config import settings
from ...domain import utcnow
from ...repositories import (
    BlockedDateRepository,
    DatabaseHolidayCacheStore,
    HolidayRepository,
    ReservationRepository,
    TimeRuleRepository,
)
from .approval import ApprovalPolicy
from .booking_dates import BookingDatePolicy
from .classifier import DayClassifier
from .config import BookingConfig, load_booking_config
from .conflict_guard import BookingConflictGuard
from .holiday_calendar import HolidayCacheStore, HolidayCalendar, HolidayFetcher
from .holiday_source import FeiertageApiSource
from .rule_set import RuleSet
from .slots import SlotGenerator
from .validator import BookingTimeValidator


@dataclass
class BookingEngine:
    config: BookingConfig
    calendar: HolidayCalendar
    classifier: DayClassifier
    date_policy: BookingDatePolicy
    rule_set: RuleSet
    slots: SlotGenerator
    approval: ApprovalPolicy
    validator: BookingTimeValidator
    guard: BookingConflictGuard


def default_cache_store(db: Session) -> HolidayCacheStore:
    if settings.holiday_cache_backend == "redis":
        from ...redis_client import get_redis
        from .redis_store import RedisHolidayCacheStore

        return RedisHolidayCacheStore(get_redis())
    return DatabaseHolidayCacheStore(db)


def build_booking_engine(
    db: Session,
    config: BookingConfig | None = None,
    source: HolidayFetcher | None = None,
    cache_store: HolidayCacheStore | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> BookingEngine:
    config = config or load_booking_config(db)
    calendar = HolidayCalendar(
        holidays=HolidayRepository(db),
        cache_store=cache_store or default_cache_store(db),
        source=source or FeiertageApiSource(),
        config=config,
        clock=clock,
    )
    classifier = DayClassifier(calendar)
    date_policy = BookingDatePolicy(BlockedDateRepository(db), config, clock)
    rule_set = RuleSet(TimeRuleRepository(db))
    approval = ApprovalPolicy(config)
    validator = BookingTimeValidator(classifier, rule_set, date_policy, config)

    return BookingEngine(
        config=config,
        calendar=calendar,
        classifier=classifier,
        date_policy=date_policy,
        rule_set=rule_set,
        slots=SlotGenerator(classifier, rule_set, config, date_policy),
        approval=approval,
        validator=validator,
        guard=BookingConflictGuard(validator, approval, ReservationRepository(db)),
    )
