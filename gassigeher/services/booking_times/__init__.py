# gassigeher/services/booking_times/__init__.py
"""
Booking time engine.

HolidayCalendar → DayClassifier → RuleSet → SlotGenerator / BookingTimeValidator
→ ApprovalPolicy → BookingConflictGuard

BookingDatePolicy closes past, too distant and blocked days before any rule applies.
"""

from .approval import ApprovalPolicy
from .booking_dates import BookingDatePolicy
from .classifier import DayClassifier
from .config import BookingConfig, get_booking_config, load_booking_config
from .conflict_guard import BookingConflictGuard
from .engine import BookingEngine, build_booking_engine
from .holiday_calendar import HolidayCalendar
from .holiday_source import FeiertageApiSource
from .redis_store import RedisHolidayCacheStore
from .rule_set import RuleSet
from .seed import seed_defaults
from .slots import SlotGenerator, generate_slots
from .validator import BookingTimeValidator

__all__ = [
    "ApprovalPolicy",
    "BookingConfig",
    "BookingConflictGuard",
    "BookingDatePolicy",
    "BookingEngine",
    "BookingTimeValidator",
    "DayClassifier",
    "FeiertageApiSource",
    "HolidayCalendar",
    "RedisHolidayCacheStore",
    "RuleSet",
    "SlotGenerator",
    "build_booking_engine",
    "generate_slots",
    "get_booking_config",
    "load_booking_config",
    "seed_defaults",
]
