from .blocked_dates import BlockedDateRepository
from .holiday_cache import DatabaseHolidayCacheStore
from .holidays import HolidayRepository
from .reservations import ReservationRepository
from .settings import SettingsRepository
from .time_rules import TimeRuleRepository

__all__ = [
    "BlockedDateRepository",
    "DatabaseHolidayCacheStore",
    "HolidayRepository",
    "ReservationRepository",
    "SettingsRepository",
    "TimeRuleRepository",
]
