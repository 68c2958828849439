# gassigeher/services/booking_times/holiday_calendar.py
"""
Holiday resolution.

Order for a single date:
1. custom_holidays row for the date: active → holiday, inactive → not a
   holiday (administrator override, also for fetched dates).
2. Cached external set for (year, region). Missing or expired entries are
   refetched synchronously and replaced as a whole.

Failure policy:
- refetch fails, stale entry present → stale entry is used, warning logged
- refetch fails, nothing cached      → HolidayLookupError (fail closed)
"""

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Protocol

from ...domain import HolidayCacheEntry, HolidaySource, utcnow
from ...errors import HolidayLookupError, HolidayNotFoundError, HolidaySourceError
from ...models import Holiday
from ...repositories import HolidayRepository
from .config import BookingConfig, get_booking_config

logger = logging.getLogger(__name__)


class HolidayCacheStore(Protocol):
    def get_entry(self, year: int, region: str) -> HolidayCacheEntry | None: ...

    def replace_entry(self, entry: HolidayCacheEntry) -> None: ...


class HolidayFetcher(Protocol):
    def fetch(self, year: int, region: str) -> dict[date, str]: ...


class HolidayCalendar:
    """Answers "is this date a holiday" from admin rows plus the cached external set."""

    def __init__(
        self,
        holidays: HolidayRepository,
        cache_store: HolidayCacheStore,
        source: HolidayFetcher,
        config: BookingConfig | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.holidays = holidays
        self.cache_store = cache_store
        self.source = source
        self.config = config or get_booking_config()
        self.clock = clock

    def is_holiday(self, target_date: date) -> bool:
        """
        Raises:
            HolidayLookupError: external set unavailable and nothing cached.
        """
        row = self.holidays.get_by_date(target_date)
        if row is not None:
            return bool(row.is_active)

        if not self.config.use_holiday_api:
            return False

        entry = self._entry_for(target_date.year, self.config.holiday_region, target_date)
        return entry.contains(target_date)

    def holidays_for_year(self, year: int, region: str | None = None) -> dict[date, str]:
        """All holidays of a year: external set merged with admin rows, sorted by date."""
        region = region or self.config.holiday_region
        result: dict[date, str] = {}

        if self.config.use_holiday_api:
            entry = self._entry_for(year, region, date(year, 1, 1))
            result.update(entry.as_dict())

        for row in self.holidays.list_holidays(year=year):
            if row.is_active:
                result[row.date] = row.name
            else:
                result.pop(row.date, None)

        return dict(sorted(result.items()))

    def refresh(self, year: int, region: str | None = None) -> HolidayCacheEntry:
        """Force a refetch regardless of expiry. Source errors propagate."""
        region = region or self.config.holiday_region
        previous = self.cache_store.get_entry(year, region)
        return self._refresh(year, region, previous)

    # ── Administration ───────────────────────────────────────────────────

    def list_custom_holidays(self, year: int | None = None) -> list[Holiday]:
        return self.holidays.list_holidays(year=year)

    def create_holiday(
        self,
        target_date: date,
        name: str,
        is_active: bool = True,
        created_by: int | None = None,
    ) -> Holiday:
        return self.holidays.create_holiday(
            target_date, name.strip(), HolidaySource.ADMIN.value, is_active, created_by
        )

    def set_holiday(self, target_date: date, name: str, is_active: bool = True) -> Holiday:
        """Create or overwrite the row of a date; the row then belongs to the administrator."""
        holiday = self.holidays.upsert_holiday(
            target_date, name.strip(), HolidaySource.ADMIN.value, is_active
        )
        logger.info(
            f"Holiday {target_date.isoformat()} set by administrator: "
            f"name={holiday.name!r} active={holiday.is_active}"
        )
        return holiday

    def update_holiday(
        self,
        holiday_id: int,
        name: str | None = None,
        is_active: bool | None = None,
    ) -> Holiday:
        holiday = self.holidays.get(holiday_id)
        if not holiday:
            raise HolidayNotFoundError(f"holiday {holiday_id} not found")
        return self.holidays.update_holiday(
            holiday,
            name=name.strip() if name is not None else None,
            is_active=is_active,
        )

    def delete_holiday(self, holiday_id: int) -> None:
        if not self.holidays.delete_holiday(holiday_id):
            raise HolidayNotFoundError(f"holiday {holiday_id} not found")

    # ── Internals ────────────────────────────────────────────────────────

    def _entry_for(self, year: int, region: str, target_date: date) -> HolidayCacheEntry:
        entry = self.cache_store.get_entry(year, region)
        if entry is not None and not entry.is_expired(self.clock()):
            return entry

        try:
            return self._refresh(year, region, entry)
        except HolidaySourceError as exc:
            if entry is not None:
                logger.warning(
                    f"Holiday refresh for {year}/{region} failed, using stale cache "
                    f"(version {entry.version}, expired {entry.expires_at.isoformat()}) "
                    f"in degraded mode: {exc}"
                )
                return entry
            logger.error(f"Holiday refresh for {year}/{region} failed and no cache exists: {exc}")
            raise HolidayLookupError(target_date) from exc

    def _refresh(
        self,
        year: int,
        region: str,
        previous: HolidayCacheEntry | None,
    ) -> HolidayCacheEntry:
        fetched = self.source.fetch(year, region)
        now = self.clock()
        entry = HolidayCacheEntry.build(
            year=year,
            region=region,
            holidays=fetched,
            fetched_at=now,
            expires_at=now + timedelta(days=self.config.holiday_cache_ttl_days),
            version=previous.version + 1 if previous else 1,
        )
        self.cache_store.replace_entry(entry)
        inserted = self.holidays.insert_missing(fetched, HolidaySource.API.value)
        logger.info(
            f"Holiday cache {year}/{region} replaced: version={entry.version} "
            f"holidays={len(fetched)} new_rows={inserted}"
        )
        return entry
