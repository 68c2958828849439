"""
Database storage for the external holiday cache.

One row per (year, region). A refresh replaces data, timestamps and
version of that row in a single UPDATE, so concurrent readers see either
the previous entry or the new one.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..domain import HolidayCacheEntry, parse_holidays_json
from ..models import HolidayCache


class DatabaseHolidayCacheStore:
    """HolidayCache rows in the application database."""

    def __init__(self, db: Session):
        self.db = db

    def get_entry(self, year: int, region: str) -> HolidayCacheEntry | None:
        row = (
            self.db.query(HolidayCache)
            .filter(HolidayCache.year == year, HolidayCache.region == region)
            .first()
        )
        if row is None:
            return None

        return HolidayCacheEntry.build(
            year=row.year,
            region=row.region,
            holidays=parse_holidays_json(row.data),
            fetched_at=row.fetched_at,
            expires_at=row.expires_at,
            version=row.version,
        )

    def replace_entry(self, entry: HolidayCacheEntry) -> None:
        values = {
            HolidayCache.data: entry.holidays_json(),
            HolidayCache.version: entry.version,
            HolidayCache.fetched_at: entry.fetched_at,
            HolidayCache.expires_at: entry.expires_at,
        }
        if self._update(entry, values):
            return

        self.db.add(HolidayCache(
            year=entry.year,
            region=entry.region,
            data=entry.holidays_json(),
            version=entry.version,
            fetched_at=entry.fetched_at,
            expires_at=entry.expires_at,
        ))
        try:
            self.db.commit()
        except IntegrityError:
            # Concurrent first fetch for the same year; overwrite its row
            self.db.rollback()
            self._update(entry, values)

    def _update(self, entry: HolidayCacheEntry, values: dict) -> bool:
        updated = (
            self.db.query(HolidayCache)
            .filter(HolidayCache.year == entry.year, HolidayCache.region == entry.region)
            .update(values, synchronize_session=False)
        )
        self.db.commit()
        return updated > 0
