"""Holiday repository - administrator and fetched holidays"""

from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import DuplicateHolidayError
from ..models import Holiday


class HolidayRepository:
    """Repository for the custom_holidays table (one row per date)"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, holiday_id: int) -> Optional[Holiday]:
        return self.db.get(Holiday, holiday_id)

    def get_by_date(self, target_date: date) -> Optional[Holiday]:
        return self.db.query(Holiday).filter(Holiday.date == target_date).first()

    def list_holidays(self, year: int | None = None, active_only: bool = False) -> list[Holiday]:
        query = self.db.query(Holiday)
        if year is not None:
            query = query.filter(
                Holiday.date >= date(year, 1, 1),
                Holiday.date <= date(year, 12, 31),
            )
        if active_only:
            query = query.filter(Holiday.is_active.is_(True))
        return query.order_by(Holiday.date).all()

    def create_holiday(
        self,
        target_date: date,
        name: str,
        source: str,
        is_active: bool = True,
        created_by: int | None = None,
    ) -> Holiday:
        holiday = Holiday(
            date=target_date,
            name=name,
            source=source,
            is_active=is_active,
            created_by=created_by,
        )
        self.db.add(holiday)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateHolidayError(
                f"a holiday already exists on {target_date.isoformat()}"
            ) from exc
        self.db.refresh(holiday)
        return holiday

    def upsert_holiday(
        self,
        target_date: date,
        name: str,
        source: str,
        is_active: bool = True,
    ) -> Holiday:
        """Create the row for a date or overwrite name/active/source of the existing one."""
        holiday = self.get_by_date(target_date)
        if holiday is None:
            try:
                return self.create_holiday(target_date, name, source, is_active)
            except DuplicateHolidayError:
                # Lost an insert race; fall through to update the winner's row
                holiday = self.get_by_date(target_date)

        holiday.name = name
        holiday.source = source
        holiday.is_active = is_active
        self.db.commit()
        self.db.refresh(holiday)
        return holiday

    def insert_missing(self, holidays: dict[date, str], source: str) -> int:
        """Insert rows for dates that have none yet. Existing rows are left untouched."""
        if not holidays:
            return 0

        existing = {
            row.date
            for row in self.db.query(Holiday.date).filter(Holiday.date.in_(list(holidays)))
        }
        inserted = 0
        for target_date, name in sorted(holidays.items()):
            if target_date in existing:
                continue
            self.db.add(Holiday(date=target_date, name=name, source=source, is_active=True))
            try:
                self.db.commit()
                inserted += 1
            except IntegrityError:
                # Another writer inserted the same date concurrently
                self.db.rollback()
        return inserted

    def update_holiday(self, holiday: Holiday, **updates) -> Holiday:
        for key, value in updates.items():
            if value is not None and hasattr(holiday, key):
                setattr(holiday, key, value)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateHolidayError(
                f"a holiday already exists on {holiday.date.isoformat()}"
            ) from exc
        self.db.refresh(holiday)
        return holiday

    def delete_holiday(self, holiday_id: int) -> bool:
        holiday = self.get(holiday_id)
        if not holiday:
            return False
        self.db.delete(holiday)
        self.db.commit()
        return True
