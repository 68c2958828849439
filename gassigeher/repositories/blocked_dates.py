"""Blocked date repository - whole days closed for booking by an administrator"""

from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import BlockedDateNotFoundError, DuplicateBlockedDateError
from ..models import BlockedDate


class BlockedDateRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_date(self, target_date: date) -> Optional[BlockedDate]:
        return self.db.query(BlockedDate).filter(BlockedDate.date == target_date).first()

    def is_blocked(self, target_date: date) -> bool:
        return (
            self.db.query(BlockedDate.id)
            .filter(BlockedDate.date == target_date)
            .first()
            is not None
        )

    def list_blocked_dates(self, year: int | None = None) -> list[BlockedDate]:
        query = self.db.query(BlockedDate)
        if year is not None:
            query = query.filter(
                BlockedDate.date >= date(year, 1, 1),
                BlockedDate.date <= date(year, 12, 31),
            )
        return query.order_by(BlockedDate.date).all()

    def create_blocked_date(
        self,
        target_date: date,
        reason: str,
        created_by: int | None = None,
    ) -> BlockedDate:
        blocked = BlockedDate(date=target_date, reason=reason, created_by=created_by)
        self.db.add(blocked)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateBlockedDateError(
                f"{target_date.isoformat()} is already blocked"
            ) from exc
        self.db.refresh(blocked)
        return blocked

    def delete_blocked_date(self, blocked_id: int) -> None:
        blocked = self.db.get(BlockedDate, blocked_id)
        if not blocked:
            raise BlockedDateNotFoundError(f"blocked date {blocked_id} not found")
        self.db.delete(blocked)
        self.db.commit()
