"""Reservation repository - the only place reservation rows are inserted"""

from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..domain import ApprovalStatus
from ..errors import ReservationNotFoundError
from ..models import RESERVATION_SLOT_CONSTRAINT, Reservation

# SQLite reports the column list, PostgreSQL/MySQL the constraint name
_SLOT_VIOLATION_MARKERS = (
    RESERVATION_SLOT_CONSTRAINT,
    "reservations.resource_id, reservations.date, reservations.time",
)


def is_slot_violation(exc: IntegrityError) -> bool:
    """True if the IntegrityError comes from the (resource, date, time) unique key."""
    orig = getattr(exc, "orig", None)
    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag is not None else None
    if constraint_name:
        return constraint_name == RESERVATION_SLOT_CONSTRAINT

    message = str(orig if orig is not None else exc)
    return any(marker in message for marker in _SLOT_VIOLATION_MARKERS)


class ReservationRepository:

    def __init__(self, db: Session):
        self.db = db

    def get(self, reservation_id: int) -> Optional[Reservation]:
        return self.db.get(Reservation, reservation_id)

    def require(self, reservation_id: int) -> Reservation:
        reservation = self.get(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(f"reservation {reservation_id} not found")
        return reservation

    def list_reservations(
        self,
        resource_id: int | None = None,
        target_date: date | None = None,
    ) -> list[Reservation]:
        query = self.db.query(Reservation)
        if resource_id is not None:
            query = query.filter(Reservation.resource_id == resource_id)
        if target_date is not None:
            query = query.filter(Reservation.date == target_date)
        return query.order_by(Reservation.date, Reservation.time).all()

    def count_for_slot(self, resource_id: int, target_date: date, time_of_day: str) -> int:
        return (
            self.db.query(Reservation)
            .filter(
                Reservation.resource_id == resource_id,
                Reservation.date == target_date,
                Reservation.time == time_of_day,
            )
            .count()
        )

    def insert_if_absent(
        self,
        resource_id: int,
        target_date: date,
        time_of_day: str,
        requires_approval: bool,
        user_id: int | None = None,
        notes: str | None = None,
    ) -> Optional[Reservation]:
        """
        Insert a reservation relying on the unique key for exclusivity.

        Returns:
            The new reservation, or None if the slot is already taken.

        Raises:
            IntegrityError: for violations other than the slot key.
        """
        reservation = Reservation(
            resource_id=resource_id,
            date=target_date,
            time=time_of_day,
            user_id=user_id,
            notes=notes,
            requires_approval=requires_approval,
            approval_status=(
                ApprovalStatus.PENDING.value if requires_approval else ApprovalStatus.APPROVED.value
            ),
        )
        self.db.add(reservation)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if is_slot_violation(exc):
                return None
            raise
        self.db.refresh(reservation)
        return reservation
