# gassigeher/services/booking_times/conflict_guard.py
"""
Write path for reservations.

proposed → validated → durable write → created | conflict

Exclusivity comes from the (resource_id, date, time) unique key; the
guard never checks-then-writes. A unique violation on that key becomes
a CONFLICT outcome, holiday lookup, storage and cache failures become
SYSTEM_ERROR, validation failures REJECTED.
"""

import logging
from datetime import date

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from ...domain import (
    REASON_SLOT_TAKEN,
    ReservationOutcome,
    ReserveStatus,
    normalize_time_str,
    parse_date,
)
from ...errors import HolidayLookupError
from ...repositories import ReservationRepository
from .approval import ApprovalPolicy
from .validator import BookingTimeValidator

logger = logging.getLogger(__name__)


class BookingConflictGuard:

    def __init__(
        self,
        validator: BookingTimeValidator,
        approval_policy: ApprovalPolicy,
        reservations: ReservationRepository,
    ):
        self.validator = validator
        self.approval_policy = approval_policy
        self.reservations = reservations

    def reserve(
        self,
        resource_id: int,
        target_date: str | date,
        time_of_day: str,
        user_id: int | None = None,
        notes: str | None = None,
    ) -> ReservationOutcome:
        try:
            verdict = self.validator.validate(target_date, time_of_day)
        except HolidayLookupError as exc:
            logger.error(f"Reservation for resource={resource_id} not possible: {exc}")
            return ReservationOutcome(ReserveStatus.SYSTEM_ERROR, reason=str(exc))
        except (SQLAlchemyError, RedisError):
            logger.exception(f"Validating reservation for resource={resource_id} failed")
            return ReservationOutcome(
                ReserveStatus.SYSTEM_ERROR, reason="booking rules could not be checked"
            )

        if not verdict.ok:
            return ReservationOutcome(ReserveStatus.REJECTED, reason=verdict.reason)

        day = parse_date(target_date)
        slot = normalize_time_str(time_of_day)
        # Stamped once; later policy changes do not touch existing rows
        requires_approval = self.approval_policy.requires_approval(slot)

        try:
            reservation = self.reservations.insert_if_absent(
                resource_id=resource_id,
                target_date=day,
                time_of_day=slot,
                requires_approval=requires_approval,
                user_id=user_id,
                notes=notes,
            )
        except SQLAlchemyError:
            logger.exception(
                f"Storing reservation resource={resource_id} {day.isoformat()} {slot} failed"
            )
            return ReservationOutcome(
                ReserveStatus.SYSTEM_ERROR, reason="reservation could not be stored"
            )

        if reservation is None:
            logger.info(
                f"Reservation conflict resource={resource_id} {day.isoformat()} {slot}"
            )
            return ReservationOutcome(ReserveStatus.CONFLICT, reason=REASON_SLOT_TAKEN)

        logger.info(
            f"Reservation {reservation.id} created resource={resource_id} "
            f"{day.isoformat()} {slot} approval={reservation.approval_status}"
        )
        return ReservationOutcome(ReserveStatus.CREATED, reservation=reservation)
