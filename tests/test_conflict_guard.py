import threading
from datetime import date, datetime
from unittest.mock import Mock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from gassigeher.database import create_db_engine, init_db
from gassigeher.domain import ReserveStatus
from gassigeher.errors import HolidaySourceError
from gassigeher.repositories import (
    BlockedDateRepository,
    DatabaseHolidayCacheStore,
    ReservationRepository,
)
from gassigeher.services.booking_times import (
    BookingConfig,
    BookingConflictGuard,
    RedisHolidayCacheStore,
    build_booking_engine,
    seed_defaults,
)

MONDAY = date(2025, 1, 27)


class TestReserve:

    def test_created_morning_reservation_is_pending(self, booking):
        outcome = booking.guard.reserve(1, "2025-01-27", "09:00", user_id=7, notes="Bring treats")

        assert outcome.status is ReserveStatus.CREATED
        reservation = outcome.reservation
        assert (reservation.resource_id, reservation.date, reservation.time) == (1, MONDAY, "09:00")
        assert reservation.requires_approval is True
        assert reservation.approval_status == "pending"
        assert reservation.status == "scheduled"
        assert reservation.user_id == 7

    def test_afternoon_reservation_is_approved(self, booking):
        outcome = booking.guard.reserve(1, MONDAY, "14:00")

        assert outcome.created
        assert outcome.reservation.requires_approval is False
        assert outcome.reservation.approval_status == "approved"

    def test_second_reservation_for_slot_conflicts(self, booking, seeded_db):
        assert booking.guard.reserve(1, MONDAY, "14:00").created

        outcome = booking.guard.reserve(1, MONDAY, "14:00", user_id=8)

        assert outcome.status is ReserveStatus.CONFLICT
        assert outcome.reason == "slot already booked"
        assert outcome.reservation is None
        assert ReservationRepository(seeded_db).count_for_slot(1, MONDAY, "14:00") == 1

    def test_unnormalized_time_hits_same_slot(self, booking):
        assert booking.guard.reserve(1, MONDAY, "09:00").created
        assert booking.guard.reserve(1, MONDAY, "9:00").status is ReserveStatus.CONFLICT

    def test_other_resource_same_slot(self, booking):
        assert booking.guard.reserve(1, MONDAY, "14:00").created
        assert booking.guard.reserve(2, MONDAY, "14:00").created

    @pytest.mark.parametrize("time_of_day, reason", [
        ("13:30", "blocked: Lunch break"),
        ("12:15", "outside operating hours"),
        ("1330", "invalid date or time"),
    ])
    def test_rejected_reservations_write_nothing(self, booking, seeded_db, time_of_day, reason):
        outcome = booking.guard.reserve(1, MONDAY, time_of_day)

        assert outcome.status is ReserveStatus.REJECTED
        assert outcome.reason == reason
        assert ReservationRepository(seeded_db).list_reservations() == []

    def test_unknown_holiday_status_is_system_error(self, booking, holiday_source, seeded_db):
        holiday_source.fetch.side_effect = HolidaySourceError("down")

        outcome = booking.guard.reserve(1, "2025-01-28", "10:00")

        assert outcome.status is ReserveStatus.SYSTEM_ERROR
        assert "2025-01-28" in outcome.reason
        assert ReservationRepository(seeded_db).list_reservations() == []

    def test_off_grid_time_does_not_double_book(self, booking, seeded_db):
        assert booking.guard.reserve(1, MONDAY, "09:00").created

        outcome = booking.guard.reserve(1, MONDAY, "09:07")

        assert outcome.status is ReserveStatus.REJECTED
        assert outcome.reason == "not a bookable slot"
        assert len(ReservationRepository(seeded_db).list_reservations(resource_id=1)) == 1

    def test_blocked_day_is_rejected(self, booking, seeded_db):
        BlockedDateRepository(seeded_db).create_blocked_date(MONDAY, "Vet inspection")

        outcome = booking.guard.reserve(1, MONDAY, "10:00")

        assert outcome.status is ReserveStatus.REJECTED
        assert outcome.reason == "this date is blocked"

    def test_database_failure_while_validating_is_system_error(self, booking):
        validator = Mock()
        validator.validate.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
        guard = BookingConflictGuard(validator, booking.approval, Mock())

        outcome = guard.reserve(1, MONDAY, "10:00")

        assert outcome.status is ReserveStatus.SYSTEM_ERROR
        assert outcome.reason == "booking rules could not be checked"
        guard.reservations.insert_if_absent.assert_not_called()

    def test_unreachable_redis_cache_is_system_error(self, seeded_db, holiday_source, clock):
        redis = Mock()
        redis.get.side_effect = RedisConnectionError("Connection refused")
        engine = build_booking_engine(
            seeded_db,
            config=BookingConfig(booking_advance_days=30),
            source=holiday_source,
            cache_store=RedisHolidayCacheStore(redis),
            clock=clock,
        )

        outcome = engine.guard.reserve(1, "2025-01-28", "10:00")

        assert outcome.status is ReserveStatus.SYSTEM_ERROR
        assert ReservationRepository(seeded_db).list_reservations() == []

    def test_storage_failure_is_system_error(self, booking, caplog):
        reservations = Mock()
        reservations.insert_if_absent.side_effect = OperationalError(
            "INSERT INTO reservations", {}, Exception("disk I/O error")
        )
        guard = BookingConflictGuard(booking.validator, booking.approval, reservations)

        outcome = guard.reserve(1, MONDAY, "10:00")

        assert outcome.status is ReserveStatus.SYSTEM_ERROR
        assert "failed" in caplog.text

    def test_approval_is_not_retroactive(self, booking, make_engine, seeded_db):
        morning = booking.guard.reserve(1, MONDAY, "09:00").reservation

        relaxed = make_engine(approval_enabled=False)
        later = relaxed.guard.reserve(1, MONDAY, "09:15").reservation

        seeded_db.refresh(morning)
        assert morning.requires_approval is True
        assert morning.approval_status == "pending"
        assert later.requires_approval is False


def test_concurrent_reservations_for_one_slot(tmp_path):
    db_engine = create_db_engine(f"sqlite:///{tmp_path / 'race.db'}", poolclass=NullPool)
    init_db(db_engine)
    Session = sessionmaker(bind=db_engine, autoflush=False)

    setup = Session()
    seed_defaults(setup)
    setup.close()

    workers = 20
    barrier = threading.Barrier(workers)
    outcomes = []
    lock = threading.Lock()

    def attempt(user_id):
        session = Session()
        try:
            engine = build_booking_engine(
                session,
                config=BookingConfig(use_holiday_api=False),
                source=Mock(),
                cache_store=DatabaseHolidayCacheStore(session),
                clock=lambda: datetime(2025, 1, 20, 8, 0),
            )
            barrier.wait()
            outcome = engine.guard.reserve(1, MONDAY, "15:00", user_id=user_id)
            with lock:
                outcomes.append(outcome.status)
        finally:
            session.close()

    threads = [threading.Thread(target=attempt, args=(i,)) for i in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count(ReserveStatus.CREATED) == 1
    assert outcomes.count(ReserveStatus.CONFLICT) == workers - 1

    check = Session()
    try:
        assert ReservationRepository(check).count_for_slot(1, MONDAY, "15:00") == 1
    finally:
        check.close()
    db_engine.dispose()
