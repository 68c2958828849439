from datetime import date, datetime, timedelta
from unittest.mock import Mock

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gassigeher.database import create_db_engine, init_db
from gassigeher.repositories import DatabaseHolidayCacheStore
from gassigeher.services.booking_times import BookingConfig, build_booking_engine, seed_defaults

# Sunday; the booking horizon of the test engines reaches 2025-02-04
NOW = datetime(2025, 1, 5, 8, 0)

BW_HOLIDAYS_2025 = {
    date(2025, 1, 1): "Neujahrstag",
    date(2025, 1, 6): "Heilige Drei Könige",
    date(2025, 4, 18): "Karfreitag",
    date(2025, 4, 21): "Ostermontag",
    date(2025, 5, 1): "Tag der Arbeit",
    date(2025, 10, 3): "Tag der Deutschen Einheit",
    date(2025, 12, 25): "1. Weihnachtstag",
}


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def db_engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(db_engine):
    session = sessionmaker(bind=db_engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db):
    seed_defaults(db)
    return db


@pytest.fixture
def holiday_source():
    source = Mock()
    source.fetch.return_value = dict(BW_HOLIDAYS_2025)
    return source


@pytest.fixture
def clock():
    return FrozenClock(NOW)


@pytest.fixture
def make_engine(seeded_db, holiday_source, clock):
    """Factory for a booking engine on the seeded database; kwargs go to BookingConfig."""

    def _make(**config):
        config.setdefault("booking_advance_days", 30)
        return build_booking_engine(
            seeded_db,
            config=BookingConfig(**config),
            source=holiday_source,
            cache_store=DatabaseHolidayCacheStore(seeded_db),
            clock=clock,
        )

    return _make


@pytest.fixture
def booking(make_engine):
    return make_engine()
