import logging
from datetime import date, timedelta

import pytest

from gassigeher.domain import DayCategory, HolidayCacheEntry
from gassigeher.errors import HolidayLookupError, HolidayNotFoundError, HolidaySourceError
from gassigeher.repositories import DatabaseHolidayCacheStore, HolidayRepository
from tests.conftest import BW_HOLIDAYS_2025, NOW

EPIPHANY = date(2025, 1, 6)  # Monday


def _store_expired_entry(db, holidays=None):
    entry = HolidayCacheEntry.build(
        year=2025,
        region="BW",
        holidays=holidays if holidays is not None else BW_HOLIDAYS_2025,
        fetched_at=NOW - timedelta(days=10),
        expires_at=NOW - timedelta(days=3),
        version=4,
    )
    DatabaseHolidayCacheStore(db).replace_entry(entry)
    return entry


class TestLookup:

    def test_first_lookup_fetches_once_and_caches(self, booking, holiday_source):
        assert booking.calendar.is_holiday(EPIPHANY) is True
        assert booking.calendar.is_holiday(date(2025, 1, 7)) is False

        holiday_source.fetch.assert_called_once_with(2025, "BW")

    def test_cache_entry_is_stored_with_ttl(self, booking, seeded_db):
        booking.calendar.is_holiday(EPIPHANY)

        entry = DatabaseHolidayCacheStore(seeded_db).get_entry(2025, "BW")
        assert entry.version == 1
        assert entry.fetched_at == NOW
        assert entry.expires_at == NOW + timedelta(days=7)
        assert entry.as_dict() == BW_HOLIDAYS_2025

    def test_expired_entry_is_replaced(self, booking, holiday_source, clock, seeded_db):
        booking.calendar.is_holiday(EPIPHANY)
        clock.advance(days=8)
        holiday_source.fetch.return_value = {**BW_HOLIDAYS_2025, date(2025, 1, 7): "Sonderfeiertag"}

        assert booking.calendar.is_holiday(date(2025, 1, 7)) is True
        assert holiday_source.fetch.call_count == 2
        assert DatabaseHolidayCacheStore(seeded_db).get_entry(2025, "BW").version == 2

    def test_expired_entry_with_failing_source_uses_stale_answer(
        self, booking, holiday_source, seeded_db, caplog
    ):
        _store_expired_entry(seeded_db)
        holiday_source.fetch.side_effect = HolidaySourceError("connection refused")
        caplog.set_level(logging.WARNING)

        assert booking.calendar.is_holiday(EPIPHANY) is True
        assert booking.calendar.is_holiday(date(2025, 1, 7)) is False
        assert "degraded mode" in caplog.text
        # stale entry stays in place untouched
        assert DatabaseHolidayCacheStore(seeded_db).get_entry(2025, "BW").version == 4

    def test_no_cache_and_failing_source_fails_closed(self, booking, holiday_source):
        holiday_source.fetch.side_effect = HolidaySourceError("timeout")

        with pytest.raises(HolidayLookupError) as exc_info:
            booking.calendar.is_holiday(date(2025, 3, 3))
        assert exc_info.value.target_date == date(2025, 3, 3)

    def test_api_disabled_never_fetches(self, make_engine, holiday_source):
        engine = make_engine(use_holiday_api=False)

        assert engine.calendar.is_holiday(EPIPHANY) is False
        holiday_source.fetch.assert_not_called()


class TestAdministratorHolidays:

    def test_active_admin_holiday_is_holiday_without_fetch(self, booking, holiday_source, seeded_db):
        HolidayRepository(seeded_db).create_holiday(date(2025, 1, 1), "Neujahr", "admin")

        assert booking.calendar.is_holiday(date(2025, 1, 1)) is True
        # Wednesday, but weekend rules apply
        assert booking.classifier.classify(date(2025, 1, 1)) is DayCategory.WEEKEND
        holiday_source.fetch.assert_not_called()

    def test_inactive_row_suppresses_fetched_date(self, booking, seeded_db):
        HolidayRepository(seeded_db).create_holiday(EPIPHANY, "Heilige Drei Könige", "admin", is_active=False)

        assert booking.calendar.is_holiday(EPIPHANY) is False
        assert EPIPHANY not in booking.calendar.holidays_for_year(2025)

    def test_admin_holiday_without_api(self, make_engine, seeded_db):
        engine = make_engine(use_holiday_api=False)
        HolidayRepository(seeded_db).create_holiday(date(2025, 7, 14), "Vereinsfest", "admin")

        assert engine.calendar.is_holiday(date(2025, 7, 14)) is True


class TestYearView:

    def test_merges_admin_rows_sorted(self, booking, seeded_db):
        HolidayRepository(seeded_db).create_holiday(date(2025, 3, 15), "Vereinsfest", "admin")

        holidays = booking.calendar.holidays_for_year(2025)

        assert holidays[date(2025, 3, 15)] == "Vereinsfest"
        assert set(BW_HOLIDAYS_2025) <= set(holidays)
        assert list(holidays) == sorted(holidays)

    def test_other_years_are_not_mixed_in(self, make_engine, seeded_db):
        engine = make_engine(use_holiday_api=False)
        repo = HolidayRepository(seeded_db)
        repo.create_holiday(date(2024, 12, 31), "Silvester", "admin")
        repo.create_holiday(date(2025, 12, 31), "Silvester", "admin")

        assert list(engine.calendar.holidays_for_year(2025)) == [date(2025, 12, 31)]


class TestRefresh:

    def test_refresh_writes_through_as_api_rows(self, booking, seeded_db):
        booking.calendar.refresh(2025)

        rows = HolidayRepository(seeded_db).list_holidays(year=2025)
        assert {row.date for row in rows} == set(BW_HOLIDAYS_2025)
        assert {row.source for row in rows} == {"api"}

    def test_refresh_keeps_administrator_rows(self, booking, seeded_db):
        repo = HolidayRepository(seeded_db)
        repo.create_holiday(EPIPHANY, "Heilige Drei Könige", "admin", is_active=False)

        booking.calendar.refresh(2025)
        booking.calendar.refresh(2025)

        row = repo.get_by_date(EPIPHANY)
        assert row.is_active is False
        assert row.source == "admin"
        assert booking.calendar.is_holiday(EPIPHANY) is False

    def test_refresh_bumps_version_even_when_fresh(self, booking):
        first = booking.calendar.refresh(2025)
        second = booking.calendar.refresh(2025)

        assert (first.version, second.version) == (1, 2)

    def test_refresh_propagates_source_errors(self, booking, holiday_source, seeded_db):
        _store_expired_entry(seeded_db)
        holiday_source.fetch.side_effect = HolidaySourceError("HTTP 500")

        with pytest.raises(HolidaySourceError):
            booking.calendar.refresh(2025)


class TestAdministration:

    def test_set_holiday_takes_over_fetched_row(self, booking, seeded_db):
        booking.calendar.refresh(2025)

        row = booking.calendar.set_holiday(EPIPHANY, "Heilige Drei Könige", is_active=False)

        assert (row.source, row.is_active) == ("admin", False)
        assert len(HolidayRepository(seeded_db).list_holidays(year=2025)) == len(BW_HOLIDAYS_2025)
        assert booking.calendar.is_holiday(EPIPHANY) is False

    def test_set_holiday_creates_missing_row(self, make_engine):
        engine = make_engine(use_holiday_api=False)

        row = engine.calendar.set_holiday(date(2025, 1, 14), " Vereinsfest ")

        assert row.name == "Vereinsfest"
        assert engine.calendar.is_holiday(date(2025, 1, 14)) is True

    def test_update_and_delete_unknown_holiday(self, booking):
        with pytest.raises(HolidayNotFoundError):
            booking.calendar.update_holiday(9999, name="Ghost")
        with pytest.raises(HolidayNotFoundError):
            booking.calendar.delete_holiday(9999)
