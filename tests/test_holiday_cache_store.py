import threading
from datetime import date, datetime, timedelta

from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from gassigeher.database import create_db_engine, init_db
from gassigeher.domain import HolidayCacheEntry
from gassigeher.repositories import DatabaseHolidayCacheStore

FETCHED_AT = datetime(2025, 1, 5, 8, 0)


def _entry(version: int) -> HolidayCacheEntry:
    # Every version has a different set, so a torn read would not match any of them
    holidays = {date(2025, 1, 1 + day): f"Holiday {version}.{day}" for day in range(version % 7 + 1)}
    return HolidayCacheEntry.build(
        year=2025,
        region="BW",
        holidays=holidays,
        fetched_at=FETCHED_AT + timedelta(minutes=version),
        expires_at=FETCHED_AT + timedelta(days=7, minutes=version),
        version=version,
    )


def test_get_entry_on_missing_year(db):
    assert DatabaseHolidayCacheStore(db).get_entry(2025, "BW") is None


def test_replace_keeps_one_row(db):
    store = DatabaseHolidayCacheStore(db)
    store.replace_entry(_entry(1))
    store.replace_entry(_entry(2))

    assert store.get_entry(2025, "BW") == _entry(2)


def test_readers_never_see_a_partial_replace(tmp_path):
    db_engine = create_db_engine(f"sqlite:///{tmp_path / 'cache.db'}", poolclass=NullPool)
    init_db(db_engine)
    Session = sessionmaker(bind=db_engine, autoflush=False)

    written = {version: _entry(version) for version in range(1, 61)}

    setup = Session()
    DatabaseHolidayCacheStore(setup).replace_entry(written[1])
    setup.close()

    done = threading.Event()
    observed = []
    errors = []

    def writer():
        session = Session()
        try:
            store = DatabaseHolidayCacheStore(session)
            for version in range(2, 61):
                store.replace_entry(written[version])
        except Exception as exc:
            errors.append(exc)
        finally:
            session.close()
            done.set()

    def reader():
        session = Session()
        try:
            store = DatabaseHolidayCacheStore(session)
            while True:
                finished = done.is_set()
                session.expire_all()
                observed.append(store.get_entry(2025, "BW"))
                if finished:
                    break
        except Exception as exc:
            errors.append(exc)
        finally:
            session.close()

    threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert observed
    for entry in observed:
        assert entry == written[entry.version]

    check = Session()
    try:
        assert DatabaseHolidayCacheStore(check).get_entry(2025, "BW") == written[60]
    finally:
        check.close()
    db_engine.dispose()
