from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .config import settings
from .models import Base


def _sqlite_pragmas(dbapi_connection, _):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    # Concurrent writers wait for the lock instead of failing immediately
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def create_db_engine(url: str, **kwargs) -> Engine:
    """Create an engine; SQLite gets thread-safe connect args and pragmas."""
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        # check_same_thread=False: sessions are used from request worker threads
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(url, connect_args=connect_args, **kwargs)
        event.listen(engine, "connect", _sqlite_pragmas)
        return engine
    return create_engine(url, pool_pre_ping=True, **kwargs)


engine = create_db_engine(settings.resolved_database_url)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def init_db(bind: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=bind or engine)


# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
