"""
Create tables and seed default booking time rules and settings.

Usage: python scripts/init_booking_times.py
"""

from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import text

# .env of the current directory wins over the project one
load_dotenv()

from gassigeher.config import settings  # noqa: E402
from gassigeher.database import SessionLocal, init_db  # noqa: E402
from gassigeher.services.booking_times import seed_defaults  # noqa: E402


def ensure_sqlite_dir(database_url: str) -> None:
    if not database_url.startswith("sqlite:///"):
        return
    db_path = Path(database_url.replace("sqlite:///", "", 1))
    db_path.parent.mkdir(parents=True, exist_ok=True)


def main():
    ensure_sqlite_dir(settings.resolved_database_url)
    init_db()

    db = SessionLocal()
    try:
        print("DB OK:", db.execute(text("SELECT 1")).scalar())
        counts = seed_defaults(db)
        print(f"Seeded rules: {counts['rules']}, settings: {counts['settings']}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
