"""System settings repository - key/value overrides for booking configuration"""

from sqlalchemy.orm import Session

from ..models import SystemSetting


class SettingsRepository:

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> str | None:
        row = self.db.get(SystemSetting, key)
        return row.value if row else None

    def get_all(self) -> dict[str, str]:
        return {row.key: row.value for row in self.db.query(SystemSetting).all()}

    def set(self, key: str, value: str) -> None:
        row = self.db.get(SystemSetting, key)
        if row is None:
            self.db.add(SystemSetting(key=key, value=value))
        else:
            row.value = value
        self.db.commit()

    def insert_missing(self, defaults: dict[str, str]) -> int:
        existing = set(self.get_all())
        missing = {key: value for key, value in defaults.items() if key not in existing}
        for key, value in missing.items():
            self.db.add(SystemSetting(key=key, value=value))
        if missing:
            self.db.commit()
        return len(missing)
