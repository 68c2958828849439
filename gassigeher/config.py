# gassigeher/config.py

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/gassigeher.db"
    redis_url: str | None = None

    # External holiday source (feiertage-api.de compatible)
    holiday_api_url: str = "https://feiertage-api.de/api/"
    holiday_fetch_timeout_seconds: float = 5.0
    holiday_cache_backend: Literal["database", "redis"] = "database"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # Relative sqlite paths are resolved against the project root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
