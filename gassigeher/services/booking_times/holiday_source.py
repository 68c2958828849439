"""
External public holiday source.

Talks to a feiertage-api.de compatible endpoint:

    GET {base_url}?jahr=2025&nur_land=BW
    → {"Neujahrstag": {"datum": "2025-01-01", "hinweis": ""}, ...}

The payload is treated as data only. Every failure (network, timeout,
HTTP status, malformed JSON) is raised as HolidaySourceError so the
calendar can apply its fallback policy.
"""

import logging
from datetime import date

import httpx

from ...config import settings
from ...errors import HolidaySourceError

logger = logging.getLogger(__name__)


class FeiertageApiSource:
    """Fetch-by-(year, region) client for the public holiday API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url or settings.holiday_api_url
        self.timeout = timeout if timeout is not None else settings.holiday_fetch_timeout_seconds
        self._client = client

    def fetch(self, year: int, region: str) -> dict[date, str]:
        """Return {date: name} for the given year and region."""
        params = {"jahr": year, "nur_land": region}
        logger.info(f"Fetching public holidays year={year} region={region}")

        try:
            if self._client is not None:
                response = self._client.get(self.base_url, params=params, timeout=self.timeout)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(self.base_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise HolidaySourceError(
                f"holiday source request failed for {year}/{region}: {exc}"
            ) from exc
        except ValueError as exc:
            raise HolidaySourceError(
                f"holiday source returned invalid JSON for {year}/{region}"
            ) from exc

        return parse_feiertage_payload(payload, year)


def parse_feiertage_payload(payload, year: int) -> dict[date, str]:
    """Parse {"<name>": {"datum": "YYYY-MM-DD"}} into {date: name}."""
    if not isinstance(payload, dict):
        raise HolidaySourceError("holiday payload must be a JSON object")

    holidays: dict[date, str] = {}
    for name, info in payload.items():
        try:
            day = date.fromisoformat(info["datum"])
        except (TypeError, KeyError, ValueError) as exc:
            raise HolidaySourceError(f"malformed holiday entry {name!r}") from exc
        if day.year != year:
            continue
        holidays[day] = name

    return holidays
