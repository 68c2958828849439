# gassigeher/schemas/holidays.py

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class HolidayCreate(BaseModel):
    date: date
    name: str = Field(min_length=1, max_length=255)
    is_active: bool = True
    created_by: Optional[int] = None

    model_config = {"from_attributes": True}


class HolidaySet(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    is_active: bool = True


class HolidayUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    is_active: Optional[bool] = None

    model_config = {"from_attributes": True}


class HolidayRead(BaseModel):
    id: int
    date: date
    name: str
    is_active: bool
    source: str
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class HolidayEntry(BaseModel):
    date: date
    name: str


class HolidayYearResponse(BaseModel):
    """Effective holidays of a year (external set merged with admin rows)."""
    year: int
    region: str
    holidays: list[HolidayEntry]


class HolidayRefreshResponse(BaseModel):
    year: int
    region: str
    version: int
    fetched_at: datetime
    expires_at: datetime
    holidays_count: int
