# gassigeher/schemas/booking_times.py

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..domain import normalize_time_str

Category = Literal["weekday", "weekend"]


class TimeRuleCreate(BaseModel):
    category: Category
    name: str = Field(min_length=1, max_length=100)
    start_time: str = Field(description="HH:MM")
    end_time: str = Field(description="HH:MM, exclusive")
    is_blocked: bool = False

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_times(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return normalize_time_str(value)

    model_config = {"from_attributes": True}


class TimeRuleUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_blocked: Optional[bool] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_times(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return normalize_time_str(value)

    model_config = {"from_attributes": True}


class TimeRuleRead(BaseModel):
    id: int
    category: Category
    name: str
    start_time: str
    end_time: str
    is_blocked: bool

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TimeRulesResponse(BaseModel):
    weekday: list[TimeRuleRead]
    weekend: list[TimeRuleRead]


class AvailableSlotsResponse(BaseModel):
    """Bookable slots of a day."""
    date: date
    category: Category
    granularity_minutes: int
    slots: list[str]

    model_config = {"from_attributes": True}


class TimeCheckResponse(BaseModel):
    """Result of validating a proposed (date, time)."""
    date: date
    time: str
    ok: bool
    reason: Optional[str] = None
    category: Optional[Category] = None
    requires_approval: bool = False
