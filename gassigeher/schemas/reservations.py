# gassigeher/schemas/reservations.py

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..domain import normalize_time_str


class ReservationCreate(BaseModel):
    resource_id: int
    date: date
    time: str = Field(description="HH:MM")
    user_id: Optional[int] = None
    notes: Optional[str] = None

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: str) -> str:
        return normalize_time_str(value)

    model_config = {"from_attributes": True}


class ReservationRead(BaseModel):
    id: int

    resource_id: int
    date: date
    time: str
    user_id: Optional[int] = None

    status: str
    requires_approval: bool
    approval_status: str
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    notes: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
