# gassigeher/schemas/blocked_dates.py

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class BlockedDateCreate(BaseModel):
    date: date
    reason: str = Field(min_length=1)
    created_by: Optional[int] = None


class BlockedDateRead(BaseModel):
    id: int
    date: date
    reason: str
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
