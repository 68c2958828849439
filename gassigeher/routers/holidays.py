# gassigeher/routers/holidays.py

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from ..schemas.holidays import (
    HolidayCreate,
    HolidayEntry,
    HolidayRead,
    HolidayRefreshResponse,
    HolidaySet,
    HolidayUpdate,
    HolidayYearResponse,
)
from ..services.booking_times import BookingEngine
from .deps import get_booking_engine

router = APIRouter(prefix="/holidays", tags=["holidays"])


@router.get("/", response_model=HolidayYearResponse)
def get_holidays(
    year: int = Query(..., ge=1900, le=2999),
    engine: BookingEngine = Depends(get_booking_engine),
):
    """Effective holidays of a year (external set merged with admin rows)."""
    region = engine.config.holiday_region
    holidays = engine.calendar.holidays_for_year(year, region)
    return HolidayYearResponse(
        year=year,
        region=region,
        holidays=[HolidayEntry(date=day, name=name) for day, name in holidays.items()],
    )


@router.get("/custom", response_model=list[HolidayRead])
def list_custom_holidays(
    year: int | None = None,
    engine: BookingEngine = Depends(get_booking_engine),
):
    return engine.calendar.list_custom_holidays(year)


@router.post("/custom", response_model=HolidayRead, status_code=status.HTTP_201_CREATED)
def create_holiday(data: HolidayCreate, engine: BookingEngine = Depends(get_booking_engine)):
    return engine.calendar.create_holiday(
        target_date=data.date,
        name=data.name,
        is_active=data.is_active,
        created_by=data.created_by,
    )


@router.put("/custom/date/{target_date}", response_model=HolidayRead)
def set_holiday(
    target_date: date,
    data: HolidaySet,
    engine: BookingEngine = Depends(get_booking_engine),
):
    """Create or overwrite the holiday row of a date (also fetched ones)."""
    return engine.calendar.set_holiday(target_date, data.name, data.is_active)


@router.put("/custom/{id}", response_model=HolidayRead)
def update_holiday(
    id: int,
    data: HolidayUpdate,
    engine: BookingEngine = Depends(get_booking_engine),
):
    return engine.calendar.update_holiday(id, **data.model_dump())


@router.delete("/custom/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_holiday(id: int, engine: BookingEngine = Depends(get_booking_engine)):
    engine.calendar.delete_holiday(id)


@router.post("/refresh", response_model=HolidayRefreshResponse)
def refresh_holidays(
    year: int = Query(..., ge=1900, le=2999),
    engine: BookingEngine = Depends(get_booking_engine),
):
    """Refetch the external holiday set for a year (admin endpoint)."""
    entry = engine.calendar.refresh(year)
    return HolidayRefreshResponse(
        year=entry.year,
        region=entry.region,
        version=entry.version,
        fetched_at=entry.fetched_at,
        expires_at=entry.expires_at,
        holidays_count=len(entry.holidays),
    )
