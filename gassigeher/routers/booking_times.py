# gassigeher/routers/booking_times.py
"""
Booking time endpoints.

GET  /booking-times/available-slots - bookable slots of a day
GET  /booking-times/check           - validate a proposed (date, time)
GET/POST/PUT/DELETE /booking-times/rules - rule administration
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from ..schemas.booking_times import (
    AvailableSlotsResponse,
    TimeCheckResponse,
    TimeRuleCreate,
    TimeRuleRead,
    TimeRuleUpdate,
    TimeRulesResponse,
)
from ..services.booking_times import BookingEngine
from .deps import get_booking_engine

router = APIRouter(prefix="/booking-times", tags=["booking_times"])


@router.get("/available-slots", response_model=AvailableSlotsResponse)
def get_available_slots(
    target_date: date = Query(..., alias="date"),
    engine: BookingEngine = Depends(get_booking_engine),
):
    slots = engine.slots.slots_for(target_date)
    return AvailableSlotsResponse(
        date=target_date,
        category=engine.classifier.classify(target_date).value,
        granularity_minutes=engine.config.granularity_minutes,
        slots=slots,
    )


@router.get("/check", response_model=TimeCheckResponse)
def check_booking_time(
    target_date: date = Query(..., alias="date"),
    time: str = Query(..., description="HH:MM"),
    engine: BookingEngine = Depends(get_booking_engine),
):
    result = engine.validator.validate(target_date, time)
    return TimeCheckResponse(
        date=target_date,
        time=time,
        ok=result.ok,
        reason=result.reason,
        category=result.category.value if result.category else None,
        requires_approval=result.ok and engine.approval.requires_approval(time),
    )


@router.get("/rules", response_model=TimeRulesResponse)
def list_rules(engine: BookingEngine = Depends(get_booking_engine)):
    grouped = engine.rule_set.list_rules()
    return TimeRulesResponse(
        weekday=[TimeRuleRead.model_validate(r) for r in grouped.get("weekday", [])],
        weekend=[TimeRuleRead.model_validate(r) for r in grouped.get("weekend", [])],
    )


@router.post("/rules", response_model=TimeRuleRead, status_code=status.HTTP_201_CREATED)
def create_rule(
    data: TimeRuleCreate,
    engine: BookingEngine = Depends(get_booking_engine),
):
    return engine.rule_set.create_rule(**data.model_dump())


@router.put("/rules/{id}", response_model=TimeRuleRead)
def update_rule(
    id: int,
    data: TimeRuleUpdate,
    engine: BookingEngine = Depends(get_booking_engine),
):
    return engine.rule_set.update_rule(id, **data.model_dump())


@router.delete("/rules/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rule(id: int, engine: BookingEngine = Depends(get_booking_engine)):
    engine.rule_set.delete_rule(id)
