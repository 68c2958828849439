# gassigeher/routers/reservations.py
# Approval and status transitions live in the admin workflow: PATCH = 405, DELETE = 405

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..domain import ReserveStatus
from ..repositories import ReservationRepository
from ..schemas.reservations import ReservationCreate, ReservationRead
from ..services.booking_times import BookingEngine
from .deps import get_booking_engine

router = APIRouter(prefix="/reservations", tags=["reservations"])

_OUTCOME_STATUS = {
    ReserveStatus.CONFLICT: status.HTTP_409_CONFLICT,
    ReserveStatus.REJECTED: status.HTTP_422_UNPROCESSABLE_CONTENT,
    ReserveStatus.SYSTEM_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@router.get("/", response_model=list[ReservationRead])
def list_reservations(
    resource_id: int | None = None,
    target_date: date | None = None,
    db: Session = Depends(get_db),
):
    return ReservationRepository(db).list_reservations(resource_id, target_date)


@router.get("/{id}", response_model=ReservationRead)
def get_reservation(id: int, db: Session = Depends(get_db)):
    return ReservationRepository(db).require(id)


@router.post("/", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
def create_reservation(
    data: ReservationCreate,
    engine: BookingEngine = Depends(get_booking_engine),
):
    outcome = engine.guard.reserve(
        resource_id=data.resource_id,
        target_date=data.date,
        time_of_day=data.time,
        user_id=data.user_id,
        notes=data.notes,
    )
    if not outcome.created:
        raise HTTPException(
            status_code=_OUTCOME_STATUS[outcome.status],
            detail=outcome.reason,
        )
    return outcome.reservation


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}")
def delete_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )
