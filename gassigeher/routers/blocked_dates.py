# gassigeher/routers/blocked_dates.py
# Whole days closed for booking; removing the block reopens the day

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories import BlockedDateRepository
from ..schemas.blocked_dates import BlockedDateCreate, BlockedDateRead

router = APIRouter(prefix="/blocked-dates", tags=["blocked_dates"])


@router.get("/", response_model=list[BlockedDateRead])
def list_blocked_dates(year: int | None = None, db: Session = Depends(get_db)):
    return BlockedDateRepository(db).list_blocked_dates(year)


@router.post("/", response_model=BlockedDateRead, status_code=status.HTTP_201_CREATED)
def create_blocked_date(data: BlockedDateCreate, db: Session = Depends(get_db)):
    return BlockedDateRepository(db).create_blocked_date(
        target_date=data.date,
        reason=data.reason,
        created_by=data.created_by,
    )


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_blocked_date(id: int, db: Session = Depends(get_db)):
    BlockedDateRepository(db).delete_blocked_date(id)
