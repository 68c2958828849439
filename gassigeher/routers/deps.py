from fastapi import Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..services.booking_times import BookingEngine, build_booking_engine


def get_booking_engine(db: Session = Depends(get_db)) -> BookingEngine:
    return build_booking_engine(db)
