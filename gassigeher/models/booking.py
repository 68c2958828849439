from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata

RESERVATION_SLOT_CONSTRAINT = "uq_reservations_resource_date_time"


class TimeRule(Base):
    __tablename__ = 'booking_time_rules'
    __table_args__ = (
        UniqueConstraint('category', 'name', name='uq_booking_time_rules_category_name'),
    )

    id = Column(Integer, primary_key=True)
    category = Column(String(20), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    is_blocked = Column(Boolean, nullable=False, default=False, server_default=text('0'))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Holiday(Base):
    __tablename__ = 'custom_holidays'

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=text('1'))
    source = Column(String(20), nullable=False)
    created_by = Column(Integer)
    created_at = Column(DateTime, server_default=func.now())


class BlockedDate(Base):
    __tablename__ = 'blocked_dates'

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, unique=True, index=True)
    reason = Column(Text, nullable=False)
    created_by = Column(Integer)
    created_at = Column(DateTime, server_default=func.now())


class HolidayCache(Base):
    __tablename__ = 'holiday_cache'
    __table_args__ = (
        UniqueConstraint('year', 'region', name='uq_holiday_cache_year_region'),
    )

    id = Column(Integer, primary_key=True)
    year = Column(Integer, nullable=False)
    region = Column(String(10), nullable=False)
    data = Column(Text, nullable=False)
    version = Column(Integer, nullable=False, default=1)
    fetched_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False)


class Reservation(Base):
    __tablename__ = 'reservations'
    __table_args__ = (
        UniqueConstraint('resource_id', 'date', 'time', name=RESERVATION_SLOT_CONSTRAINT),
    )

    id = Column(Integer, primary_key=True)
    resource_id = Column(Integer, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)
    user_id = Column(Integer)
    status = Column(String(20), nullable=False, default='scheduled', server_default=text("'scheduled'"))
    requires_approval = Column(Boolean, nullable=False, default=False, server_default=text('0'))
    approval_status = Column(String(20), nullable=False, default='approved', server_default=text("'approved'"))
    approved_by = Column(Integer)
    approved_at = Column(DateTime)
    rejection_reason = Column(Text)
    notes = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class SystemSetting(Base):
    __tablename__ = 'system_settings'

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
