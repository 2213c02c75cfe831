"""Reservation model"""

import uuid
from datetime import timedelta
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Index, CheckConstraint
from sqlalchemy.orm import relationship

from tablebook.database import Base
from tablebook.utils import utcnow

# Every reservation occupies its table for this long from its start instant
RESERVATION_DURATION = timedelta(minutes=120)

MIN_PARTY_SIZE = 1
MAX_PARTY_SIZE = 20


class ReservationStatus:
    CONFIRMED = "confirmed"
    SEATED = "seated"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

    ALL = (CONFIRMED, SEATED, CANCELLED, COMPLETED)

    # Statuses that hold the table
    BLOCKING = (CONFIRMED, SEATED)

    TRANSITIONS = {
        CONFIRMED: (SEATED, CANCELLED, COMPLETED),
        SEATED: (COMPLETED, CANCELLED),
        CANCELLED: (),
        COMPLETED: (),
    }


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    table_id = Column(String(36), ForeignKey("tables.id"), nullable=False)

    # Customer information
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=False)

    # Reservation details
    party_size = Column(Integer, nullable=False)
    reserved_at = Column(DateTime(timezone=True), nullable=False)

    status = Column(String(20), nullable=False, default=ReservationStatus.CONFIRMED)
    note = Column(Text)

    # Metadata
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    table = relationship("Table")

    __table_args__ = (
        Index("ix_reservations_table_reserved_at", "table_id", "reserved_at"),
        CheckConstraint("party_size BETWEEN 1 AND 20", name="ck_reservations_party_size"),
    )
