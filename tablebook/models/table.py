"""Dining table model"""

import uuid
from sqlalchemy import Column, String, Integer, Boolean, DateTime, CheckConstraint

from tablebook.database import Base
from tablebook.utils import utcnow


class Table(Base):
    """A bookable table. Deactivated rather than deleted."""
    __tablename__ = "tables"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    capacity = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    # Bumped by every booking attempt to take a row write lock
    booking_seq = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_tables_capacity_positive"),
    )

    def __repr__(self) -> str:
        return f"<Table(id={self.id}, name={self.name}, capacity={self.capacity})>"
