"""Reservation schemas"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, AwareDatetime
from pydantic.alias_generators import to_camel

from tablebook.models.reservation import MIN_PARTY_SIZE, MAX_PARTY_SIZE
from tablebook.schemas.table import TableResponse


class ReservationCreate(BaseModel):
    """Create reservation request"""
    customer_name: str = Field(min_length=2, max_length=255)
    customer_phone: str = Field(min_length=8, max_length=50)
    note: Optional[str] = None
    party_size: int = Field(ge=MIN_PARTY_SIZE, le=MAX_PARTY_SIZE)
    table_id: str = Field(min_length=1)
    reserved_at: AwareDatetime

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ReservationStatusUpdate(BaseModel):
    """Move a reservation to another status"""
    status: str


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: str
    customer_name: str
    customer_phone: str
    note: Optional[str]
    party_size: int
    table_id: str
    reserved_at: datetime
    status: str
    created_at: Optional[datetime] = None
    table: TableResponse

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class ReservationListResponse(BaseModel):
    """Upcoming reservations plus the tables that can take new ones"""
    reservations: List[ReservationResponse]
    tables: List[TableResponse]
