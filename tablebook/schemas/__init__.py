"""Pydantic schemas for request/response validation"""

from tablebook.schemas.table import (
    TableCreate,
    TableUpdate,
    TableResponse,
)
from tablebook.schemas.reservation import (
    ReservationCreate,
    ReservationStatusUpdate,
    ReservationResponse,
    ReservationListResponse,
)
from tablebook.schemas.webhook import IncomingMessage

__all__ = [
    "TableCreate",
    "TableUpdate",
    "TableResponse",
    "ReservationCreate",
    "ReservationStatusUpdate",
    "ReservationResponse",
    "ReservationListResponse",
    "IncomingMessage",
]
