"""Reservation API endpoints"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from tablebook.config import settings
from tablebook.database import get_db
from tablebook.errors import ReservationError
from tablebook.schemas.reservation import (
    ReservationCreate,
    ReservationStatusUpdate,
    ReservationResponse,
    ReservationListResponse,
)
from tablebook.services import reservations as reservation_service

router = APIRouter()


@router.get("", response_model=ReservationListResponse)
async def list_reservations(db: AsyncSession = Depends(get_db)):
    """Upcoming reservations with their tables, plus the active tables"""
    reservations, tables = await reservation_service.list_upcoming(
        db, limit=settings.upcoming_reservations_limit
    )
    return ReservationListResponse(reservations=reservations, tables=tables)


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    db: AsyncSession = Depends(get_db),
):
    """Book a table"""
    try:
        reservation = await reservation_service.book_direct(db, reservation_data)
    except ReservationError as e:
        await db.rollback()
        raise HTTPException(status_code=e.status_code, detail=e.message)

    await db.commit()
    return reservation


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get reservation details"""
    try:
        return await reservation_service.get_reservation(db, reservation_id)
    except ReservationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.patch("/{reservation_id}/status", response_model=ReservationResponse)
async def update_reservation_status(
    reservation_id: str,
    status_data: ReservationStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Seat, complete or cancel a reservation"""
    try:
        reservation = await reservation_service.change_status(
            db, reservation_id, status_data.status
        )
    except ReservationError as e:
        await db.rollback()
        raise HTTPException(status_code=e.status_code, detail=e.message)

    await db.commit()
    return reservation
