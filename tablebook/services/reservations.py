"""Reservation booking service shared by the API and the chat flow"""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import structlog

from tablebook.errors import (
    CapacityExceeded,
    Conflict,
    IncompleteState,
    InvalidStatusTransition,
    NoTableAvailable,
    NotFound,
    ValidationError,
)
from tablebook.models.conversation import Conversation
from tablebook.models.reservation import (
    Reservation,
    ReservationStatus,
    RESERVATION_DURATION,
    MIN_PARTY_SIZE,
    MAX_PARTY_SIZE,
)
from tablebook.models.table import Table
from tablebook.schemas.reservation import ReservationCreate
from tablebook.services.availability import Availability, check_availability
from tablebook.utils import as_utc, utcnow

logger = structlog.get_logger()


async def lock_table(db: AsyncSession, table_id: str) -> Optional[Table]:
    """
    Take a row write lock on a table for the rest of the transaction and
    return its current state.

    Every booking goes through here before checking availability, so two
    bookings for the same table can never both pass the overlap check.
    """
    await db.execute(
        update(Table)
        .where(Table.id == table_id)
        .values(booking_seq=Table.booking_seq + 1)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(
        select(Table)
        .where(Table.id == table_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _reserve(
    db: AsyncSession,
    table: Table,
    *,
    customer_name: str,
    customer_phone: str,
    party_size: int,
    reserved_at: datetime,
    note: Optional[str],
) -> Reservation:
    """Check a locked table and insert the reservation"""
    availability = await check_availability(db, table, party_size, reserved_at)

    if availability is Availability.TABLE_INACTIVE:
        raise NotFound("Table not found")
    if availability is Availability.CAPACITY_EXCEEDED:
        raise CapacityExceeded("Table capacity is insufficient for this party")
    if availability is Availability.CONFLICT:
        raise Conflict("Table is already booked at this time")

    reservation = Reservation(
        table=table,
        customer_name=customer_name,
        customer_phone=customer_phone,
        party_size=party_size,
        reserved_at=reserved_at,
        note=note,
        status=ReservationStatus.CONFIRMED,
    )

    try:
        # Savepoint keeps the outer transaction usable after a rejected insert
        async with db.begin_nested():
            db.add(reservation)
    except IntegrityError as e:
        # Storage-level overlap constraint (PostgreSQL)
        raise Conflict("Table is already booked at this time") from e

    return reservation


async def book_direct(db: AsyncSession, request: ReservationCreate) -> Reservation:
    """Book the requested table. The caller commits."""
    if not MIN_PARTY_SIZE <= request.party_size <= MAX_PARTY_SIZE:
        raise ValidationError(f"Party size must be between {MIN_PARTY_SIZE} and {MAX_PARTY_SIZE}")

    reserved_at = as_utc(request.reserved_at)

    table = await lock_table(db, request.table_id)
    if table is None or not table.is_active:
        logger.info("Booking rejected", reason="table_not_found", table_id=request.table_id)
        raise NotFound("Table not found")

    try:
        reservation = await _reserve(
            db,
            table,
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            party_size=request.party_size,
            reserved_at=reserved_at,
            note=request.note,
        )
    except (CapacityExceeded, Conflict) as e:
        logger.info(
            "Booking rejected",
            reason=type(e).__name__,
            table_id=table.id,
            party_size=request.party_size,
            reserved_at=reserved_at.isoformat(),
        )
        raise

    logger.info(
        "Reservation created",
        reservation_id=reservation.id,
        table_id=table.id,
        party_size=reservation.party_size,
        channel="api",
        phone=request.customer_phone[-4:],
    )
    return reservation


async def book_for_conversation(
    db: AsyncSession,
    wa_user_id: str,
    *,
    customer_name: str,
    note: Optional[str] = None,
) -> Reservation:
    """
    Book the smallest free table that fits the party collected in a chat.

    Candidates are tried in ascending capacity order; each one is locked and
    run through the same availability check as a direct booking. On success
    the conversation's booking fields are cleared. The caller commits.
    """
    result = await db.execute(
        select(Conversation).where(Conversation.wa_user_id == wa_user_id)
    )
    conversation = result.scalar_one_or_none()

    if conversation is None or not conversation.party_size or conversation.reserved_at is None:
        raise IncompleteState("Party size and time are required before booking")

    party_size = conversation.party_size
    reserved_at = as_utc(conversation.reserved_at)

    result = await db.execute(
        select(Table.id)
        .where(Table.is_active == True, Table.capacity >= party_size)
        .order_by(Table.capacity.asc(), Table.name.asc(), Table.id.asc())
    )
    candidate_ids = result.scalars().all()

    for table_id in candidate_ids:
        table = await lock_table(db, table_id)
        if table is None:
            continue

        availability = await check_availability(db, table, party_size, reserved_at)
        if availability is not Availability.OK:
            continue

        reservation = await _reserve(
            db,
            table,
            customer_name=conversation.customer_name or customer_name,
            customer_phone=wa_user_id,
            party_size=party_size,
            reserved_at=reserved_at,
            note=conversation.note or note,
        )
        conversation.clear_booking()

        logger.info(
            "Reservation created",
            reservation_id=reservation.id,
            table_id=table.id,
            party_size=party_size,
            channel="chat",
            phone=wa_user_id[-4:],
        )
        return reservation

    logger.info(
        "Booking rejected",
        reason="no_table_available",
        party_size=party_size,
        reserved_at=reserved_at.isoformat(),
        candidates=len(candidate_ids),
    )
    raise NoTableAvailable("No suitable table is available")


async def list_upcoming(
    db: AsyncSession,
    limit: int,
    now: Optional[datetime] = None,
) -> Tuple[List[Reservation], List[Table]]:
    """Reservations whose window has not ended yet, and the active tables"""
    now = as_utc(now) if now else utcnow()

    result = await db.execute(
        select(Reservation)
        .where(Reservation.reserved_at > now - RESERVATION_DURATION)
        .options(selectinload(Reservation.table))
        .order_by(Reservation.reserved_at.asc())
        .limit(limit)
    )
    reservations = result.scalars().all()

    result = await db.execute(
        select(Table)
        .where(Table.is_active == True)
        .order_by(Table.capacity.asc(), Table.name.asc())
    )
    tables = result.scalars().all()

    return list(reservations), list(tables)


async def get_reservation(db: AsyncSession, reservation_id: str) -> Reservation:
    result = await db.execute(
        select(Reservation)
        .where(Reservation.id == reservation_id)
        .options(selectinload(Reservation.table))
    )
    reservation = result.scalar_one_or_none()

    if not reservation:
        raise NotFound("Reservation not found")

    return reservation


async def change_status(
    db: AsyncSession,
    reservation_id: str,
    new_status: str,
) -> Reservation:
    """Apply a status transition. The caller commits."""
    if new_status not in ReservationStatus.ALL:
        raise ValidationError(f"Unknown status: {new_status}")

    reservation = await get_reservation(db, reservation_id)

    if new_status not in ReservationStatus.TRANSITIONS[reservation.status]:
        raise InvalidStatusTransition(
            f"Cannot move reservation from {reservation.status} to {new_status}"
        )

    logger.info(
        "Reservation status changed",
        reservation_id=reservation.id,
        from_status=reservation.status,
        to_status=new_status,
    )
    reservation.status = new_status
    await db.flush()

    return reservation
