"""Table availability decisions"""

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tablebook.models.table import Table
from tablebook.models.reservation import Reservation, ReservationStatus, RESERVATION_DURATION
from tablebook.utils import as_utc


class Availability(str, enum.Enum):
    OK = "ok"
    CONFLICT = "conflict"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    TABLE_INACTIVE = "table_inactive"


async def find_conflict(
    db: AsyncSession,
    table_id: str,
    start: datetime,
) -> Optional[Reservation]:
    """
    Return a blocking reservation whose window overlaps [start, start + duration).

    Both windows have the same fixed length, so two windows overlap exactly when
    the stored start lies strictly inside (start - duration, start + duration).
    Back-to-back windows do not conflict.
    """
    start = as_utc(start)
    end = start + RESERVATION_DURATION

    result = await db.execute(
        select(Reservation)
        .where(
            Reservation.table_id == table_id,
            Reservation.status.in_(ReservationStatus.BLOCKING),
            Reservation.reserved_at < end,
            Reservation.reserved_at > start - RESERVATION_DURATION,
        )
        .limit(1)
    )
    return result.scalars().first()


async def check_availability(
    db: AsyncSession,
    table: Table,
    party_size: int,
    start: datetime,
) -> Availability:
    """Decide whether `table` can take a party of `party_size` at `start`"""
    if not table.is_active:
        return Availability.TABLE_INACTIVE

    if party_size > table.capacity:
        return Availability.CAPACITY_EXCEEDED

    if await find_conflict(db, table.id, start) is not None:
        return Availability.CONFLICT

    return Availability.OK
