"""Tests for the availability checker"""

from datetime import datetime, timedelta, timezone

import pytest

from tablebook.models.reservation import Reservation, ReservationStatus
from tablebook.models.table import Table
from tablebook.services.availability import Availability, check_availability, find_conflict

START = datetime(2030, 3, 10, 20, 0, tzinfo=timezone.utc)


@pytest.fixture
async def booked_table(test_db):
    """A four-seat table with one confirmed reservation at START"""
    table = Table(name="Window", capacity=4)
    test_db.add(table)
    await test_db.flush()

    test_db.add(Reservation(
        table_id=table.id,
        customer_name="Existing Guest",
        customer_phone="+905550000000",
        party_size=2,
        reserved_at=START,
        status=ReservationStatus.CONFIRMED,
    ))
    await test_db.commit()
    return table


@pytest.mark.asyncio
async def test_free_slot_is_ok(test_db, booked_table):
    result = await check_availability(test_db, booked_table, 4, START + timedelta(hours=3))

    assert result is Availability.OK


@pytest.mark.asyncio
async def test_overlap_is_conflict(test_db, booked_table):
    result = await check_availability(test_db, booked_table, 2, START + timedelta(minutes=90))

    assert result is Availability.CONFLICT


@pytest.mark.asyncio
async def test_window_edges(test_db, booked_table):
    """The stored window is [START, START + 120min)"""
    assert await find_conflict(test_db, booked_table.id, START + timedelta(minutes=119)) is not None
    assert await find_conflict(test_db, booked_table.id, START - timedelta(minutes=119)) is not None
    assert await find_conflict(test_db, booked_table.id, START + timedelta(minutes=120)) is None
    assert await find_conflict(test_db, booked_table.id, START - timedelta(minutes=120)) is None


@pytest.mark.asyncio
async def test_capacity_checked_before_time(test_db, booked_table):
    result = await check_availability(test_db, booked_table, 5, START + timedelta(days=2))

    assert result is Availability.CAPACITY_EXCEEDED


@pytest.mark.asyncio
async def test_inactive_table(test_db, booked_table):
    booked_table.is_active = False
    await test_db.commit()

    result = await check_availability(test_db, booked_table, 2, START + timedelta(days=2))

    assert result is Availability.TABLE_INACTIVE


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,expected",
    [
        (ReservationStatus.SEATED, Availability.CONFLICT),
        (ReservationStatus.CANCELLED, Availability.OK),
        (ReservationStatus.COMPLETED, Availability.OK),
    ],
)
async def test_only_blocking_statuses_conflict(test_db, booked_table, status, expected):
    other_time = START + timedelta(days=1)
    test_db.add(Reservation(
        table_id=booked_table.id,
        customer_name="Other Guest",
        customer_phone="+905550000001",
        party_size=2,
        reserved_at=other_time,
        status=status,
    ))
    await test_db.commit()

    result = await check_availability(test_db, booked_table, 2, other_time + timedelta(minutes=30))

    assert result is expected


@pytest.mark.asyncio
async def test_offset_instants_are_compared_in_utc(test_db, booked_table):
    """22:30 at +03:00 is 19:30 UTC, which overlaps the stored window"""
    istanbul = timezone(timedelta(hours=3))
    candidate = datetime(2030, 3, 10, 22, 30, tzinfo=istanbul)

    assert await find_conflict(test_db, booked_table.id, candidate) is not None
