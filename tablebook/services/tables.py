"""Table administration"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tablebook.errors import NotFound
from tablebook.models.table import Table
from tablebook.schemas.table import TableCreate

logger = structlog.get_logger()


async def list_tables(db: AsyncSession, active: Optional[bool] = None) -> List[Table]:
    query = select(Table).order_by(Table.capacity.asc(), Table.name.asc())
    if active is not None:
        query = query.where(Table.is_active == active)

    result = await db.execute(query)
    return list(result.scalars().all())


async def create_table(db: AsyncSession, data: TableCreate) -> Table:
    """Add a table. The caller commits."""
    table = Table(name=data.name, capacity=data.capacity, is_active=data.is_active)
    db.add(table)
    await db.flush()

    logger.info("Table created", table_id=table.id, name=table.name, capacity=table.capacity)
    return table


async def set_table_active(db: AsyncSession, table_id: str, is_active: bool) -> Table:
    """
    Activate or deactivate a table. Existing reservations are left untouched;
    an inactive table only stops accepting new bookings.
    """
    result = await db.execute(select(Table).where(Table.id == table_id))
    table = result.scalar_one_or_none()

    if not table:
        raise NotFound("Table not found")

    if table.is_active != is_active:
        table.is_active = is_active
        await db.flush()
        logger.info("Table availability changed", table_id=table.id, is_active=is_active)

    return table
