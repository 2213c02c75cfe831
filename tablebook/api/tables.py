"""Table administration endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from tablebook.database import get_db
from tablebook.errors import ReservationError
from tablebook.schemas.table import TableCreate, TableUpdate, TableResponse
from tablebook.services import tables as table_service

router = APIRouter()


@router.get("", response_model=List[TableResponse])
async def list_tables(
    active: Optional[bool] = None,
    db: AsyncSession = Depends(get_db),
):
    """List tables by ascending capacity"""
    return await table_service.list_tables(db, active=active)


@router.post("", response_model=TableResponse, status_code=201)
async def create_table(
    table_data: TableCreate,
    db: AsyncSession = Depends(get_db),
):
    """Add a table"""
    table = await table_service.create_table(db, table_data)
    await db.commit()
    return table


@router.patch("/{table_id}", response_model=TableResponse)
async def update_table(
    table_id: str,
    table_data: TableUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Activate or deactivate a table"""
    try:
        table = await table_service.set_table_active(db, table_id, table_data.is_active)
    except ReservationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    await db.commit()
    return table
