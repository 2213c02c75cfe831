"""Table schemas"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class TableCreate(BaseModel):
    """Create table request"""
    name: str = Field(min_length=1, max_length=100)
    capacity: int = Field(ge=1)
    is_active: bool = True

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TableUpdate(BaseModel):
    """Only the active flag of a table may change"""
    is_active: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TableResponse(BaseModel):
    """Table response"""
    id: str
    name: str
    capacity: int
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
