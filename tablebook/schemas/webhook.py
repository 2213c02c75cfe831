"""Inbound messaging webhook schemas"""

from typing import Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class IncomingMessage(BaseModel):
    """Message event as delivered by the relay"""
    event_id: Optional[str] = None
    message_id: Optional[str] = None
    sender: Optional[str] = Field(default=None, alias="from")
    text: Optional[str] = None
    timestamp: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @property
    def external_id(self) -> Optional[str]:
        return self.event_id or self.message_id
