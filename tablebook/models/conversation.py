"""Chat conversation and message log models"""

import uuid
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from tablebook.database import Base
from tablebook.utils import utcnow


class ConversationState:
    IDLE = "idle"
    AWAITING_PARTY_SIZE = "awaiting_party_size"
    AWAITING_DATETIME = "awaiting_datetime"
    AWAITING_CONFIRMATION = "awaiting_confirmation"


class Conversation(Base):
    """Booking dialogue state for one chat participant"""
    __tablename__ = "conversations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    wa_user_id = Column(String(100), unique=True, nullable=False)
    state = Column(String(50), nullable=False, default=ConversationState.IDLE)

    # Booking in progress
    party_size = Column(Integer)
    reserved_at = Column(DateTime(timezone=True))
    note = Column(Text)
    customer_name = Column(String(255))

    # Bumped on every inbound message to serialize processing per user
    revision = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def clear_booking(self) -> None:
        """Drop the transient booking fields and return to idle"""
        self.state = ConversationState.IDLE
        self.party_size = None
        self.reserved_at = None
        self.note = None


class Message(Base):
    """Append-only log of chat traffic"""
    __tablename__ = "messages"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    conversation_id = Column(String(36), ForeignKey("conversations.id"))

    provider = Column(String(50), nullable=False)
    direction = Column(String(10), nullable=False)  # in, out
    external_id = Column(String(255))
    wa_user_id = Column(String(100), nullable=False)
    body = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    conversation = relationship("Conversation")
