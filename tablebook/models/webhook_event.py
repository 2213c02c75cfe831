"""Webhook idempotency ledger"""

import uuid
from sqlalchemy import Column, String, DateTime, Text, UniqueConstraint

from tablebook.database import Base
from tablebook.utils import utcnow


class WebhookEvent(Base):
    """One row per externally delivered event; never updated"""
    __tablename__ = "webhook_events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    provider = Column(String(50), nullable=False)
    external_id = Column(String(255), nullable=False)
    payload = Column(Text)
    received_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        UniqueConstraint("provider", "external_id", name="uq_webhook_events_provider_external_id"),
    )
