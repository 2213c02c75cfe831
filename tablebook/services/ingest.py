"""Webhook ingest guard: drops events that were already delivered"""

import enum
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tablebook.errors import MissingId
from tablebook.models.webhook_event import WebhookEvent

logger = structlog.get_logger()


class Admission(str, enum.Enum):
    ACCEPTED = "accepted"
    DUPLICATE = "duplicate"


async def admit(
    db: AsyncSession,
    provider: str,
    external_id: Optional[str],
    payload: Optional[str] = None,
) -> Admission:
    """
    Record the event in the idempotency ledger.

    The unique (provider, external_id) constraint is the only dedupe
    mechanism. On DUPLICATE the session has been rolled back and the caller
    must answer without further side effects. On ACCEPTED the ledger row is
    pending in the caller's transaction, so a failure later in the request
    leaves the event unrecorded and a redelivery is processed again.
    """
    if not external_id:
        raise MissingId("missing external id")

    db.add(WebhookEvent(provider=provider, external_id=external_id, payload=payload))

    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        logger.info("Duplicate webhook event", provider=provider, external_id=external_id)
        return Admission.DUPLICATE

    return Admission.ACCEPTED
