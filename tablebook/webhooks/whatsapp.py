"""Messaging webhook handlers for the chat booking flow"""

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tablebook.chat import get_intent_classifier
from tablebook.chat.state_machine import ConversationStateMachine
from tablebook.config import settings
from tablebook.database import get_db
from tablebook.errors import ReservationError
from tablebook.models.conversation import Message
from tablebook.schemas.webhook import IncomingMessage
from tablebook.services.ingest import Admission, admit

router = APIRouter()
logger = structlog.get_logger()

# Outbound delivery is done by the relay that called us
NEXT_ACTION = "relay_should_send_reply"


@lru_cache()
def get_state_machine() -> ConversationStateMachine:
    return ConversationStateMachine.from_settings(
        settings,
        classifier=get_intent_classifier(settings.intent_classifier),
    )


@router.get("")
async def verify_subscription(
    mode: Optional[str] = Query(default=None, alias="hub.mode"),
    token: Optional[str] = Query(default=None, alias="hub.verify_token"),
    challenge: Optional[str] = Query(default=None, alias="hub.challenge"),
):
    """Answer the provider's subscription handshake"""
    verify_token = settings.webhook_verify_token

    if mode == "subscribe" and token and challenge and verify_token and token == verify_token:
        logger.info("Webhook subscription verified")
        return PlainTextResponse(challenge, status_code=200)

    logger.warning("Webhook subscription rejected", mode=mode)
    return JSONResponse({"ok": False}, status_code=403)


@router.post("")
async def receive_message(
    payload: IncomingMessage,
    x_webhook_token: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db),
    state_machine: ConversationStateMachine = Depends(get_state_machine),
):
    """
    Handle one inbound chat message.
    The reply is returned to the relay, which delivers it to the user.
    """
    verify_token = settings.webhook_verify_token
    if verify_token and x_webhook_token != verify_token:
        logger.warning("Webhook token mismatch")
        raise HTTPException(status_code=401, detail="unauthorized")

    external_id = payload.external_id
    provider = settings.webhook_provider

    try:
        admission = await admit(
            db,
            provider,
            external_id,
            payload=payload.model_dump_json(by_alias=True, exclude_none=True),
        )
    except ReservationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    if admission is Admission.DUPLICATE:
        return {"ok": True, "duplicate": True}

    result = await state_machine.handle(
        db,
        wa_user_id=payload.sender,
        text=payload.text,
        external_id=payload.message_id,
    )

    db.add(Message(
        conversation_id=result.conversation_id,
        provider=provider,
        direction="out",
        wa_user_id=(payload.sender or "").strip() or "unknown",
        body=result.text,
    ))
    await db.commit()

    logger.info(
        "Webhook processed",
        external_id=external_id,
        conversation_id=result.conversation_id,
        state=result.state,
    )

    return {"ok": True, "reply": result.text, "nextAction": NEXT_ACTION}
