"""
Conversation state machine for chat-driven bookings.

One Conversation row per chat participant holds the dialogue state. Each
inbound message locks that row for the rest of the request transaction, so
messages from the same user are processed one at a time even across service
instances.
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from tablebook.chat.classifier import BaseIntentClassifier, Intent
from tablebook.chat.replies import ReplyCatalog
from tablebook.errors import Conflict, IncompleteState, NoTableAvailable
from tablebook.models.conversation import Conversation, ConversationState, Message
from tablebook.services.reservations import book_for_conversation
from tablebook.utils import as_utc, utcnow

logger = structlog.get_logger()


@dataclass
class ChatReply:
    text: str
    conversation_id: Optional[str] = None
    state: Optional[str] = None


async def claim_conversation(db: AsyncSession, wa_user_id: str) -> Conversation:
    """
    Upsert the user's conversation and hold a row write lock on it until the
    transaction ends.
    """
    insert = pg_insert if db.get_bind().dialect.name == "postgresql" else sqlite_insert
    await db.execute(
        insert(Conversation)
        .values(wa_user_id=wa_user_id)
        .on_conflict_do_nothing(index_elements=["wa_user_id"])
    )
    await db.execute(
        update(Conversation)
        .where(Conversation.wa_user_id == wa_user_id)
        .values(revision=Conversation.revision + 1)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(
        select(Conversation)
        .where(Conversation.wa_user_id == wa_user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


class ConversationStateMachine:
    """Advances a user's booking dialogue one inbound message at a time"""

    def __init__(
        self,
        classifier: BaseIntentClassifier,
        replies: ReplyCatalog,
        timezone: tzinfo,
        provider: str,
        customer_name: str,
        reservation_note: str,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.classifier = classifier
        self.replies = replies
        self.timezone = timezone
        self.provider = provider
        self.customer_name = customer_name
        self.reservation_note = reservation_note
        self.clock = clock

    @classmethod
    def from_settings(cls, settings, classifier: BaseIntentClassifier) -> "ConversationStateMachine":
        return cls(
            classifier=classifier,
            replies=ReplyCatalog(settings.chat_language),
            timezone=ZoneInfo(settings.restaurant_timezone),
            provider=settings.webhook_provider,
            customer_name=settings.chat_customer_name,
            reservation_note=settings.chat_reservation_note,
        )

    def now(self) -> datetime:
        return self.clock().astimezone(self.timezone)

    async def handle(
        self,
        db: AsyncSession,
        wa_user_id: Optional[str],
        text: Optional[str],
        external_id: Optional[str] = None,
    ) -> ChatReply:
        """Log the inbound message, advance the dialogue and return the reply. The caller commits."""
        wa_user_id = (wa_user_id or "").strip()
        text = (text or "").strip()
        if not wa_user_id or not text:
            return ChatReply(self.replies.render("malformed"))

        conversation = await claim_conversation(db, wa_user_id)

        db.add(Message(
            conversation_id=conversation.id,
            provider=self.provider,
            direction="in",
            external_id=external_id,
            wa_user_id=wa_user_id,
            body=text,
        ))
        await db.flush()

        previous_state = conversation.state
        reply = await self._advance(db, conversation, text)
        await db.flush()

        if conversation.state != previous_state:
            logger.info(
                "Conversation advanced",
                conversation_id=conversation.id,
                wa_user=wa_user_id[-4:],
                from_state=previous_state,
                to_state=conversation.state,
            )

        return ChatReply(reply, conversation_id=conversation.id, state=conversation.state)

    async def _advance(self, db: AsyncSession, conversation: Conversation, text: str) -> str:
        intents = self.classifier.detect_intents(text)

        # Restarting wins over whatever the conversation was waiting for
        if Intent.START_BOOKING in intents:
            conversation.clear_booking()
            conversation.state = ConversationState.AWAITING_PARTY_SIZE
            return self.replies.render("ask_party_size")

        if conversation.state == ConversationState.AWAITING_PARTY_SIZE:
            party_size = self.classifier.extract_party_size(text)
            if party_size is None:
                return self.replies.render("retry_party_size")

            conversation.party_size = party_size
            conversation.state = ConversationState.AWAITING_DATETIME
            return self.replies.render("ask_datetime")

        if conversation.state == ConversationState.AWAITING_DATETIME:
            requested = self.classifier.extract_datetime(text, self.now())
            if requested is None:
                return self.replies.render("retry_datetime")

            conversation.reserved_at = as_utc(requested)
            conversation.state = ConversationState.AWAITING_CONFIRMATION
            return self.replies.render(
                "confirm",
                party_size=conversation.party_size,
                when=self.replies.format_datetime(requested.astimezone(self.timezone)),
            )

        if conversation.state == ConversationState.AWAITING_CONFIRMATION:
            if Intent.CONFIRM in intents:
                return await self._book(db, conversation)

            if Intent.CANCEL in intents:
                conversation.clear_booking()
                return self.replies.render("cancelled")

            return self.replies.render("confirm_or_cancel")

        return self.replies.render("start_hint")

    async def _book(self, db: AsyncSession, conversation: Conversation) -> str:
        try:
            reservation = await book_for_conversation(
                db,
                conversation.wa_user_id,
                customer_name=self.customer_name,
                note=self.reservation_note,
            )
        except (NoTableAvailable, Conflict):
            conversation.clear_booking()
            return self.replies.render("no_table")
        except IncompleteState:
            conversation.clear_booking()
            return self.replies.render("incomplete")

        return self.replies.render("booked", table=reservation.table.name)
