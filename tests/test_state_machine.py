"""Tests for the conversation state machine outside the HTTP layer"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy import select

from tablebook.chat.keyword import KeywordIntentClassifier
from tablebook.chat.replies import ReplyCatalog
from tablebook.chat.state_machine import ConversationStateMachine
from tablebook.errors import Conflict
from tablebook.models.conversation import Conversation, ConversationState
from tablebook.models.reservation import Reservation
from tablebook.utils import as_utc

USER = "+905557654321"


@pytest.fixture
def turkish_machine():
    """Istanbul restaurant, Turkish replies, clock fixed at 13:00 local"""
    return ConversationStateMachine(
        classifier=KeywordIntentClassifier(),
        replies=ReplyCatalog("tr"),
        timezone=ZoneInfo("Europe/Istanbul"),
        provider="whatsapp",
        customer_name="WhatsApp Müşterisi",
        reservation_note="WhatsApp bot üzerinden",
        clock=lambda: datetime(2030, 5, 20, 10, 0, tzinfo=timezone.utc),
    )


async def say(machine, db, text):
    reply = await machine.handle(db, USER, text)
    await db.commit()
    return reply


@pytest.mark.asyncio
async def test_turkish_dialogue_books_in_local_time(test_db, test_tables, turkish_machine):
    first = await say(turkish_machine, test_db, "Rezervasyon yapmak istiyorum")
    second = await say(turkish_machine, test_db, "2 kişiyiz")
    third = await say(turkish_machine, test_db, "yarın 20:00")

    assert first.text == "Kaç kişilik rezervasyon istiyorsunuz?"
    assert second.state == ConversationState.AWAITING_DATETIME
    assert third.text.startswith("Onaylıyor musunuz? 2 kişi için 21.05.2030 20:00")

    result = await test_db.execute(select(Conversation).where(Conversation.wa_user_id == USER))
    conversation = result.scalar_one()
    assert as_utc(conversation.reserved_at) == datetime(2030, 5, 21, 17, 0, tzinfo=timezone.utc)

    last = await say(turkish_machine, test_db, "Evet")

    assert last.text == "Rezervasyon tamam ✅ Masa: Table 1"
    assert last.state == ConversationState.IDLE

    result = await test_db.execute(select(Reservation))
    reservation = result.scalar_one()
    assert reservation.customer_name == "WhatsApp Müşterisi"
    assert reservation.note == "WhatsApp bot üzerinden"
    assert as_utc(reservation.reserved_at) == datetime(2030, 5, 21, 17, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_turkish_cancel(test_db, test_tables, turkish_machine):
    for text in ("rezervasyon", "4", "yarın 19"):
        await say(turkish_machine, test_db, text)

    reply = await say(turkish_machine, test_db, "hayır")

    assert reply.text == "Tamam, işlemi iptal ettim."
    assert reply.state == ConversationState.IDLE


@pytest.mark.asyncio
async def test_blank_input_touches_nothing(test_db, turkish_machine):
    reply = await turkish_machine.handle(test_db, "  ", "merhaba")

    assert reply.text == "Mesaj formatı eksik."
    assert reply.conversation_id is None


def test_unknown_language_falls_back_to_english():
    catalog = ReplyCatalog("de")

    assert catalog.language == "en"
    assert "reservation" in catalog.render("start_hint")


@pytest.mark.asyncio
async def test_storage_conflict_becomes_no_table_reply(test_db, test_tables, turkish_machine, monkeypatch):
    """An overlap rejected by the database still answers with a reply"""
    async def rejected(*args, **kwargs):
        raise Conflict("Table is already booked at this time")

    monkeypatch.setattr("tablebook.chat.state_machine.book_for_conversation", rejected)
    for text in ("rezervasyon", "2", "yarın 20:00"):
        await say(turkish_machine, test_db, text)

    reply = await say(turkish_machine, test_db, "evet")

    assert reply.text == "Uygun masa bulunamadı."
    assert reply.state == ConversationState.IDLE
