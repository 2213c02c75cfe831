"""Database models"""

from tablebook.models.table import Table
from tablebook.models.reservation import Reservation, ReservationStatus, RESERVATION_DURATION
from tablebook.models.conversation import Conversation, ConversationState, Message
from tablebook.models.webhook_event import WebhookEvent

__all__ = [
    "Table",
    "Reservation",
    "ReservationStatus",
    "RESERVATION_DURATION",
    "Conversation",
    "ConversationState",
    "Message",
    "WebhookEvent",
]
