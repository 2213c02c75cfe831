"""Intent classifier interface for chat messages"""

import enum
from abc import ABC, abstractmethod
from datetime import datetime
from typing import FrozenSet, Optional


class Intent(str, enum.Enum):
    START_BOOKING = "start_booking"
    CONFIRM = "confirm"
    CANCEL = "cancel"


class BaseIntentClassifier(ABC):
    """
    Turns free text into the signals the conversation state machine needs.

    Implementations must be deterministic for a given text and `now`.
    """

    @abstractmethod
    def detect_intents(self, text: str) -> FrozenSet[Intent]:
        """Return every intent the text expresses"""
        pass

    @abstractmethod
    def extract_party_size(self, text: str) -> Optional[int]:
        """Return a party size within the bookable range, or None"""
        pass

    @abstractmethod
    def extract_datetime(self, text: str, now: datetime) -> Optional[datetime]:
        """
        Return the requested start instant, in the timezone of `now`, or None
        when the text carries no usable time.
        """
        pass
