"""Keyword and regex intent classifier"""

import re
from datetime import datetime, timedelta
from typing import FrozenSet, Optional, Sequence

from tablebook.chat.classifier import BaseIntentClassifier, Intent
from tablebook.models.reservation import MIN_PARTY_SIZE, MAX_PARTY_SIZE

# Substring matches
START_KEYWORDS = ("reservation", "rezervasyon")

# Matched at a word start so that suffixed Turkish forms still count
CONFIRM_PATTERNS = (r"\byes\b", r"\bconfirm", r"\bevet\b", r"\bonay")
CANCEL_PATTERNS = (r"\bcancel", r"\bno\b", r"\biptal", r"\bhay[ıi]r\b")
TOMORROW_PATTERNS = (r"\btomorrow\b", r"\byar[ıi]n\b")

NUMBER_RE = re.compile(r"\b(\d{1,2})\b")
TIME_RE = re.compile(r"\b(\d{1,2})(?::(\d{2}))?\b")


def normalize(text: str) -> str:
    """Lowercase, dropping the combining dot that 'İ'.lower() leaves behind"""
    return text.lower().replace("\u0307", "")


def _matches_any(text: str, patterns: Sequence[str]) -> bool:
    return any(re.search(pattern, text) for pattern in patterns)


class KeywordIntentClassifier(BaseIntentClassifier):
    """Deterministic classifier over English and Turkish keywords"""

    def detect_intents(self, text: str) -> FrozenSet[Intent]:
        lowered = normalize(text)
        intents = set()

        if any(keyword in lowered for keyword in START_KEYWORDS):
            intents.add(Intent.START_BOOKING)
        if _matches_any(lowered, CONFIRM_PATTERNS):
            intents.add(Intent.CONFIRM)
        if _matches_any(lowered, CANCEL_PATTERNS):
            intents.add(Intent.CANCEL)

        return frozenset(intents)

    def extract_party_size(self, text: str) -> Optional[int]:
        match = NUMBER_RE.search(text)
        if not match:
            return None

        party_size = int(match.group(1))
        if party_size < MIN_PARTY_SIZE or party_size > MAX_PARTY_SIZE:
            return None
        return party_size

    def extract_datetime(self, text: str, now: datetime) -> Optional[datetime]:
        lowered = normalize(text)
        match = TIME_RE.search(lowered)
        if not match:
            return None

        hour = int(match.group(1))
        minute = int(match.group(2) or "0")
        if hour > 23 or minute > 59:
            return None

        base = now
        if _matches_any(lowered, TOMORROW_PATTERNS):
            base = base + timedelta(days=1)

        return base.replace(hour=hour, minute=minute, second=0, microsecond=0)
