"""Reply texts for the chat booking flow"""

from datetime import datetime
from typing import Dict

REPLIES: Dict[str, Dict[str, str]] = {
    "en": {
        "ask_party_size": "How many people is the reservation for?",
        "retry_party_size": "Please send the number of guests as digits (e.g. 4).",
        "ask_datetime": "What time would you like? (e.g. tomorrow 20:00)",
        "retry_datetime": "I couldn't read the time. Try e.g. today 19:30 or tomorrow 20:00.",
        "confirm": 'Please confirm: {party_size} people on {when}. Reply "yes" to confirm or "cancel" to abort.',
        "booked": "Your reservation is confirmed ✅ Table: {table}",
        "no_table": "Sorry, no suitable table is available at that time.",
        "incomplete": 'Some booking details are missing. Type "reservation" to start again.',
        "cancelled": "Okay, I've cancelled this booking.",
        "confirm_or_cancel": 'Reply "yes" to confirm or "cancel" to abort.',
        "start_hint": 'Type "reservation" to start a booking.',
        "malformed": "The message is missing a sender or text.",
    },
    "tr": {
        "ask_party_size": "Kaç kişilik rezervasyon istiyorsunuz?",
        "retry_party_size": "Kişi sayısını rakamla yazar mısın? (örn: 4)",
        "ask_datetime": "Tarih/saat gönderir misin? (örn: yarın 20:00)",
        "retry_datetime": "Saat bilgisini anlayamadım. Örn: bugün 19:30 veya yarın 20:00",
        "confirm": 'Onaylıyor musunuz? {party_size} kişi için {when}. "evet" yazın.',
        "booked": "Rezervasyon tamam ✅ Masa: {table}",
        "no_table": "Uygun masa bulunamadı.",
        "incomplete": 'Rezervasyon bilgileri eksik. Yeniden başlamak için "rezervasyon" yazın.',
        "cancelled": "Tamam, işlemi iptal ettim.",
        "confirm_or_cancel": 'Onay için "evet", iptal için "iptal" yazabilirsiniz.',
        "start_hint": 'Rezervasyon başlatmak için "rezervasyon" yazın.',
        "malformed": "Mesaj formatı eksik.",
    },
}

DATETIME_FORMATS = {
    "en": "%a %d %b %Y at %H:%M",
    "tr": "%d.%m.%Y %H:%M",
}


class ReplyCatalog:
    """Looks up reply texts for one language, falling back to English"""

    def __init__(self, language: str = "en"):
        self.language = language if language in REPLIES else "en"
        self._texts = REPLIES[self.language]

    def render(self, key: str, **values) -> str:
        return self._texts[key].format(**values)

    def format_datetime(self, value: datetime) -> str:
        return value.strftime(DATETIME_FORMATS[self.language])
