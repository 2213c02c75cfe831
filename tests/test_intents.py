"""Tests for the keyword intent classifier"""

from datetime import datetime, timezone

import pytest

from tablebook.chat import get_intent_classifier
from tablebook.chat.classifier import Intent
from tablebook.chat.keyword import KeywordIntentClassifier

NOW = datetime(2030, 5, 20, 14, 15, 42, tzinfo=timezone.utc)


@pytest.fixture
def classifier():
    return KeywordIntentClassifier()


@pytest.mark.parametrize(
    "text,expected",
    [
        ("I'd like a Reservation please", {Intent.START_BOOKING}),
        ("rezervasyon yapmak istiyorum", {Intent.START_BOOKING}),
        ("yes", {Intent.CONFIRM}),
        ("Yes please, confirm it", {Intent.CONFIRM}),
        ("Evet", {Intent.CONFIRM}),
        ("onaylıyorum", {Intent.CONFIRM}),
        ("cancel", {Intent.CANCEL}),
        ("No", {Intent.CANCEL}),
        ("HAYIR", {Intent.CANCEL}),
        ("İPTAL", {Intent.CANCEL}),
        ("now is fine", set()),
        ("hello there", set()),
    ],
)
def test_detect_intents(classifier, text, expected):
    assert classifier.detect_intents(text) == frozenset(expected)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("4", 4),
        ("we are 6 people", 6),
        ("20", 20),
        ("21", None),
        ("0", None),
        ("four", None),
        ("100", None),
    ],
)
def test_extract_party_size(classifier, text, expected):
    assert classifier.extract_party_size(text) == expected


def test_extract_time_today(classifier):
    assert classifier.extract_datetime("today 19:30", NOW) == datetime(2030, 5, 20, 19, 30, tzinfo=timezone.utc)


def test_extract_time_tomorrow(classifier):
    assert classifier.extract_datetime("tomorrow 20:00", NOW) == datetime(2030, 5, 21, 20, 0, tzinfo=timezone.utc)


def test_extract_time_tomorrow_turkish(classifier):
    assert classifier.extract_datetime("Yarın 21", NOW) == datetime(2030, 5, 21, 21, 0, tzinfo=timezone.utc)


def test_extract_hour_only(classifier):
    assert classifier.extract_datetime("at 8", NOW) == datetime(2030, 5, 20, 8, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("text", ["24:00", "19:75", "sometime tonight", ""])
def test_extract_time_rejects(classifier, text):
    assert classifier.extract_datetime(text, NOW) is None


def test_registry():
    assert isinstance(get_intent_classifier("keyword"), KeywordIntentClassifier)

    with pytest.raises(ValueError):
        get_intent_classifier("llm")
