"""Chat-driven booking flow"""

from tablebook.chat.classifier import BaseIntentClassifier, Intent
from tablebook.chat.keyword import KeywordIntentClassifier

CLASSIFIERS = {
    "keyword": KeywordIntentClassifier,
}


def get_intent_classifier(name: str = "keyword") -> BaseIntentClassifier:
    """Instantiate a classifier backend by name"""
    classifier_class = CLASSIFIERS.get(name)
    if not classifier_class:
        raise ValueError(f"Unknown intent classifier: {name}")

    return classifier_class()


__all__ = [
    "BaseIntentClassifier",
    "Intent",
    "KeywordIntentClassifier",
    "get_intent_classifier",
]
