"""Rule-based intent classification by ordered trigger-phrase membership."""

import logging

from chatbot.application.services.text_normalizer import TextNormalizer
from chatbot.domain.entities import IntentCategory

logger = logging.getLogger(__name__)


class IntentClassifier:
    """Maps normalized text to an intent category.

    Categories are tested in declaration order and the first one with any
    trigger phrase contained in the text wins, so a broad phrase in an early
    category shadows a more specific phrase in a later one. Trigger phrases
    are normalized once here so accented configuration phrases still match
    normalized input.
    """

    DEFAULT = IntentCategory.INFORMATIONAL

    def __init__(self, intent_phrases: tuple[tuple[IntentCategory, tuple[str, ...]], ...]):
        self._table: tuple[tuple[IntentCategory, tuple[str, ...]], ...] = tuple(
            (
                category,
                tuple(p for p in (TextNormalizer.normalize(raw) for raw in phrases) if p),
            )
            for category, phrases in intent_phrases
        )

    def classify(self, normalized_text: str) -> IntentCategory:
        """Return the first category whose phrases occur in the text."""
        for category, phrases in self._table:
            for phrase in phrases:
                if phrase in normalized_text:
                    logger.debug("Intent %s matched by phrase %r", category.value, phrase)
                    return category
        return self.DEFAULT
