"""Last-resort lexical matcher over the whole knowledge base.

Ignores topic/subtopic filtering entirely: the query's significant tokens
(stopwords and tokens shorter than three characters removed) are compared with
a bag of reference tokens built from each record's subtopic, keywords, key
phrase, description and example.
"""

import logging

from chatbot.application.interfaces import KnowledgeBaseRepository
from chatbot.application.services.text_normalizer import TextNormalizer
from chatbot.domain.entities import KnowledgeRecord

logger = logging.getLogger(__name__)

_MIN_TOKEN_LENGTH = 3


class SimpleMatcher:
    """Corpus-wide stopword-filtered overlap search."""

    def __init__(
        self,
        repository: KnowledgeBaseRepository,
        stopwords: frozenset[str] = frozenset(),
        threshold: float = 0.4,
    ):
        self._repository = repository
        self._stopwords = frozenset(TextNormalizer.fold(w) for w in stopwords)
        self._threshold = threshold

    def significant_tokens(self, text: str) -> set[str]:
        return {
            token
            for token in TextNormalizer.tokenize(text)
            if token not in self._stopwords and len(token) >= _MIN_TOKEN_LENGTH
        }

    @staticmethod
    def reference_tokens(record: KnowledgeRecord) -> set[str]:
        fields = [
            record.subtopic,
            *record.keywords,
            record.key_phrase,
            record.description,
            record.example,
        ]
        tokens: set[str] = set()
        for text in fields:
            if text:
                tokens.update(TextNormalizer.tokenize(text))
        return tokens

    async def match(self, query_text: str) -> str | None:
        """Answer text of the best record if its overlap reaches the threshold."""
        query_tokens = self.significant_tokens(query_text)
        records = await self._repository.find_all()

        best: KnowledgeRecord | None = None
        best_score = 0.0
        for record in records:
            common = query_tokens & self.reference_tokens(record)
            score = len(common) / max(len(query_tokens), 1)
            if score > best_score:
                best, best_score = record, score

        if best is not None and best_score >= self._threshold:
            logger.info("Simple match %r with score %.2f", best.key_phrase, best_score)
            return best.answer_text

        logger.debug("Simple matcher found no useful match (best score %.2f)", best_score)
        return None
