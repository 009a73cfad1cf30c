"""Subtopic inference from synonym dictionaries and record keywords."""

import logging

from chatbot.application.services.text_normalizer import TextNormalizer
from chatbot.domain.entities import KnowledgeRecord

logger = logging.getLogger(__name__)


class SubtopicHeuristic:
    """Infers a subtopic label when no record scored well enough.

    Synonyms are normalized once at construction. A candidate is accepted
    when it is the only subtopic with a single matching token, or when it
    has two or more matching tokens; equal counts keep declaration order.
    Whatever is accepted must still exist on some stored record.
    """

    def __init__(
        self,
        synonyms_by_subtopic: tuple[tuple[str, tuple[str, ...]], ...],
        record_keyword_min_matches: int = 2,
    ):
        self._synonyms = tuple(
            (subtopic, frozenset(s for s in (TextNormalizer.normalize(w) for w in words) if s))
            for subtopic, words in synonyms_by_subtopic
        )
        self._record_keyword_min_matches = record_keyword_min_matches

    def infer_subtopic(
        self,
        tokens: list[str],
        records: list[KnowledgeRecord],
    ) -> str | None:
        """Best-supported subtopic for the query tokens, or ``None``."""
        token_set = set(tokens)
        ranked = [
            (subtopic, len(synonyms & token_set))
            for subtopic, synonyms in self._synonyms
        ]
        ranked = [entry for entry in ranked if entry[1] > 0]
        if not ranked:
            return None

        # sorted() is stable: equal counts keep declaration order.
        ranked.sort(key=lambda entry: entry[1], reverse=True)
        subtopic, count = ranked[0]

        unique_single = len(ranked) == 1 and count == 1
        if not (unique_single or count >= 2):
            logger.debug("Subtopic heuristic inconclusive: %s", ranked)
            return None

        if not self.subtopic_exists(subtopic, records):
            logger.debug("Subtopic %r inferred but absent from knowledge base", subtopic)
            return None
        return subtopic

    def match_record_keywords(
        self,
        tokens: list[str],
        records: list[KnowledgeRecord],
    ) -> KnowledgeRecord | None:
        """First record sharing enough of its own keywords with the query."""
        token_set = set(tokens)
        for record in records:
            keywords = {TextNormalizer.normalize(k) for k in record.keywords}
            if len(keywords & token_set) >= self._record_keyword_min_matches:
                return record
        return None

    @staticmethod
    def subtopic_exists(subtopic: str, records: list[KnowledgeRecord]) -> bool:
        """Case- and diacritic-insensitive membership among stored subtopics."""
        wanted = TextNormalizer.fold(subtopic).strip()
        return any(
            r.subtopic and TextNormalizer.fold(r.subtopic).strip() == wanted
            for r in records
        )
