"""Approximate matching over key phrases and descriptions (rapidfuzz).

Only a secondary signal: the analyzer consults it when lexical scoring is
inconclusive and never ranks answers with it.
"""

import logging
from dataclasses import dataclass

from rapidfuzz import fuzz, process

from chatbot.application.services.text_normalizer import TextNormalizer
from chatbot.domain.entities import KnowledgeRecord

logger = logging.getLogger(__name__)

# Record fields searched, in priority order for equal scores.
FUZZY_FIELDS: tuple[str, ...] = ("key_phrase", "description")


@dataclass(frozen=True)
class FuzzyMatch:
    """Best approximate hit: the record, the field that matched and its 0–100 score."""

    record: KnowledgeRecord
    field: str
    score: float


class FuzzyMatcher:
    """One-way partial-ratio search of a query inside two textual fields of each record."""

    def __init__(self, score_cutoff: float = 70.0, fields: tuple[str, ...] = FUZZY_FIELDS):
        self._score_cutoff = score_cutoff
        self._fields = fields

    def best_match(self, query: str, records: list[KnowledgeRecord]) -> FuzzyMatch | None:
        """Return the single best record if it reaches the cutoff, else ``None``.

        The query is aligned inside each field, never the other way round:
        fields shorter than the query are not candidates, so a short key
        phrase such as "gracias" cannot match an unrelated long question.
        """
        if not query.strip() or not records:
            return None

        best: FuzzyMatch | None = None
        for field_name in self._fields:
            folded = [TextNormalizer.fold(getattr(r, field_name) or "") for r in records]
            choices = {i: text for i, text in enumerate(folded) if len(text) >= len(query)}
            if not choices:
                continue
            hit = process.extractOne(
                query,
                choices,
                scorer=fuzz.partial_ratio,
                score_cutoff=self._score_cutoff,
            )
            if hit is None:
                continue
            _, score, index = hit
            if best is None or score > best.score:
                best = FuzzyMatch(record=records[index], field=field_name, score=score)

        if best is not None:
            logger.debug(
                "Fuzzy hit on %s=%r (score %.1f)",
                best.field,
                getattr(best.record, best.field),
                best.score,
            )
        return best
