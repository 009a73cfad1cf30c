"""Weighted lexical-overlap scoring between a query and knowledge records.

The per-field measure is asymmetric — the share of *query* tokens found in the
field — so long reference fields are not penalized for their extra words:

    overlap(q, f) = |tokens(q) ∩ tokens(f)| / max(|tokens(q)|, 1)

A record's composite score is the weighted sum over four fields
(key phrase, description, answer, example) with weights summing to 1.0.
"""

from chatbot.application.services.text_normalizer import TextNormalizer
from chatbot.domain.entities import KnowledgeRecord, MatchingCalibration


class SimilarityScorer:
    """Scores records against an already-normalized query."""

    def __init__(self, calibration: MatchingCalibration | None = None):
        self._calibration = calibration or MatchingCalibration()

    @staticmethod
    def overlap(query: str, field_text: str) -> float:
        """Share of distinct query tokens that also appear in ``field_text``."""
        query_tokens = set(TextNormalizer.tokenize(query))
        field_tokens = set(TextNormalizer.tokenize(field_text))
        return len(query_tokens & field_tokens) / max(len(query_tokens), 1)

    def score_record(self, normalized_query: str, record: KnowledgeRecord) -> float:
        """Composite score of ``record`` for the query, in [0, 1].

        Record fields go through the same normalization as the query so
        plural and accented forms line up on both sides.
        """
        c = self._calibration
        weighted = (
            (record.key_phrase, c.weight_key_phrase),
            (record.description, c.weight_description),
            (record.answer_text, c.weight_answer),
            (record.example, c.weight_example),
        )
        total = sum(
            self.overlap(normalized_query, TextNormalizer.normalize(text or "")) * weight
            for text, weight in weighted
        )
        return min(total, 1.0)

    def best_record(
        self, normalized_query: str, records: list[KnowledgeRecord]
    ) -> tuple[KnowledgeRecord | None, float]:
        """Highest-scoring record; ties keep the earliest record (strict ``>``)."""
        best: KnowledgeRecord | None = None
        best_score = 0.0
        for record in records:
            score = self.score_record(normalized_query, record)
            if score > best_score:
                best, best_score = record, score
        return best, best_score
