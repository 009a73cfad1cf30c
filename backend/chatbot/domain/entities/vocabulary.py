"""Immutable configuration consumed by the query-resolution pipeline.

Both objects are built once at startup and shared read-only by every request.
Ordered tables are stored as tuples of pairs: declaration order is significant
(first matching intent, first matching misspelling, first matching topic).
"""

from dataclasses import dataclass

from .knowledge_record import IntentCategory


@dataclass(frozen=True)
class NlpVocabulary:
    """Phrase tables and keyword dictionaries, loaded from a versioned YAML file."""

    version: int
    intent_phrases: tuple[tuple[IntentCategory, tuple[str, ...]], ...] = ()
    misspellings: tuple[tuple[str, str], ...] = ()
    topic_keywords: tuple[tuple[str, tuple[str, ...]], ...] = ()
    subtopic_synonyms: tuple[tuple[str, tuple[str, ...]], ...] = ()
    generic_subtopics: tuple[str, ...] = ()
    stopwords: frozenset[str] = frozenset()


@dataclass(frozen=True)
class MatchingCalibration:
    """Hand-tuned thresholds and field weights of the matching heuristics."""

    strong_match_threshold: float = 0.45
    fuzzy_pinned_score: float = 0.42
    simple_match_threshold: float = 0.4
    ambiguity_threshold: float = 0.3
    out_of_domain_threshold: float = 0.15
    weight_key_phrase: float = 0.5
    weight_description: float = 0.2
    weight_answer: float = 0.2
    weight_example: float = 0.1
    fuzzy_score_cutoff: float = 70.0
    max_answers: int = 3
    broad_recall_max_terms: int = 5
    record_keyword_min_matches: int = 2

    def __post_init__(self) -> None:
        total = (
            self.weight_key_phrase
            + self.weight_description
            + self.weight_answer
            + self.weight_example
        )
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Field weights must sum to 1.0, got {total:.4f}")
