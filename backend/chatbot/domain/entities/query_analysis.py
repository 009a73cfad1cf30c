"""Domain entities produced by the query-resolution pipeline."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from .knowledge_record import IntentCategory


class Reasoning(str, Enum):
    """Explanatory tag for how (or whether) a query was matched."""

    STRONG_MATCH = "strong_textual_match"
    SUBTOPIC_HEURISTIC = "subtopic_heuristic"
    TOPIC_BY_KEYWORD = "topic_by_keyword"
    NO_MATCH = "no_clear_match"


class Provenance(str, Enum):
    """Where an answer came from."""

    KNOWLEDGE_BASE = "knowledge_base"
    SIMPLE_MATCH = "simple-match"
    OUT_OF_DOMAIN = "out_of_domain"
    FALLBACK = "fallback"


class ResolutionOrigin(str, Enum):
    """Which resolution path produced the final response."""

    ADVANCED = "advanced"
    SIMPLE = "simple"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class QueryAnalysis:
    """Result of analysing one user query.

    Built fresh for every query and never mutated after being returned.
    ``resolved_topic`` holds the id of the resolved Topic.
    """

    original_text: str
    normalized_text: str
    intent: IntentCategory
    resolved_topic: str | None = None
    resolved_subtopic: str | None = None
    reasoning: Reasoning = Reasoning.NO_MATCH
    confidence_score: float = 0.0
    is_ambiguous: bool = True
    is_out_of_domain: bool = False


@dataclass
class Answer:
    """One answer returned to the caller."""

    text: str
    provenance: Provenance
    score: float | None = None
    record_id: str | None = None
    subtopic: str | None = None
    intent: IntentCategory | None = None
    key_phrase: str | None = None


@dataclass
class ResolutionResult:
    """Caller-facing result: ordered answers plus the path that produced them."""

    answers: list[Answer]
    origin: ResolutionOrigin
    analysis: QueryAnalysis | None = None


@dataclass
class FeedbackEvent:
    """An unanswered or unhelpful exchange, kept for corpus improvement."""

    session_id: str
    user_message: str
    bot_message: str
    detected_intents: list[str] = field(default_factory=list)
    detected_topics: list[str] = field(default_factory=list)
    detected_subtopics: list[str] = field(default_factory=list)
    was_helpful: bool | None = None
    id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
