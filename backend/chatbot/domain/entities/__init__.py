from .knowledge_record import (
    AnswerKind,
    IntentCategory,
    KnowledgeRecord,
    RecordFilter,
    Topic,
)
from .query_analysis import (
    Answer,
    FeedbackEvent,
    Provenance,
    QueryAnalysis,
    Reasoning,
    ResolutionOrigin,
    ResolutionResult,
)
from .vocabulary import MatchingCalibration, NlpVocabulary

__all__ = [
    "AnswerKind",
    "IntentCategory",
    "KnowledgeRecord",
    "RecordFilter",
    "Topic",
    "Answer",
    "FeedbackEvent",
    "Provenance",
    "QueryAnalysis",
    "Reasoning",
    "ResolutionOrigin",
    "ResolutionResult",
    "MatchingCalibration",
    "NlpVocabulary",
]
