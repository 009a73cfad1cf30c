from .ambiguity_classifier import AmbiguityClassifier, AmbiguityVerdict
from .feedback_recorder import FeedbackRecorder
from .fuzzy_matcher import FuzzyMatch, FuzzyMatcher
from .intent_classifier import IntentClassifier
from .knowledge_base_seeder import KnowledgeBaseSeeder
from .query_analyzer import QueryAnalyzer
from .query_resolution_service import QueryResolutionService, is_advanced_query
from .similarity_scorer import SimilarityScorer
from .simple_matcher import SimpleMatcher
from .subtopic_heuristic import SubtopicHeuristic
from .text_normalizer import TextNormalizer
from .tiered_search import FILTER_TIERS, FilterTier, TieredSearchOrchestrator
from .topic_resolver import TopicResolver
from .vocabulary_loader import load_vocabulary, parse_vocabulary

__all__ = [
    "AmbiguityClassifier",
    "AmbiguityVerdict",
    "FeedbackRecorder",
    "FuzzyMatch",
    "FuzzyMatcher",
    "IntentClassifier",
    "KnowledgeBaseSeeder",
    "QueryAnalyzer",
    "QueryResolutionService",
    "is_advanced_query",
    "SimilarityScorer",
    "SimpleMatcher",
    "SubtopicHeuristic",
    "TextNormalizer",
    "FILTER_TIERS",
    "FilterTier",
    "TieredSearchOrchestrator",
    "TopicResolver",
    "load_vocabulary",
    "parse_vocabulary",
]
