"""Query analyzer — turns a raw question into a QueryAnalysis.

Stages, strictly in order:
  1. Misspelling correction → normalization → intent classification.
  2. Composite lexical score against every record (best kept, first wins ties).
  3. Strong match (score ≥ strong threshold) adopts that record's topic/subtopic.
  4. Otherwise a fuzzy hit adopts topic/subtopic with a pinned confidence.
  5. Record keywords (≥ 2 shared) adopt topic/subtopic if still no subtopic.
  6. Synonym heuristic adopts a subtopic (only) when none is resolved or the
     score stayed below the ambiguity threshold.
  7. Keyword → topic lookup when no topic is resolved yet.
  8. Topic reconciled from the subtopic (subtopic evidence wins).
  9. Reasoning label, then ambiguity / out-of-domain flags.
"""

import logging

from chatbot.application.interfaces import KnowledgeBaseRepository
from chatbot.application.services.ambiguity_classifier import AmbiguityClassifier
from chatbot.application.services.fuzzy_matcher import FuzzyMatcher
from chatbot.application.services.intent_classifier import IntentClassifier
from chatbot.application.services.similarity_scorer import SimilarityScorer
from chatbot.application.services.subtopic_heuristic import SubtopicHeuristic
from chatbot.application.services.text_normalizer import TextNormalizer
from chatbot.application.services.topic_resolver import TopicResolver
from chatbot.domain.entities import (
    MatchingCalibration,
    NlpVocabulary,
    QueryAnalysis,
    Reasoning,
)
from chatbot.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("QueryAnalyzer")


class QueryAnalyzer:
    """Per-query analysis pipeline.

    Holds only read-only collaborators; every call builds a fresh
    QueryAnalysis, so one instance can serve concurrent queries.
    """

    def __init__(
        self,
        repository: KnowledgeBaseRepository,
        *,
        normalizer: TextNormalizer,
        intent_classifier: IntentClassifier,
        scorer: SimilarityScorer,
        fuzzy_matcher: FuzzyMatcher,
        subtopic_heuristic: SubtopicHeuristic,
        topic_resolver: TopicResolver,
        ambiguity_classifier: AmbiguityClassifier,
        calibration: MatchingCalibration | None = None,
    ):
        self._repository = repository
        self._normalizer = normalizer
        self._intent_classifier = intent_classifier
        self._scorer = scorer
        self._fuzzy = fuzzy_matcher
        self._subtopics = subtopic_heuristic
        self._topics = topic_resolver
        self._ambiguity = ambiguity_classifier
        self._calibration = calibration or MatchingCalibration()

    @classmethod
    def from_vocabulary(
        cls,
        repository: KnowledgeBaseRepository,
        vocabulary: NlpVocabulary,
        calibration: MatchingCalibration | None = None,
    ) -> "QueryAnalyzer":
        """Wire the default components from a vocabulary and calibration."""
        calibration = calibration or MatchingCalibration()
        return cls(
            repository,
            normalizer=TextNormalizer(vocabulary.misspellings),
            intent_classifier=IntentClassifier(vocabulary.intent_phrases),
            scorer=SimilarityScorer(calibration),
            fuzzy_matcher=FuzzyMatcher(score_cutoff=calibration.fuzzy_score_cutoff),
            subtopic_heuristic=SubtopicHeuristic(
                vocabulary.subtopic_synonyms,
                record_keyword_min_matches=calibration.record_keyword_min_matches,
            ),
            topic_resolver=TopicResolver(vocabulary.topic_keywords),
            ambiguity_classifier=AmbiguityClassifier(
                vocabulary.generic_subtopics,
                ambiguity_threshold=calibration.ambiguity_threshold,
                out_of_domain_threshold=calibration.out_of_domain_threshold,
            ),
            calibration=calibration,
        )

    @property
    def scorer(self) -> SimilarityScorer:
        return self._scorer

    async def analyze(self, text: str) -> QueryAnalysis:
        """Run every stage and return the completed analysis.

        Raises:
            KnowledgeStoreError: if the knowledge base cannot be read.
        """
        c = self._calibration

        # 1. Correct → normalize → intent
        corrected = self._normalizer.correct_misspellings(text)
        normalized = self._normalizer.normalize(corrected)
        tokens = normalized.split()
        intent = self._intent_classifier.classify(normalized)
        plog.step_start(PipelineStage.NORMALIZE, "Query normalized", text=repr(normalized))
        plog.step_complete(PipelineStage.INTENT, "Intent classified", intent=intent.value)

        # 2. Score every record
        records = await self._repository.find_all()
        best, score = self._scorer.best_record(normalized, records)
        plog.detail("scored records", count=len(records), best_score=score)

        topic_id: str | None = None
        subtopic: str | None = None

        # 3. Strong textual match
        if best is not None and score >= c.strong_match_threshold:
            topic_id, subtopic = best.topic_id, best.subtopic
            plog.step_complete(
                PipelineStage.SCORING,
                "Strong textual match",
                key_phrase=repr(best.key_phrase),
                score=score,
            )

        # 4. Fuzzy fallback on key phrase / description
        if subtopic is None and score < c.strong_match_threshold:
            hit = self._fuzzy.best_match(normalized, records)
            if hit is not None:
                topic_id, subtopic = hit.record.topic_id, hit.record.subtopic
                score = c.fuzzy_pinned_score
                plog.step_complete(
                    PipelineStage.FUZZY,
                    "Fuzzy match",
                    key_phrase=repr(hit.record.key_phrase),
                    fuzzy_score=hit.score,
                )

        # 5. Record keywords
        if subtopic is None:
            keyword_record = self._subtopics.match_record_keywords(tokens, records)
            if keyword_record is not None:
                topic_id, subtopic = keyword_record.topic_id, keyword_record.subtopic
                plog.step_complete(PipelineStage.SUBTOPIC, "Subtopic by record keywords", subtopic=subtopic)

        # 6. Synonym heuristic (subtopic only)
        if subtopic is None or score < c.ambiguity_threshold:
            inferred = self._subtopics.infer_subtopic(tokens, records)
            if inferred is not None:
                subtopic = inferred
                plog.step_complete(PipelineStage.SUBTOPIC, "Subtopic by heuristic", subtopic=subtopic)

        # 7. Topic by keyword
        if topic_id is None:
            topics = await self._repository.find_topics()
            topic = self._topics.infer_topic(normalized, topics)
            if topic is not None:
                topic_id = topic.id
                plog.step_complete(PipelineStage.TOPIC, "Topic by keyword", topic=topic.key)

        # 8. Subtopic evidence overrides keyword topic
        topic_id = self._topics.reconcile(topic_id, subtopic, records)

        reasoning = self._reasoning(score, topic_id, subtopic)
        verdict = self._ambiguity.classify(score, topic_id, subtopic)

        analysis = QueryAnalysis(
            original_text=text,
            normalized_text=normalized,
            intent=intent,
            resolved_topic=topic_id,
            resolved_subtopic=subtopic,
            reasoning=reasoning,
            confidence_score=min(max(score, 0.0), 1.0),
            is_ambiguous=verdict.is_ambiguous,
            is_out_of_domain=verdict.is_out_of_domain,
        )

        if analysis.is_ambiguous:
            plog.step_warning(
                PipelineStage.AMBIGUITY,
                "Ambiguous query or no clear match",
                text=repr(text),
                normalized=repr(normalized),
                intent=intent.value,
                score=score,
                topic=topic_id,
                subtopic=subtopic,
                out_of_domain=analysis.is_out_of_domain,
            )
        return analysis

    def _reasoning(self, score: float, topic_id: str | None, subtopic: str | None) -> Reasoning:
        if score >= self._calibration.strong_match_threshold:
            return Reasoning.STRONG_MATCH
        if subtopic:
            return Reasoning.SUBTOPIC_HEURISTIC
        if topic_id:
            return Reasoning.TOPIC_BY_KEYWORD
        return Reasoning.NO_MATCH
