"""Tiered search — from query analysis to ranked answers.

Cascade, most specific first; each step runs only if the previous one left
the candidate pool empty:

  0. Out-of-domain short-circuit        → fixed answer + feedback
  1. Filter tiers (see ``FILTER_TIERS``) → first non-empty result
  2. Broad recall on query terms         → any-term substring match
  3. SimpleMatcher over the whole corpus → single "simple-match" answer
  4. Nothing                             → fixed answer + feedback

A non-empty pool is ranked with the composite similarity score.
"""

import logging
from dataclasses import dataclass

from chatbot.application.interfaces import KnowledgeBaseRepository
from chatbot.application.services.feedback_recorder import FeedbackRecorder
from chatbot.application.services.query_analyzer import QueryAnalyzer
from chatbot.application.services.simple_matcher import SimpleMatcher
from chatbot.domain.entities import (
    Answer,
    KnowledgeRecord,
    MatchingCalibration,
    Provenance,
    QueryAnalysis,
    RecordFilter,
)
from chatbot.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("TieredSearchOrchestrator")

DEFAULT_NO_ANSWER_MESSAGE = "No encontré una respuesta clara a tu consulta. 😔"
DEFAULT_OUT_OF_DOMAIN_MESSAGE = (
    "Lo siento, tu consulta parece estar fuera de los temas que conozco. "
    "Prueba a preguntarme sobre calidad del aire, contaminantes o nuestro purificador. 🌍"
)

_MIN_RECALL_TERM_LENGTH = 3


@dataclass(frozen=True)
class FilterTier:
    """One step of the filter cascade: which analysis fields it constrains."""

    name: str
    topic: bool = False
    subtopic: bool = False
    intent: bool = False

    def build(self, analysis: QueryAnalysis) -> RecordFilter | None:
        """The filter for this tier, or ``None`` if a required field is unresolved."""
        if self.topic and not analysis.resolved_topic:
            return None
        if self.subtopic and not analysis.resolved_subtopic:
            return None
        return RecordFilter(
            topic_id=analysis.resolved_topic if self.topic else None,
            subtopic=analysis.resolved_subtopic if self.subtopic else None,
            intent=analysis.intent if self.intent else None,
        )


# Strictly decreasing specificity; subtopic evidence outranks topic evidence.
FILTER_TIERS: tuple[FilterTier, ...] = (
    FilterTier("topic+subtopic+intent", topic=True, subtopic=True, intent=True),
    FilterTier("topic+subtopic", topic=True, subtopic=True),
    FilterTier("subtopic+intent", subtopic=True, intent=True),
    FilterTier("subtopic", subtopic=True),
    FilterTier("topic+intent", topic=True, intent=True),
    FilterTier("topic", topic=True),
)


class TieredSearchOrchestrator:
    """Builds the answer list for one query from its analysis."""

    def __init__(
        self,
        repository: KnowledgeBaseRepository,
        analyzer: QueryAnalyzer,
        simple_matcher: SimpleMatcher,
        feedback: FeedbackRecorder,
        *,
        calibration: MatchingCalibration | None = None,
        no_answer_message: str = DEFAULT_NO_ANSWER_MESSAGE,
        out_of_domain_message: str = DEFAULT_OUT_OF_DOMAIN_MESSAGE,
        tiers: tuple[FilterTier, ...] = FILTER_TIERS,
    ):
        self._repository = repository
        self._analyzer = analyzer
        self._simple = simple_matcher
        self._feedback = feedback
        self._calibration = calibration or MatchingCalibration()
        self._no_answer_message = no_answer_message
        self._out_of_domain_message = out_of_domain_message
        self._tiers = tiers

    async def resolve(
        self,
        query_text: str,
        session_id: str | None = None,
        analysis: QueryAnalysis | None = None,
    ) -> list[Answer]:
        """Ordered answers for the query — never empty.

        Raises:
            KnowledgeStoreError: if the knowledge base cannot be read.
        """
        if analysis is None:
            analysis = await self._analyzer.analyze(query_text)

        if analysis.is_out_of_domain:
            plog.step_warning(PipelineStage.FALLBACK, "Out-of-domain query", text=repr(query_text))
            await self._feedback.record_unanswered(
                session_id=session_id,
                question=query_text,
                analysis=analysis,
                bot_message=self._out_of_domain_message,
            )
            return [Answer(text=self._out_of_domain_message, provenance=Provenance.OUT_OF_DOMAIN)]

        pool = await self.candidate_pool(analysis)

        if not pool:
            pool = await self.broad_recall(analysis)

        if not pool:
            simple = await self._simple.match(query_text)
            if simple:
                plog.step_complete(PipelineStage.ANSWER, "Answered by simple matcher")
                return [Answer(text=simple, provenance=Provenance.SIMPLE_MATCH)]

            plog.step_warning(PipelineStage.FALLBACK, "No clear answer", text=repr(query_text))
            await self._feedback.record_unanswered(
                session_id=session_id,
                question=query_text,
                analysis=analysis,
                bot_message=self._no_answer_message,
            )
            return [Answer(text=self._no_answer_message, provenance=Provenance.FALLBACK)]

        answers = self.rank(analysis.normalized_text, pool)
        plog.step_complete(
            PipelineStage.ANSWER,
            "Ranked answers",
            pool=len(pool),
            top_score=answers[0].score,
            subtopic=answers[0].subtopic,
        )
        return answers

    async def candidate_pool(self, analysis: QueryAnalysis) -> list[KnowledgeRecord]:
        """First non-empty result of the filter cascade."""
        for tier in self._tiers:
            record_filter = tier.build(analysis)
            if record_filter is None:
                continue
            records = await self._repository.find_by_filter(record_filter)
            if records:
                plog.step_complete(
                    PipelineStage.SEARCH,
                    f"Filter tier '{tier.name}'",
                    hits=len(records),
                    **record_filter.describe(),
                )
                return records
        return []

    async def broad_recall(self, analysis: QueryAnalysis) -> list[KnowledgeRecord]:
        """Any-term match on the first few significant query terms."""
        terms = self.recall_terms(analysis.normalized_text)
        if not terms:
            plog.detail("broad recall skipped: no eligible terms")
            return []
        records = await self._repository.find_by_terms(terms)
        plog.step_start(PipelineStage.SEARCH, "Broad recall", terms=terms, hits=len(records))
        return records

    def recall_terms(self, normalized_text: str) -> list[str]:
        words = [w for w in normalized_text.split() if len(w) >= _MIN_RECALL_TERM_LENGTH]
        return words[: self._calibration.broad_recall_max_terms]

    def rank(self, normalized_text: str, pool: list[KnowledgeRecord]) -> list[Answer]:
        """Score the pool and keep the best answers (stable for equal scores)."""
        scorer = self._analyzer.scorer
        scored = [(scorer.score_record(normalized_text, r), r) for r in pool]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [
            Answer(
                text=record.answer_text,
                provenance=Provenance.KNOWLEDGE_BASE,
                score=round(score, 4),
                record_id=record.id,
                subtopic=record.subtopic,
                intent=record.intent,
                key_phrase=record.key_phrase,
            )
            for score, record in scored[: self._calibration.max_answers]
        ]
