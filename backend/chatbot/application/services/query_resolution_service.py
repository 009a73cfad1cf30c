"""Query resolution service — the caller-facing entry point of the chatbot.

Routes by the form of the question:
  * questions (trailing ``?``/``¿`` or a leading interrogative) go through the
    full analysis + tiered search;
  * anything else is tried against the simple matcher first, and falls back
    to analysis + feedback + the fixed "no clear answer" message.
"""

import logging
import re

from chatbot.application.services.feedback_recorder import FeedbackRecorder
from chatbot.application.services.query_analyzer import QueryAnalyzer
from chatbot.application.services.simple_matcher import SimpleMatcher
from chatbot.application.services.tiered_search import (
    DEFAULT_NO_ANSWER_MESSAGE,
    TieredSearchOrchestrator,
)
from chatbot.domain.entities import (
    Answer,
    Provenance,
    QueryAnalysis,
    ResolutionOrigin,
    ResolutionResult,
)
from chatbot.domain.exceptions import InvalidQueryError
from chatbot.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("QueryResolutionService")

_TRAILING_QUESTION_MARK = re.compile(r"[?¿]\s*$")
_INTERROGATIVE_START = re.compile(
    r"^(qu[eé]|cu[aá]ndo|d[oó]nde|por qu[eé]|c[oó]mo|qui[eé]n|para qu[eé]|cu[aá]les?)\b",
    re.IGNORECASE,
)

_ORIGIN_BY_PROVENANCE = {
    Provenance.KNOWLEDGE_BASE: ResolutionOrigin.ADVANCED,
    Provenance.SIMPLE_MATCH: ResolutionOrigin.SIMPLE,
    Provenance.OUT_OF_DOMAIN: ResolutionOrigin.FALLBACK,
    Provenance.FALLBACK: ResolutionOrigin.FALLBACK,
}


def is_advanced_query(text: str) -> bool:
    """True when the text reads as a question."""
    return bool(
        _TRAILING_QUESTION_MARK.search(text)
        or _INTERROGATIVE_START.search(text.strip().lower())
    )


class QueryResolutionService:
    """Application service (use case) answering one user turn."""

    def __init__(
        self,
        analyzer: QueryAnalyzer,
        orchestrator: TieredSearchOrchestrator,
        simple_matcher: SimpleMatcher,
        feedback: FeedbackRecorder,
        *,
        no_answer_message: str = DEFAULT_NO_ANSWER_MESSAGE,
    ):
        self._analyzer = analyzer
        self._orchestrator = orchestrator
        self._simple = simple_matcher
        self._feedback = feedback
        self._no_answer_message = no_answer_message

    async def resolve_query(self, text: str, session_id: str | None = None) -> ResolutionResult:
        """Answer the query; always returns at least one answer.

        Raises:
            InvalidQueryError: if ``text`` is not a string.
            KnowledgeStoreError: if the knowledge base cannot be read.
        """
        if not isinstance(text, str):
            raise InvalidQueryError()

        plog.separator("consulta")

        if is_advanced_query(text):
            with plog.timed_step(PipelineStage.SEARCH, "Advanced resolution"):
                analysis = await self._analyzer.analyze(text)
                answers = await self._orchestrator.resolve(text, session_id, analysis=analysis)
            origin = _ORIGIN_BY_PROVENANCE[answers[0].provenance]
            return ResolutionResult(answers=answers, origin=origin, analysis=analysis)

        simple = await self._simple.match(text)
        if simple:
            return ResolutionResult(
                answers=[Answer(text=simple, provenance=Provenance.SIMPLE_MATCH)],
                origin=ResolutionOrigin.SIMPLE,
            )

        analysis = await self._analyzer.analyze(text)
        await self._feedback.record_unanswered(
            session_id=session_id,
            question=text,
            analysis=analysis,
            bot_message=self._no_answer_message,
        )
        return ResolutionResult(
            answers=[Answer(text=self._no_answer_message, provenance=Provenance.FALLBACK)],
            origin=ResolutionOrigin.FALLBACK,
            analysis=analysis,
        )

    async def analyze(self, text: str) -> QueryAnalysis:
        """Analysis only, no search — useful for debugging."""
        if not isinstance(text, str):
            raise InvalidQueryError()
        return await self._analyzer.analyze(text)
