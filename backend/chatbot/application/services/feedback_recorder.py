"""Feedback recorder — single entry point for logging unanswered exchanges.

Builds a FeedbackEvent from the query analysis and hands it to the
FeedbackSink. Emission is fire-and-forget: a failing sink is logged and
never affects the answer already computed.
"""

import logging

from chatbot.application.interfaces import FeedbackSink
from chatbot.domain.entities import FeedbackEvent, QueryAnalysis
from chatbot.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("FeedbackRecorder")

UNKNOWN_SESSION = "desconocido"


class FeedbackRecorder:
    """Persists unanswered-query feedback.

    Usage:
        recorder = FeedbackRecorder(feedback_repository)
        await recorder.record_unanswered(
            session_id="abc",
            question="¿qué es el radón?",
            analysis=analysis,
            bot_message="No encontré una respuesta clara a tu consulta. 😔",
        )
    """

    def __init__(self, sink: FeedbackSink):
        self._sink = sink

    @staticmethod
    def build_event(
        *,
        session_id: str | None,
        question: str,
        analysis: QueryAnalysis | None,
        bot_message: str,
    ) -> FeedbackEvent:
        """Map an analysis to the feedback record a sink persists."""
        intents: list[str] = []
        topics: list[str] = []
        subtopics: list[str] = []
        if analysis is not None:
            intents = [analysis.intent.value]
            if analysis.resolved_topic:
                topics = [str(analysis.resolved_topic)]
            if analysis.resolved_subtopic:
                subtopics = [analysis.resolved_subtopic]

        return FeedbackEvent(
            session_id=session_id or UNKNOWN_SESSION,
            user_message=question,
            bot_message=bot_message,
            detected_intents=intents,
            detected_topics=topics,
            detected_subtopics=subtopics,
        )

    async def record_unanswered(
        self,
        *,
        session_id: str | None,
        question: str,
        analysis: QueryAnalysis | None,
        bot_message: str,
    ) -> FeedbackEvent | None:
        """Persist the event; returns it, or ``None`` when the sink failed."""
        event = self.build_event(
            session_id=session_id,
            question=question,
            analysis=analysis,
            bot_message=bot_message,
        )
        try:
            saved = await self._sink.save(event)
        except Exception:
            logger.exception("Could not record feedback for session %s", event.session_id)
            return None

        plog.step_complete(
            PipelineStage.FEEDBACK,
            "Feedback recorded",
            id=saved.id,
            session=saved.session_id,
            intents=saved.detected_intents,
            topics=saved.detected_topics,
            subtopics=saved.detected_subtopics,
        )
        return saved
