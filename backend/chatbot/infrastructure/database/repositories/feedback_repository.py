"""Concrete FeedbackSink backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chatbot.application.interfaces import FeedbackSink
from chatbot.domain.entities import FeedbackEvent
from chatbot.infrastructure.database.models import FeedbackModel


class SQLAlchemyFeedbackRepository(FeedbackSink):
    """Implements the FeedbackSink port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: FeedbackModel) -> FeedbackEvent:
        """Map ORM model → domain entity."""
        return FeedbackEvent(
            id=model.id,
            session_id=model.session_id,
            user_message=model.user_message,
            bot_message=model.bot_message,
            detected_intents=model.detected_intents,
            detected_topics=model.detected_topics,
            detected_subtopics=model.detected_subtopics,
            was_helpful=model.was_helpful,
            timestamp=model.created_at,
        )

    def _to_model(self, entity: FeedbackEvent) -> FeedbackModel:
        """Map domain entity → ORM model (for creation)."""
        model = FeedbackModel(
            session_id=entity.session_id,
            user_message=entity.user_message,
            bot_message=entity.bot_message,
            was_helpful=entity.was_helpful,
            created_at=entity.timestamp,
        )
        model.detected_intents = entity.detected_intents
        model.detected_topics = entity.detected_topics
        model.detected_subtopics = entity.detected_subtopics
        return model

    async def save(self, event: FeedbackEvent) -> FeedbackEvent:
        model = self._to_model(event)
        # Savepoint: a failed insert must not poison the request transaction.
        async with self._session.begin_nested():
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def list_recent(self, *, limit: int = 50) -> list[FeedbackEvent]:
        stmt = (
            select(FeedbackModel)
            .order_by(FeedbackModel.created_at.desc(), FeedbackModel.id.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]
