"""Concrete knowledge-base repository backed by SQLAlchemy.

Every read failure is wrapped in ``KnowledgeStoreError`` so the application
layer never mistakes a broken store for an empty result.
"""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chatbot.application.interfaces import KnowledgeBaseRepository
from chatbot.application.services.text_normalizer import TextNormalizer
from chatbot.domain.entities import (
    AnswerKind,
    IntentCategory,
    KnowledgeRecord,
    RecordFilter,
    Topic,
)
from chatbot.domain.exceptions import KnowledgeStoreError
from chatbot.infrastructure.database.models import KnowledgeRecordModel, TopicModel

logger = logging.getLogger(__name__)


def _fold(text: str | None) -> str:
    return TextNormalizer.fold(text or "").strip()


def _topic_pk(topic_id: str) -> int | None:
    try:
        return int(topic_id)
    except (TypeError, ValueError):
        return None


class SQLAlchemyKnowledgeBaseRepository(KnowledgeBaseRepository):
    """Implements the KnowledgeBaseRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Mapping ──────────────────────────────────────────────────────

    def _to_entity(self, model: KnowledgeRecordModel) -> KnowledgeRecord:
        """Map ORM model → domain entity."""
        return KnowledgeRecord(
            id=str(model.id),
            topic_id=str(model.topic_id),
            subtopic=model.subtopic,
            key_phrase=model.key_phrase,
            answer_text=model.answer_text,
            description=model.description or "",
            example=model.example or "",
            keywords=model.keywords,
            intent=IntentCategory(model.intent),
            answer_kind=AnswerKind(model.answer_kind),
        )

    def _to_model(self, entity: KnowledgeRecord) -> KnowledgeRecordModel:
        """Map domain entity → ORM model (for creation)."""
        model = KnowledgeRecordModel(
            topic_id=int(entity.topic_id),
            subtopic=entity.subtopic,
            subtopic_key=_fold(entity.subtopic),
            key_phrase=entity.key_phrase,
            description=entity.description or None,
            answer_text=entity.answer_text,
            example=entity.example or None,
            intent=entity.intent.value,
            answer_kind=entity.answer_kind.value,
            search_text=self._search_text(entity),
        )
        model.keywords = entity.keywords
        return model

    @staticmethod
    def _topic_to_entity(model: TopicModel) -> Topic:
        return Topic(
            id=str(model.id),
            key=model.key,
            name=model.name,
            description=model.description or "",
            subtopics=model.subtopics,
        )

    @staticmethod
    def _search_text(entity: KnowledgeRecord) -> str:
        """Folded haystack for broad recall: key phrase, answer, description, example, keywords."""
        parts = [
            entity.key_phrase,
            entity.answer_text,
            entity.description,
            entity.example,
            *entity.keywords,
        ]
        return "\n".join(_fold(p) for p in parts if p)

    # ── Reads ────────────────────────────────────────────────────────

    async def find_all(self) -> list[KnowledgeRecord]:
        stmt = select(KnowledgeRecordModel).order_by(KnowledgeRecordModel.id)
        return await self._fetch_records(stmt, "find_all")

    async def find_by_filter(self, record_filter: RecordFilter) -> list[KnowledgeRecord]:
        stmt = select(KnowledgeRecordModel)
        if record_filter.topic_id is not None:
            topic_pk = _topic_pk(record_filter.topic_id)
            if topic_pk is None:
                return []
            stmt = stmt.where(KnowledgeRecordModel.topic_id == topic_pk)
        if record_filter.subtopic is not None:
            stmt = stmt.where(KnowledgeRecordModel.subtopic_key == _fold(record_filter.subtopic))
        if record_filter.intent is not None:
            stmt = stmt.where(KnowledgeRecordModel.intent == record_filter.intent.value)
        stmt = stmt.order_by(KnowledgeRecordModel.id)
        return await self._fetch_records(stmt, "find_by_filter")

    async def find_by_terms(self, terms: list[str]) -> list[KnowledgeRecord]:
        folded = [t for t in (_fold(term) for term in terms) if t]
        if not folded:
            return []
        stmt = (
            select(KnowledgeRecordModel)
            .where(or_(*(KnowledgeRecordModel.search_text.contains(t, autoescape=True) for t in folded)))
            .order_by(KnowledgeRecordModel.id)
        )
        return await self._fetch_records(stmt, "find_by_terms")

    async def find_topics(self) -> list[Topic]:
        stmt = select(TopicModel).order_by(TopicModel.id)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error("Knowledge store read 'find_topics' failed: %s", exc)
            raise KnowledgeStoreError("find_topics", exc) from exc
        return [self._topic_to_entity(row) for row in result.scalars().all()]

    async def count_records(self) -> int:
        try:
            result = await self._session.execute(select(func.count(KnowledgeRecordModel.id)))
        except SQLAlchemyError as exc:
            raise KnowledgeStoreError("count_records", exc) from exc
        return int(result.scalar_one())

    # ── Writes (seeding) ─────────────────────────────────────────────

    async def create_topic(self, topic: Topic) -> Topic:
        model = TopicModel(
            key=topic.key.strip().lower(),
            name=topic.name,
            description=topic.description or None,
        )
        model.subtopics = topic.subtopics
        self._session.add(model)
        await self._session.flush()
        return self._topic_to_entity(model)

    async def create_record(self, record: KnowledgeRecord) -> KnowledgeRecord:
        model = self._to_model(record)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    # ── Private helpers ──────────────────────────────────────────────

    async def _fetch_records(self, stmt, operation: str) -> list[KnowledgeRecord]:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error("Knowledge store read '%s' failed: %s", operation, exc)
            raise KnowledgeStoreError(operation, exc) from exc
        return [self._to_entity(row) for row in result.scalars().all()]
