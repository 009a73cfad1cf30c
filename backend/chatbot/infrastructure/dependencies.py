"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from chatbot.config import get_settings
from chatbot.application.interfaces import FeedbackSink, KnowledgeBaseRepository
from chatbot.application.services import (
    FeedbackRecorder,
    QueryAnalyzer,
    QueryResolutionService,
    SimpleMatcher,
    TieredSearchOrchestrator,
    load_vocabulary,
)
from chatbot.domain.entities import NlpVocabulary
from chatbot.infrastructure.database.session import get_db_session
from chatbot.infrastructure.database.repositories import (
    SQLAlchemyFeedbackRepository,
    SQLAlchemyKnowledgeBaseRepository,
)


@lru_cache
def get_vocabulary() -> NlpVocabulary:
    """Vocabulary loaded once per process; shared read-only by every request."""
    return load_vocabulary(get_settings().vocabulary_file)


async def get_knowledge_base_repository(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[SQLAlchemyKnowledgeBaseRepository, None]:
    """Provides the knowledge-base repository bound to the request session."""
    yield SQLAlchemyKnowledgeBaseRepository(session)


async def get_feedback_repository(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[SQLAlchemyFeedbackRepository, None]:
    """Provides the feedback repository bound to the request session."""
    yield SQLAlchemyFeedbackRepository(session)


def build_query_resolution_service(
    repository: KnowledgeBaseRepository,
    feedback_sink: FeedbackSink,
    vocabulary: NlpVocabulary,
) -> QueryResolutionService:
    """Assemble the resolution pipeline from its ports and configuration."""
    settings = get_settings()
    calibration = settings.calibration()

    analyzer = QueryAnalyzer.from_vocabulary(repository, vocabulary, calibration)
    simple_matcher = SimpleMatcher(
        repository,
        stopwords=vocabulary.stopwords,
        threshold=calibration.simple_match_threshold,
    )
    feedback = FeedbackRecorder(feedback_sink)
    orchestrator = TieredSearchOrchestrator(
        repository,
        analyzer,
        simple_matcher,
        feedback,
        calibration=calibration,
        no_answer_message=settings.no_answer_message,
        out_of_domain_message=settings.out_of_domain_message,
    )
    return QueryResolutionService(
        analyzer,
        orchestrator,
        simple_matcher,
        feedback,
        no_answer_message=settings.no_answer_message,
    )


async def get_query_resolution_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[QueryResolutionService, None]:
    """Provides a QueryResolutionService with both repositories sharing the request session."""
    yield build_query_resolution_service(
        SQLAlchemyKnowledgeBaseRepository(session),
        SQLAlchemyFeedbackRepository(session),
        get_vocabulary(),
    )
