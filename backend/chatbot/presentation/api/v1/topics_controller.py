"""Topics API controller — lists the knowledge-base topics."""

from fastapi import APIRouter, Depends, HTTPException, status

from chatbot.application.interfaces import KnowledgeBaseRepository
from chatbot.application.schemas.topic import TopicResponse
from chatbot.domain.exceptions import KnowledgeStoreError
from chatbot.infrastructure.dependencies import get_knowledge_base_repository

router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("", response_model=list[TopicResponse])
async def list_topics(
    repository: KnowledgeBaseRepository = Depends(get_knowledge_base_repository),
):
    """List every topic with its declared subtopics."""
    try:
        topics = await repository.find_topics()
    except KnowledgeStoreError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="La base de conocimiento no está disponible en este momento.",
        )
    return [TopicResponse.model_validate(t) for t in topics]
