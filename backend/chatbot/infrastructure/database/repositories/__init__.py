from .knowledge_base_repository import SQLAlchemyKnowledgeBaseRepository
from .feedback_repository import SQLAlchemyFeedbackRepository

__all__ = [
    "SQLAlchemyKnowledgeBaseRepository",
    "SQLAlchemyFeedbackRepository",
]
