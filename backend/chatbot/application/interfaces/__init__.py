from .knowledge_base_repository import KnowledgeBaseRepository
from .feedback_sink import FeedbackSink

__all__ = [
    "KnowledgeBaseRepository",
    "FeedbackSink",
]
