from .topic import TopicModel
from .knowledge_record import KnowledgeRecordModel
from .feedback import FeedbackModel

__all__ = [
    "TopicModel",
    "KnowledgeRecordModel",
    "FeedbackModel",
]
