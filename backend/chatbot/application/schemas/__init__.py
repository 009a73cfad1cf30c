from .consulta import (
    AnswerSchema,
    ConsultaRequest,
    ConsultaResponse,
    QueryAnalysisSchema,
)
from .feedback import FeedbackCreate, FeedbackResponse
from .topic import TopicResponse

__all__ = [
    "AnswerSchema",
    "ConsultaRequest",
    "ConsultaResponse",
    "QueryAnalysisSchema",
    "FeedbackCreate",
    "FeedbackResponse",
    "TopicResponse",
]
