"""Feedback API controller — explicit user feedback on chatbot answers."""

from fastapi import APIRouter, Depends, Query, status

from chatbot.application.interfaces import FeedbackSink
from chatbot.application.schemas.feedback import FeedbackCreate, FeedbackResponse
from chatbot.domain.entities import FeedbackEvent
from chatbot.infrastructure.dependencies import get_feedback_repository

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    body: FeedbackCreate,
    sink: FeedbackSink = Depends(get_feedback_repository),
):
    """Store whether an answer helped the user."""
    event = await sink.save(
        FeedbackEvent(
            session_id=body.session_id,
            user_message=body.user_message,
            bot_message=body.bot_message,
            detected_intents=body.detected_intents,
            detected_topics=body.detected_topics,
            detected_subtopics=body.detected_subtopics,
            was_helpful=body.was_helpful,
        )
    )
    return FeedbackResponse.model_validate(event)


@router.get("", response_model=list[FeedbackResponse])
async def list_feedback(
    limit: int = Query(default=50, ge=1, le=500),
    sink: FeedbackSink = Depends(get_feedback_repository),
):
    """Most recent feedback events first."""
    events = await sink.list_recent(limit=limit)
    return [FeedbackResponse.model_validate(e) for e in events]
