"""Pydantic schemas for chat feedback."""

from datetime import datetime

from pydantic import BaseModel, Field


class FeedbackCreate(BaseModel):
    """Schema for explicit user feedback on an exchange."""

    session_id: str = Field(..., min_length=1, max_length=100)
    user_message: str = Field(..., min_length=1)
    bot_message: str = Field(..., min_length=1)
    was_helpful: bool
    detected_intents: list[str] = []
    detected_topics: list[str] = []
    detected_subtopics: list[str] = []


class FeedbackResponse(BaseModel):
    """Schema for returning a stored feedback event."""

    id: int
    session_id: str
    user_message: str
    bot_message: str
    was_helpful: bool | None = None
    detected_intents: list[str]
    detected_topics: list[str]
    detected_subtopics: list[str]
    timestamp: datetime

    model_config = {"from_attributes": True}
