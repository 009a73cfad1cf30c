"""Pydantic schemas for knowledge-base topics."""

from pydantic import BaseModel


class TopicResponse(BaseModel):
    """Schema for returning a topic."""

    id: str
    key: str
    name: str
    description: str = ""
    subtopics: list[str] = []

    model_config = {"from_attributes": True}
