"""SQLAlchemy ORM model for chat feedback (unanswered or unhelpful exchanges)."""

import json
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from chatbot.infrastructure.database.base import Base


class FeedbackModel(Base):
    """ORM model — maps to the 'chat_feedback' table."""

    __tablename__ = "chat_feedback"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    user_message: Mapped[str] = mapped_column(Text, nullable=False)
    bot_message: Mapped[str] = mapped_column(Text, nullable=False)
    was_helpful: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    detected_intents_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    detected_topics_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    detected_subtopics_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    @property
    def detected_intents(self) -> list[str]:
        return json.loads(self.detected_intents_json) if self.detected_intents_json else []

    @detected_intents.setter
    def detected_intents(self, value: list[str]) -> None:
        self.detected_intents_json = json.dumps(value, ensure_ascii=False)

    @property
    def detected_topics(self) -> list[str]:
        return json.loads(self.detected_topics_json) if self.detected_topics_json else []

    @detected_topics.setter
    def detected_topics(self, value: list[str]) -> None:
        self.detected_topics_json = json.dumps(value, ensure_ascii=False)

    @property
    def detected_subtopics(self) -> list[str]:
        return json.loads(self.detected_subtopics_json) if self.detected_subtopics_json else []

    @detected_subtopics.setter
    def detected_subtopics(self, value: list[str]) -> None:
        self.detected_subtopics_json = json.dumps(value, ensure_ascii=False)

    def __repr__(self) -> str:
        return f"<FeedbackModel(id={self.id}, session_id='{self.session_id}')>"
