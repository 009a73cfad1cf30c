"""SQLAlchemy ORM model for knowledge-base topics."""

import json
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chatbot.infrastructure.database.base import Base


class TopicModel(Base):
    """ORM model — maps to the 'topics' table."""

    __tablename__ = "topics"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # JSON-encoded list stored as text (SQLite-friendly)
    subtopics_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    records = relationship(
        "KnowledgeRecordModel",
        back_populates="topic",
        cascade="all, delete-orphan",
    )

    @property
    def subtopics(self) -> list[str]:
        return json.loads(self.subtopics_json) if self.subtopics_json else []

    @subtopics.setter
    def subtopics(self, value: list[str]) -> None:
        self.subtopics_json = json.dumps(value, ensure_ascii=False)

    def __repr__(self) -> str:
        return f"<TopicModel(id={self.id}, key='{self.key}')>"
