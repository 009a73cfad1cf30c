"""SQLAlchemy ORM model for knowledge-base answer records."""

import json
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chatbot.infrastructure.database.base import Base


class KnowledgeRecordModel(Base):
    """ORM model — maps to the 'knowledge_records' table.

    ``subtopic_key`` and ``search_text`` are accent-folded, lowercase copies
    maintained by the repository; filters and broad recall run against them.
    """

    __tablename__ = "knowledge_records"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    topic_id: Mapped[int] = mapped_column(
        ForeignKey("topics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    subtopic: Mapped[str] = mapped_column(String(255), nullable=False)
    subtopic_key: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    key_phrase: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    answer_text: Mapped[str] = mapped_column(Text, nullable=False)
    example: Mapped[str | None] = mapped_column(Text, nullable=True)
    intent: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    answer_kind: Mapped[str] = mapped_column(String(20), nullable=False, default="texto")

    # JSON-encoded list stored as text (SQLite-friendly)
    keywords_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    search_text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    topic = relationship("TopicModel", back_populates="records")

    @property
    def keywords(self) -> list[str]:
        return json.loads(self.keywords_json) if self.keywords_json else []

    @keywords.setter
    def keywords(self, value: list[str]) -> None:
        self.keywords_json = json.dumps(value, ensure_ascii=False)

    def __repr__(self) -> str:
        return f"<KnowledgeRecordModel(id={self.id}, subtopic='{self.subtopic}')>"
