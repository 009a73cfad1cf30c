"""Domain entities for the curated knowledge base — topics and answer records."""

from dataclasses import dataclass, field
from enum import Enum


class IntentCategory(str, Enum):
    """Pragmatic purpose of a question (and the intent label of a record).

    ``OTHER`` is only ever used as a record label; the classifier never emits it.
    """

    INFORMATIONAL = "informativa"
    RECOMMENDATION = "recomendacion"
    TECHNICAL = "tecnica"
    HEALTH = "salud"
    OTHER = "otro"


class AnswerKind(str, Enum):
    """Presentation type of an answer."""

    TEXT = "texto"
    LINK = "enlace"
    OTHER = "otro"


@dataclass
class Topic:
    """Top-level subject category of the knowledge base.

    ``key`` is lowercase and unique; uniqueness is enforced by the store.
    """

    key: str
    name: str
    id: str | None = None
    description: str = ""
    subtopics: list[str] = field(default_factory=list)


@dataclass
class KnowledgeRecord:
    """A single question–answer record tagged with topic, subtopic and intent."""

    topic_id: str
    subtopic: str
    key_phrase: str
    answer_text: str
    id: str | None = None
    description: str = ""
    example: str = ""
    keywords: list[str] = field(default_factory=list)
    intent: IntentCategory = IntentCategory.INFORMATIONAL
    answer_kind: AnswerKind = AnswerKind.TEXT


@dataclass(frozen=True)
class RecordFilter:
    """Conjunctive filter over the knowledge base.

    ``subtopic`` is matched case-insensitively against the whole label.
    Unset fields do not constrain the result.
    """

    topic_id: str | None = None
    subtopic: str | None = None
    intent: IntentCategory | None = None

    def describe(self) -> dict[str, str]:
        """Readable form for logs."""
        parts: dict[str, str] = {}
        if self.topic_id is not None:
            parts["topic_id"] = self.topic_id
        if self.subtopic is not None:
            parts["subtopic"] = self.subtopic
        if self.intent is not None:
            parts["intent"] = self.intent.value
        return parts
