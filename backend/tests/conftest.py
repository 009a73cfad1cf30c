"""Shared fakes and fixtures for the chatbot test suite."""

from pathlib import Path

import pytest

from chatbot.application.interfaces import FeedbackSink, KnowledgeBaseRepository
from chatbot.application.services.text_normalizer import TextNormalizer
from chatbot.domain.entities import (
    FeedbackEvent,
    IntentCategory,
    KnowledgeRecord,
    NlpVocabulary,
    RecordFilter,
    Topic,
)
from chatbot.domain.exceptions import KnowledgeStoreError

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


# ── Fakes ────────────────────────────────────────────────────────────


class FakeKnowledgeBase(KnowledgeBaseRepository):
    """In-memory knowledge base keeping insertion order."""

    def __init__(
        self,
        topics: list[Topic] | None = None,
        records: list[KnowledgeRecord] | None = None,
        fail: bool = False,
    ):
        self.topics = list(topics or [])
        self.records = list(records or [])
        self.fail = fail
        self.term_queries: list[list[str]] = []

    def _check(self, operation: str) -> None:
        if self.fail:
            raise KnowledgeStoreError(operation, ConnectionError("store offline"))

    async def find_all(self) -> list[KnowledgeRecord]:
        self._check("find_all")
        return list(self.records)

    async def find_by_filter(self, record_filter: RecordFilter) -> list[KnowledgeRecord]:
        self._check("find_by_filter")
        result = []
        for r in self.records:
            if record_filter.topic_id is not None and r.topic_id != record_filter.topic_id:
                continue
            if record_filter.subtopic is not None and (
                TextNormalizer.fold(r.subtopic) != TextNormalizer.fold(record_filter.subtopic)
            ):
                continue
            if record_filter.intent is not None and r.intent != record_filter.intent:
                continue
            result.append(r)
        return result

    async def find_by_terms(self, terms: list[str]) -> list[KnowledgeRecord]:
        self._check("find_by_terms")
        self.term_queries.append(list(terms))
        result = []
        for r in self.records:
            haystack = TextNormalizer.fold(
                " ".join([r.key_phrase, r.answer_text, r.description, r.example, *r.keywords])
            )
            if any(TextNormalizer.fold(t) in haystack for t in terms):
                result.append(r)
        return result

    async def find_topics(self) -> list[Topic]:
        self._check("find_topics")
        return list(self.topics)

    async def count_records(self) -> int:
        self._check("count_records")
        return len(self.records)

    async def create_topic(self, topic: Topic) -> Topic:
        topic.id = str(len(self.topics) + 1)
        self.topics.append(topic)
        return topic

    async def create_record(self, record: KnowledgeRecord) -> KnowledgeRecord:
        record.id = f"r{len(self.records) + 1}"
        self.records.append(record)
        return record


class FakeFeedbackSink(FeedbackSink):
    """Collects feedback events in memory; optionally fails on save."""

    def __init__(self, fail: bool = False):
        self.events: list[FeedbackEvent] = []
        self.fail = fail

    async def save(self, event: FeedbackEvent) -> FeedbackEvent:
        if self.fail:
            raise RuntimeError("feedback store offline")
        event.id = len(self.events) + 1
        self.events.append(event)
        return event

    async def list_recent(self, *, limit: int = 50) -> list[FeedbackEvent]:
        return list(reversed(self.events))[:limit]


# ── Sample data ──────────────────────────────────────────────────────


def sample_topics() -> list[Topic]:
    return [
        Topic(id="1", key="calidad_aire", name="Calidad del aire"),
        Topic(id="2", key="purificador", name="Purificador"),
        Topic(id="3", key="conversacion", name="Conversación"),
    ]


def sample_records() -> list[KnowledgeRecord]:
    return [
        KnowledgeRecord(
            id="r1",
            topic_id="1",
            subtopic="Smog",
            key_phrase="qué es el smog",
            description="definición del smog",
            answer_text="El smog es una mezcla de contaminantes y neblina.",
            example="¿Qué es el smog de la ciudad?",
            keywords=["smog", "neblina"],
            intent=IntentCategory.INFORMATIONAL,
        ),
        KnowledgeRecord(
            id="r2",
            topic_id="2",
            subtopic="Filtro HEPA",
            key_phrase="cada cuánto se cambia el filtro hepa",
            description="mantenimiento del filtro",
            answer_text="Cambia el filtro HEPA cada 6 meses.",
            keywords=["filtro", "hepa", "cambiar"],
            intent=IntentCategory.TECHNICAL,
        ),
        KnowledgeRecord(
            id="r3",
            topic_id="3",
            subtopic="Saludo",
            key_phrase="hola",
            description="saludo inicial",
            answer_text="¡Hola! ¿En qué te puedo ayudar?",
            keywords=["hola", "buenas"],
            intent=IntentCategory.INFORMATIONAL,
        ),
    ]


def sample_vocabulary() -> NlpVocabulary:
    return NlpVocabulary(
        version=1,
        intent_phrases=(
            (IntentCategory.INFORMATIONAL, ("qué es", "qué hace")),
            (IntentCategory.RECOMMENDATION, ("qué me recomiendas",)),
            (IntentCategory.TECHNICAL, ("cómo funciona", "filtro")),
            (IntentCategory.HEALTH, ("asma",)),
        ),
        misspellings=(
            ("que ase", "qué hace"),
            ("que es el smock", "qué es el smog"),
        ),
        topic_keywords=(
            ("calidad_aire", ("aire", "smog")),
            ("purificador", ("filtro", "hepa")),
            ("conversacion", ("hola",)),
        ),
        subtopic_synonyms=(
            ("Smog", ("smog", "neblina")),
            ("Filtro HEPA", ("hepa", "filtro")),
            ("Saludo", ("hola",)),
        ),
        generic_subtopics=("saludo",),
        stopwords=frozenset({"el", "la", "de", "es", "que", "qué", "un", "una"}),
    )


# ── Fixtures ─────────────────────────────────────────────────────────


@pytest.fixture
def vocabulary() -> NlpVocabulary:
    return sample_vocabulary()


@pytest.fixture
def knowledge_base() -> FakeKnowledgeBase:
    return FakeKnowledgeBase(topics=sample_topics(), records=sample_records())


@pytest.fixture
def empty_knowledge_base() -> FakeKnowledgeBase:
    return FakeKnowledgeBase()


@pytest.fixture
def feedback_sink() -> FakeFeedbackSink:
    return FakeFeedbackSink()


@pytest.fixture
def vocabulary_file() -> Path:
    return DATA_DIR / "nlp_vocabulary.yaml"


@pytest.fixture
def knowledge_seed_file() -> Path:
    return DATA_DIR / "knowledge_base.yaml"


@pytest.fixture
def failing_knowledge_base() -> FakeKnowledgeBase:
    return FakeKnowledgeBase(topics=sample_topics(), records=sample_records(), fail=True)


@pytest.fixture
def failing_feedback_sink() -> FakeFeedbackSink:
    return FakeFeedbackSink(fail=True)


@pytest.fixture
def make_knowledge_base():
    """Factory for a fake knowledge base holding custom records."""

    def _make(records: list[KnowledgeRecord], topics: list[Topic] | None = None) -> FakeKnowledgeBase:
        return FakeKnowledgeBase(topics=topics or sample_topics(), records=records)

    return _make
