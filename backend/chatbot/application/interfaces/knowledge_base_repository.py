"""Abstract repository interface (port) for the knowledge-base store."""

from abc import ABC, abstractmethod

from chatbot.domain.entities import KnowledgeRecord, RecordFilter, Topic


class KnowledgeBaseRepository(ABC):
    """Port for reading topics and answer records — implemented in the infrastructure layer.

    Read failures must raise ``KnowledgeStoreError``; an empty result is
    never used to signal a failure.
    """

    @abstractmethod
    async def find_all(self) -> list[KnowledgeRecord]:
        """Retrieve every record, in stable storage order."""
        ...

    @abstractmethod
    async def find_by_filter(self, record_filter: RecordFilter) -> list[KnowledgeRecord]:
        """Retrieve the records matching every field set on the filter."""
        ...

    @abstractmethod
    async def find_by_terms(self, terms: list[str]) -> list[KnowledgeRecord]:
        """Broad recall: records where any term occurs (case-insensitive) in
        the key phrase, answer, description, example or keywords."""
        ...

    @abstractmethod
    async def find_topics(self) -> list[Topic]:
        """Retrieve every topic."""
        ...

    @abstractmethod
    async def count_records(self) -> int:
        """Number of stored records."""
        ...

    @abstractmethod
    async def create_topic(self, topic: Topic) -> Topic:
        """Persist a new topic and return it with the generated ID."""
        ...

    @abstractmethod
    async def create_record(self, record: KnowledgeRecord) -> KnowledgeRecord:
        """Persist a new record and return it with the generated ID."""
        ...
