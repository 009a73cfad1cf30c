"""Abstract interface for persisting feedback events."""

from abc import ABC, abstractmethod

from chatbot.domain.entities import FeedbackEvent


class FeedbackSink(ABC):
    """Port — stores unanswered or unhelpful exchanges."""

    @abstractmethod
    async def save(self, event: FeedbackEvent) -> FeedbackEvent:
        """Persist a feedback event.

        Returns:
            The stored event with its assigned ID.
        """
        ...

    @abstractmethod
    async def list_recent(self, *, limit: int = 50) -> list[FeedbackEvent]:
        """Retrieve feedback events, most recent first."""
        ...
