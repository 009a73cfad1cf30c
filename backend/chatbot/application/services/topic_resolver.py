"""Topic inference from keyword dictionaries, and topic repair from subtopic evidence."""

import logging

from chatbot.application.services.text_normalizer import TextNormalizer
from chatbot.domain.entities import KnowledgeRecord, Topic

logger = logging.getLogger(__name__)


class TopicResolver:
    """Resolves the topic of a query.

    Keyword evidence is weaker than subtopic evidence: ``reconcile`` always
    lets a resolved subtopic override a keyword-inferred topic.
    """

    def __init__(self, keywords_by_topic_key: tuple[tuple[str, tuple[str, ...]], ...]):
        self._keywords = tuple(
            (key, tuple(k for k in (TextNormalizer.normalize(w) for w in words) if k))
            for key, words in keywords_by_topic_key
        )

    def infer_topic(self, normalized_text: str, topics: list[Topic]) -> Topic | None:
        """First topic key (declaration order) with a keyword inside the text.

        The key is then looked up among stored topics; a matching key with no
        stored topic is skipped and the search continues.
        """
        for key, keywords in self._keywords:
            if not any(keyword in normalized_text for keyword in keywords):
                continue
            wanted = TextNormalizer.fold(key).strip()
            for topic in topics:
                if TextNormalizer.fold(topic.key).strip() == wanted:
                    logger.debug("Topic %r inferred by keyword", topic.key)
                    return topic
            logger.debug("Topic key %r matched but is not stored", key)
        return None

    @staticmethod
    def reconcile(
        topic_id: str | None,
        subtopic: str | None,
        records: list[KnowledgeRecord],
    ) -> str | None:
        """Force the topic to that of the first record carrying ``subtopic``."""
        if not subtopic:
            return topic_id
        wanted = TextNormalizer.fold(subtopic).strip()
        for record in records:
            if record.subtopic and TextNormalizer.fold(record.subtopic).strip() == wanted:
                if record.topic_id != topic_id:
                    logger.debug(
                        "Topic corrected from %s to %s by subtopic %r",
                        topic_id,
                        record.topic_id,
                        subtopic,
                    )
                return record.topic_id
        return topic_id
