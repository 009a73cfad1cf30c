"""Knowledge-base seeder — loads topics and answer records from YAML.

Executed at startup via the FastAPI lifespan. Idempotent: nothing is written
when the store already holds records.
"""

import logging
from pathlib import Path

import yaml

from chatbot.application.interfaces import KnowledgeBaseRepository
from chatbot.domain.entities import (
    AnswerKind,
    IntentCategory,
    KnowledgeRecord,
    Topic,
)

logger = logging.getLogger(__name__)


class KnowledgeBaseSeeder:
    """Seeds an empty knowledge base from a YAML file.

    Layout::

        topics:
          - key: calidad_aire
            name: Calidad del aire
            description: ...
            records:
              - subtopic: Smog
                key_phrase: qué es el smog
                answer: ...
                keywords: [smog, neblina]
                intent: informativa
    """

    def __init__(self, seed_file: str, repository: KnowledgeBaseRepository):
        self._seed_file = Path(seed_file)
        self._repo = repository

    async def seed(self) -> int:
        """Persist topics and records; returns the number of records created."""
        existing = await self._repo.count_records()
        if existing:
            logger.debug("Knowledge base already holds %d records — skipping seed", existing)
            return 0

        if not self._seed_file.exists():
            logger.warning("Knowledge seed file not found: %s", self._seed_file)
            return 0

        data = self._load_yaml(self._seed_file)
        if not data:
            return 0

        created = 0
        for entry in data.get("topics", []):
            if not isinstance(entry, dict) or "key" not in entry:
                continue
            records_data = [r for r in entry.get("records", []) if isinstance(r, dict)]
            topic = await self._repo.create_topic(
                Topic(
                    key=str(entry["key"]).strip().lower(),
                    name=entry.get("name", entry["key"]),
                    description=entry.get("description", "") or "",
                    subtopics=self._subtopics(entry, records_data),
                )
            )
            for record_data in records_data:
                await self._repo.create_record(self._build_record(topic, record_data))
                created += 1
            logger.info("Seeded topic '%s' with %d records", topic.key, len(records_data))

        logger.info("Knowledge base seeded: %d records", created)
        return created

    # ── Private helpers ──────────────────────────────────────────────

    @staticmethod
    def _subtopics(entry: dict, records_data: list[dict]) -> list[str]:
        declared = [str(s) for s in entry.get("subtopics", [])]
        for record in records_data:
            label = str(record.get("subtopic", "")).strip()
            if label and label not in declared:
                declared.append(label)
        return declared

    @staticmethod
    def _build_record(topic: Topic, data: dict) -> KnowledgeRecord:
        return KnowledgeRecord(
            topic_id=topic.id or "",
            subtopic=str(data.get("subtopic", "")).strip(),
            key_phrase=str(data.get("key_phrase", "")).strip(),
            answer_text=str(data.get("answer", "")),
            description=str(data.get("description", "") or "").strip(),
            example=str(data.get("example", "") or ""),
            keywords=[str(k) for k in data.get("keywords", [])],
            intent=IntentCategory(data.get("intent", IntentCategory.INFORMATIONAL.value)),
            answer_kind=AnswerKind(data.get("answer_kind", AnswerKind.TEXT.value)),
        )

    def _load_yaml(self, path: Path) -> dict | None:
        """Load and parse a YAML file, returning None on error."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except Exception:
            logger.exception("Failed to parse YAML file: %s", path)
            return None
