"""Vocabulary loader — parses the versioned NLP vocabulary YAML file.

Executed once at startup; the resulting NlpVocabulary is frozen and shared
by every request.

Expected layout::

    version: 1
    intents:            # ordered: first matching category wins
      informativa: ["qué es", ...]
    misspellings:       # ordered: first matching entry wins
      "que ase": "qué hace"
    topic_keywords:     # ordered: first matching topic key wins
      calidad_aire: ["aire", ...]
    subtopic_synonyms:
      PM2.5: ["pm25", "particula", ...]
    generic_subtopics: ["saludo", ...]
    stopwords: ["yo", "tú", ...]
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from chatbot.domain.entities import IntentCategory, NlpVocabulary
from chatbot.domain.exceptions import VocabularyError

logger = logging.getLogger(__name__)

SUPPORTED_VERSIONS = frozenset({1})


def load_vocabulary(path: str | Path) -> NlpVocabulary:
    """Load and validate a vocabulary file.

    Raises:
        VocabularyError: if the file is missing, unparsable or malformed.
    """
    source = str(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise VocabularyError(source, "file not found") from exc
    except yaml.YAMLError as exc:
        raise VocabularyError(source, f"YAML parse error: {exc}") from exc

    vocabulary = parse_vocabulary(data, source=source)
    logger.info(
        "Vocabulary v%d loaded from %s: %d intents, %d misspellings, %d topics, %d subtopics",
        vocabulary.version,
        source,
        len(vocabulary.intent_phrases),
        len(vocabulary.misspellings),
        len(vocabulary.topic_keywords),
        len(vocabulary.subtopic_synonyms),
    )
    return vocabulary


def parse_vocabulary(data: Any, *, source: str = "<memory>") -> NlpVocabulary:
    """Validate an already-parsed mapping and freeze it."""
    if not isinstance(data, dict):
        raise VocabularyError(source, "top level must be a mapping")

    version = data.get("version")
    if version not in SUPPORTED_VERSIONS:
        raise VocabularyError(source, f"unsupported version {version!r}")

    intent_phrases = []
    for key, phrases in _mapping(data, "intents", source).items():
        try:
            category = IntentCategory(key)
        except ValueError:
            raise VocabularyError(source, f"unknown intent category {key!r}") from None
        intent_phrases.append((category, _strings(phrases, f"intents.{key}", source)))

    misspellings = []
    for malformed, corrected in _mapping(data, "misspellings", source).items():
        if not isinstance(malformed, str) or not isinstance(corrected, str):
            raise VocabularyError(source, f"misspelling {malformed!r} must map text to text")
        misspellings.append((malformed, corrected))

    topic_keywords = [
        (str(key), _strings(words, f"topic_keywords.{key}", source))
        for key, words in _mapping(data, "topic_keywords", source).items()
    ]
    subtopic_synonyms = [
        (str(subtopic), _strings(words, f"subtopic_synonyms.{subtopic}", source))
        for subtopic, words in _mapping(data, "subtopic_synonyms", source).items()
    ]

    return NlpVocabulary(
        version=version,
        intent_phrases=tuple(intent_phrases),
        misspellings=tuple(misspellings),
        topic_keywords=tuple(topic_keywords),
        subtopic_synonyms=tuple(subtopic_synonyms),
        generic_subtopics=_strings(data.get("generic_subtopics", []), "generic_subtopics", source),
        stopwords=frozenset(_strings(data.get("stopwords", []), "stopwords", source)),
    )


# ── Private helpers ──────────────────────────────────────────────────


def _mapping(data: dict, key: str, source: str) -> dict:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise VocabularyError(source, f"'{key}' must be a mapping")
    return value


def _strings(value: Any, where: str, source: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise VocabularyError(source, f"'{where}' must be a list of strings")
    return tuple(value)
