"""Unit tests for the NLP vocabulary loader."""

import pytest

from chatbot.application.services.vocabulary_loader import load_vocabulary, parse_vocabulary
from chatbot.domain.entities import IntentCategory
from chatbot.domain.exceptions import VocabularyError


def test_loads_shipped_vocabulary(vocabulary_file):
    vocabulary = load_vocabulary(vocabulary_file)

    assert vocabulary.version == 1
    assert [category for category, _ in vocabulary.intent_phrases] == [
        IntentCategory.INFORMATIONAL,
        IntentCategory.RECOMMENDATION,
        IntentCategory.TECHNICAL,
        IntentCategory.HEALTH,
    ]
    assert vocabulary.misspellings[0] == ("que ase", "qué hace")
    assert ("que es el smock", "qué es el smog") in vocabulary.misspellings
    assert "saludo" in vocabulary.generic_subtopics
    assert "qué" in vocabulary.stopwords


def test_declaration_order_is_preserved(tmp_path):
    path = tmp_path / "vocab.yaml"
    path.write_text(
        "version: 1\n"
        "topic_keywords:\n"
        "  zeta: [z]\n"
        "  alfa: [a]\n",
        encoding="utf-8",
    )
    vocabulary = load_vocabulary(path)
    assert [key for key, _ in vocabulary.topic_keywords] == ["zeta", "alfa"]


def test_missing_sections_default_to_empty():
    vocabulary = parse_vocabulary({"version": 1})
    assert vocabulary.intent_phrases == ()
    assert vocabulary.stopwords == frozenset()


@pytest.mark.parametrize(
    "data, fragment",
    [
        ([], "mapping"),
        ({"version": 2}, "unsupported version"),
        ({"version": 1, "intents": {"saludo": ["hola"]}}, "unknown intent"),
        ({"version": 1, "intents": {"salud": "asma"}}, "list of strings"),
        ({"version": 1, "misspellings": ["que ase"]}, "mapping"),
        ({"version": 1, "stopwords": [1, 2]}, "list of strings"),
    ],
)
def test_malformed_vocabulary_is_rejected(data, fragment):
    with pytest.raises(VocabularyError) as exc_info:
        parse_vocabulary(data)
    assert fragment in exc_info.value.message


def test_missing_file(tmp_path):
    with pytest.raises(VocabularyError):
        load_vocabulary(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("version: [1\nintents: {", encoding="utf-8")
    with pytest.raises(VocabularyError):
        load_vocabulary(path)
