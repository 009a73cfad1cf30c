"""Unit tests for IntentClassifier."""

import pytest

from chatbot.application.services.intent_classifier import IntentClassifier
from chatbot.application.services.text_normalizer import TextNormalizer
from chatbot.application.services.vocabulary_loader import load_vocabulary
from chatbot.domain.entities import IntentCategory


@pytest.fixture
def classifier(vocabulary):
    return IntentClassifier(vocabulary.intent_phrases)


@pytest.mark.parametrize(
    "question, expected",
    [
        ("¿Qué es el smog?", IntentCategory.INFORMATIONAL),
        ("¿Qué me recomiendas para dormir mejor?", IntentCategory.RECOMMENDATION),
        ("¿Cómo funciona el sensor?", IntentCategory.TECHNICAL),
        ("tengo asma", IntentCategory.HEALTH),
    ],
)
def test_classifies_by_trigger_phrase(classifier, question, expected):
    assert classifier.classify(TextNormalizer.normalize(question)) == expected


def test_earlier_category_shadows_later(classifier):
    # Both "qué es" (informativa) and "asma" (salud) occur; declaration order decides.
    normalized = TextNormalizer.normalize("¿Qué es bueno para el asma?")
    assert classifier.classify(normalized) == IntentCategory.INFORMATIONAL


def test_defaults_to_informational(classifier):
    assert classifier.classify("hola buena") == IntentCategory.INFORMATIONAL
    assert classifier.classify("") == IntentCategory.INFORMATIONAL


def test_classification_is_deterministic(classifier):
    normalized = TextNormalizer.normalize("¿Cómo funciona el filtro?")
    results = {classifier.classify(normalized) for _ in range(5)}
    assert results == {IntentCategory.TECHNICAL}


def test_accented_trigger_phrases_match_normalized_text():
    classifier = IntentClassifier(((IntentCategory.HEALTH, ("síntomas",)),))
    assert classifier.classify(TextNormalizer.normalize("Síntomas por el humo")) == IntentCategory.HEALTH


@pytest.mark.parametrize(
    "question, expected",
    [
        ("¿Cómo afecta el ozono?", IntentCategory.INFORMATIONAL),
        ("¿Cuáles son los contaminantes?", IntentCategory.INFORMATIONAL),
        ("dame consejos para el smog", IntentCategory.RECOMMENDATION),
        ("¿Cómo prevenir el asma?", IntentCategory.RECOMMENDATION),
        ("¿Cuál es la arquitectura del purificador?", IntentCategory.TECHNICAL),
        ("¿Cómo purifica el aparato?", IntentCategory.TECHNICAL),
        ("¿Qué riesgo tiene el humo?", IntentCategory.HEALTH),
        ("me provoca tos", IntentCategory.HEALTH),
    ],
)
def test_shipped_intent_table(vocabulary_file, question, expected):
    classifier = IntentClassifier(load_vocabulary(vocabulary_file).intent_phrases)
    assert classifier.classify(TextNormalizer.normalize(question)) == expected
