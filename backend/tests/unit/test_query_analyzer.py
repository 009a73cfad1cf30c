"""Unit tests for QueryAnalyzer — the staged analysis pipeline."""

import logging

import pytest

from chatbot.application.services.query_analyzer import QueryAnalyzer
from chatbot.domain.entities import IntentCategory, Reasoning
from chatbot.domain.exceptions import KnowledgeStoreError


@pytest.fixture
def analyzer(knowledge_base, vocabulary):
    return QueryAnalyzer.from_vocabulary(knowledge_base, vocabulary)


@pytest.mark.asyncio
async def test_strong_textual_match(analyzer):
    analysis = await analyzer.analyze("¿Qué es el smog?")

    assert analysis.normalized_text == "que es el smog"
    assert analysis.intent == IntentCategory.INFORMATIONAL
    assert analysis.resolved_topic == "1"
    assert analysis.resolved_subtopic == "Smog"
    assert analysis.reasoning == Reasoning.STRONG_MATCH
    assert analysis.confidence_score == pytest.approx(0.8)
    assert not analysis.is_ambiguous
    assert not analysis.is_out_of_domain


@pytest.mark.asyncio
async def test_misspelling_is_corrected_before_scoring(analyzer):
    analysis = await analyzer.analyze("Que es el smock?")

    assert analysis.original_text == "Que es el smock?"
    assert analysis.normalized_text == "que es el smog"
    assert analysis.resolved_subtopic == "Smog"
    assert analysis.reasoning == Reasoning.STRONG_MATCH


@pytest.mark.asyncio
async def test_only_first_misspelling_is_applied(analyzer):
    analysis = await analyzer.analyze("que ase el smock")

    assert analysis.normalized_text == "que hace el smock"
    assert analysis.intent == IntentCategory.INFORMATIONAL


@pytest.mark.asyncio
async def test_fuzzy_match_pins_confidence(analyzer):
    analysis = await analyzer.analyze("se canbia el filtr hepa")

    assert analysis.resolved_subtopic == "Filtro HEPA"
    assert analysis.resolved_topic == "2"
    assert analysis.confidence_score == pytest.approx(0.42)
    assert analysis.reasoning == Reasoning.SUBTOPIC_HEURISTIC


@pytest.mark.asyncio
async def test_synonym_heuristic_sets_subtopic_and_topic(analyzer):
    analysis = await analyzer.analyze("hay mucha neblina hoy")

    assert analysis.resolved_subtopic == "Smog"
    # Topic follows the subtopic's record.
    assert analysis.resolved_topic == "1"
    assert analysis.reasoning == Reasoning.SUBTOPIC_HEURISTIC
    assert not analysis.is_ambiguous


@pytest.mark.asyncio
async def test_topic_by_keyword(analyzer):
    analysis = await analyzer.analyze("el aire esta sucio")

    assert analysis.resolved_topic == "1"
    assert analysis.resolved_subtopic is None
    assert analysis.reasoning == Reasoning.TOPIC_BY_KEYWORD
    assert analysis.is_ambiguous
    assert not analysis.is_out_of_domain


@pytest.mark.asyncio
async def test_empty_knowledge_base_is_out_of_domain(empty_knowledge_base, vocabulary, caplog):
    analyzer = QueryAnalyzer.from_vocabulary(empty_knowledge_base, vocabulary)

    with caplog.at_level(logging.WARNING, logger="QueryAnalyzer"):
        analysis = await analyzer.analyze("¿Qué es el radón?")

    assert analysis.confidence_score == 0.0
    assert analysis.resolved_topic is None
    assert analysis.resolved_subtopic is None
    assert analysis.reasoning == Reasoning.NO_MATCH
    assert analysis.is_ambiguous
    assert analysis.is_out_of_domain
    assert any(r.levelno == logging.WARNING for r in caplog.records)


@pytest.mark.asyncio
async def test_empty_text(analyzer):
    analysis = await analyzer.analyze("")

    assert analysis.normalized_text == ""
    assert analysis.is_out_of_domain


@pytest.mark.asyncio
async def test_store_failure_propagates(failing_knowledge_base, vocabulary):
    analyzer = QueryAnalyzer.from_vocabulary(failing_knowledge_base, vocabulary)

    with pytest.raises(KnowledgeStoreError):
        await analyzer.analyze("¿Qué es el smog?")


@pytest.mark.asyncio
async def test_confidence_is_bounded(analyzer):
    for text in ["¿Qué es el smog?", "hola", "zzz", "filtro hepa smog neblina aire"]:
        analysis = await analyzer.analyze(text)
        assert 0.0 <= analysis.confidence_score <= 1.0


@pytest.mark.asyncio
async def test_intent_is_logged_under_its_own_stage(analyzer, caplog):
    with caplog.at_level(logging.INFO, logger="QueryAnalyzer"):
        await analyzer.analyze("¿Cómo funciona el sensor?")

    assert "[INTENT]" in caplog.text
    assert "tecnica" in caplog.text
