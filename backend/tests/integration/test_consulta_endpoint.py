"""Integration tests for the consulta, topics and feedback endpoints.

The application is exercised through its ASGI interface with the
request-scoped services replaced by in-memory fakes.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from chatbot.infrastructure.dependencies import (
    build_query_resolution_service,
    get_feedback_repository,
    get_knowledge_base_repository,
    get_query_resolution_service,
)
from chatbot.main import app


@pytest.fixture
def client_for(vocabulary, feedback_sink):
    """Build an AsyncClient whose dependencies use the given knowledge base."""

    def _client(repository) -> AsyncClient:
        app.dependency_overrides[get_query_resolution_service] = lambda: build_query_resolution_service(
            repository, feedback_sink, vocabulary
        )
        app.dependency_overrides[get_knowledge_base_repository] = lambda: repository
        app.dependency_overrides[get_feedback_repository] = lambda: feedback_sink
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    yield _client
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_consulta_returns_ranked_answers(client_for, knowledge_base):
    async with client_for(knowledge_base) as client:
        response = await client.post("/api/v1/consulta", json={"pregunta": "¿Qué es el smog?", "session_id": "abc"})

    assert response.status_code == 200
    data = response.json()
    assert data["origin"] == "advanced"
    assert data["answers"][0]["subtopic"] == "Smog"
    assert data["answers"][0]["provenance"] == "knowledge_base"
    assert data["analysis"]["reasoning"] == "strong_textual_match"
    assert data["analysis"]["intent"] == "informativa"


@pytest.mark.asyncio
async def test_consulta_simple_match_has_no_analysis(client_for, knowledge_base):
    async with client_for(knowledge_base) as client:
        response = await client.post("/api/v1/consulta", json={"pregunta": "filtro hepa"})

    assert response.status_code == 200
    data = response.json()
    assert data["origin"] == "simple"
    assert data["analysis"] is None


@pytest.mark.asyncio
async def test_consulta_out_of_domain_records_feedback(client_for, empty_knowledge_base, feedback_sink):
    async with client_for(empty_knowledge_base) as client:
        response = await client.post("/api/v1/consulta", json={"pregunta": "¿Qué es el radón?", "session_id": "s1"})

    assert response.status_code == 200
    data = response.json()
    assert data["origin"] == "fallback"
    assert data["answers"][0]["provenance"] == "out_of_domain"
    assert data["analysis"]["is_out_of_domain"] is True
    assert feedback_sink.events[0].session_id == "s1"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"pregunta": ""}, {"pregunta": 42}])
async def test_consulta_rejects_invalid_input(client_for, knowledge_base, body):
    async with client_for(knowledge_base) as client:
        response = await client.post("/api/v1/consulta", json=body)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_consulta_store_failure_is_503(client_for, failing_knowledge_base):
    async with client_for(failing_knowledge_base) as client:
        response = await client.post("/api/v1/consulta", json={"pregunta": "¿Qué es el smog?"})

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_analysis_endpoint(client_for, knowledge_base):
    async with client_for(knowledge_base) as client:
        response = await client.post("/api/v1/consulta/analisis", json={"pregunta": "Que es el smock?"})

    assert response.status_code == 200
    data = response.json()
    assert data["normalized_text"] == "que es el smog"
    assert data["resolved_subtopic"] == "Smog"
    assert 0.0 <= data["confidence_score"] <= 1.0


@pytest.mark.asyncio
async def test_list_topics(client_for, knowledge_base):
    async with client_for(knowledge_base) as client:
        response = await client.get("/api/v1/topics")

    assert response.status_code == 200
    assert [t["key"] for t in response.json()] == ["calidad_aire", "purificador", "conversacion"]


@pytest.mark.asyncio
async def test_list_topics_store_failure(client_for, failing_knowledge_base):
    async with client_for(failing_knowledge_base) as client:
        response = await client.get("/api/v1/topics")

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_submit_and_list_feedback(client_for, knowledge_base, feedback_sink):
    payload = {
        "session_id": "abc",
        "user_message": "¿Qué es el smog?",
        "bot_message": "El smog es una mezcla de contaminantes y neblina.",
        "was_helpful": False,
        "detected_subtopics": ["Smog"],
    }
    async with client_for(knowledge_base) as client:
        created = await client.post("/api/v1/feedback", json=payload)
        listed = await client.get("/api/v1/feedback", params={"limit": 10})

    assert created.status_code == 201
    assert created.json()["was_helpful"] is False
    assert created.json()["detected_subtopics"] == ["Smog"]
    assert listed.status_code == 200
    assert [f["session_id"] for f in listed.json()] == ["abc"]
    assert feedback_sink.events[0].was_helpful is False
