"""Consulta API controller — answers user questions from the knowledge base."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from chatbot.application.schemas.consulta import (
    AnswerSchema,
    ConsultaRequest,
    ConsultaResponse,
    QueryAnalysisSchema,
)
from chatbot.application.services import QueryResolutionService
from chatbot.domain.entities import Answer, QueryAnalysis, ResolutionResult
from chatbot.domain.exceptions import InvalidQueryError, KnowledgeStoreError
from chatbot.infrastructure.dependencies import get_query_resolution_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/consulta", tags=["consulta"])


# ── Helpers ──────────────────────────────────────────────────────────


def _to_analysis_schema(analysis: QueryAnalysis) -> QueryAnalysisSchema:
    """Map domain QueryAnalysis to response schema."""
    return QueryAnalysisSchema(
        original_text=analysis.original_text,
        normalized_text=analysis.normalized_text,
        intent=analysis.intent.value,
        resolved_topic=analysis.resolved_topic,
        resolved_subtopic=analysis.resolved_subtopic,
        reasoning=analysis.reasoning.value,
        confidence_score=analysis.confidence_score,
        is_ambiguous=analysis.is_ambiguous,
        is_out_of_domain=analysis.is_out_of_domain,
    )


def _to_answer_schema(answer: Answer) -> AnswerSchema:
    return AnswerSchema(
        text=answer.text,
        provenance=answer.provenance.value,
        score=answer.score,
        record_id=answer.record_id,
        subtopic=answer.subtopic,
        intent=answer.intent.value if answer.intent else None,
        key_phrase=answer.key_phrase,
    )


def _to_response(result: ResolutionResult) -> ConsultaResponse:
    return ConsultaResponse(
        answers=[_to_answer_schema(a) for a in result.answers],
        origin=result.origin.value,
        analysis=_to_analysis_schema(result.analysis) if result.analysis else None,
    )


def _store_unavailable(exc: KnowledgeStoreError) -> HTTPException:
    logger.error("Knowledge store unavailable: %s", exc)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="La base de conocimiento no está disponible en este momento. Inténtalo de nuevo.",
    )


# ── Endpoints ────────────────────────────────────────────────────────


@router.post("", response_model=ConsultaResponse)
async def resolve_consulta(
    body: ConsultaRequest,
    service: QueryResolutionService = Depends(get_query_resolution_service),
):
    """Answer a question: analysis → tiered search → ranked answers."""
    try:
        result = await service.resolve_query(body.pregunta, session_id=body.session_id)
    except InvalidQueryError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)
    except KnowledgeStoreError as e:
        raise _store_unavailable(e)
    return _to_response(result)


@router.post("/analisis", response_model=QueryAnalysisSchema)
async def analyze_consulta(
    body: ConsultaRequest,
    service: QueryResolutionService = Depends(get_query_resolution_service),
):
    """Analysis only (no search) — useful for debugging."""
    try:
        analysis = await service.analyze(body.pregunta)
    except InvalidQueryError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)
    except KnowledgeStoreError as e:
        raise _store_unavailable(e)
    return _to_analysis_schema(analysis)
