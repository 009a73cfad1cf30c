"""Pydantic schemas for the consulta (chat query) API."""

from pydantic import BaseModel, Field


# ── Request Schemas ──────────────────────────────────────────────────


class ConsultaRequest(BaseModel):
    """Request body for a user question."""

    pregunta: str = Field(..., min_length=1, max_length=2000, description="User question, in Spanish")
    session_id: str | None = Field(default=None, max_length=100, description="Client chat session ID")


# ── Response Schemas ─────────────────────────────────────────────────


class QueryAnalysisSchema(BaseModel):
    """What the analyzer understood from the question."""

    original_text: str
    normalized_text: str
    intent: str
    resolved_topic: str | None = None
    resolved_subtopic: str | None = None
    reasoning: str
    confidence_score: float = Field(ge=0.0, le=1.0)
    is_ambiguous: bool
    is_out_of_domain: bool

    model_config = {"from_attributes": True}


class AnswerSchema(BaseModel):
    """One ranked answer."""

    text: str
    provenance: str
    score: float | None = None
    record_id: str | None = None
    subtopic: str | None = None
    intent: str | None = None
    key_phrase: str | None = None

    model_config = {"from_attributes": True}


class ConsultaResponse(BaseModel):
    """Answers for one question plus the path that produced them."""

    answers: list[AnswerSchema]
    origin: str
    analysis: QueryAnalysisSchema | None = None
