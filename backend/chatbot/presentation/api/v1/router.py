"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from chatbot.presentation.api.v1.endpoints.health import router as health_router
from chatbot.presentation.api.v1.consulta_controller import router as consulta_router
from chatbot.presentation.api.v1.topics_controller import router as topics_router
from chatbot.presentation.api.v1.feedback_controller import router as feedback_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(consulta_router)
router.include_router(topics_router)
router.include_router(feedback_router)
