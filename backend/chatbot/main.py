"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatbot.config import get_settings
from chatbot.infrastructure.database import Base, engine
from chatbot.infrastructure.database.session import async_session_factory
from chatbot.infrastructure.database.repositories import SQLAlchemyKnowledgeBaseRepository
from chatbot.application.services import KnowledgeBaseSeeder
from chatbot.infrastructure.dependencies import get_vocabulary
from chatbot.infrastructure.logging.log_config import setup_logging
from chatbot.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _seed_knowledge_base() -> None:
    """Load the seed YAML into an empty knowledge base.

    Idempotent — the seeder does nothing once records exist.
    """
    settings = get_settings()
    try:
        async with async_session_factory() as session:
            seeder = KnowledgeBaseSeeder(
                seed_file=settings.knowledge_seed_file,
                repository=SQLAlchemyKnowledgeBaseRepository(session),
            )
            created = await seeder.seed()
            await session.commit()
            if created:
                logger.info("Knowledge base seeded with %d records", created)
    except Exception:
        logger.exception("Failed to seed knowledge base — continuing without it")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — logging, tables, vocabulary, seed content."""
    settings = get_settings()
    setup_logging()

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Load the NLP vocabulary once; a broken file aborts startup
    vocabulary = get_vocabulary()
    logger.info("NLP vocabulary v%d ready", vocabulary.version)

    # 3. Seed the knowledge base when empty
    if settings.seed_knowledge_base:
        await _seed_knowledge_base()

    yield

    # Shutdown
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "chatbot.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
