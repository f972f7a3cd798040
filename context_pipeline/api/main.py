"""
FastAPI application with assembled routers.

Dependencies: fastapi, uvicorn, context_pipeline.api.routers
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from context_pipeline.api.deps.dependencies import get_service_cache
from context_pipeline.boundary.db.connection import create_tables
from context_pipeline.configs import get_settings
from context_pipeline.core.exceptions import EmbeddingCacheError
from context_pipeline.observability.logger import configure_logging

from .routers import documents_router, embeddings_router, health_router, retrieval_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging, creates tables when a database backend is
    configured, purges idle embedding cache entries and releases cached
    services on shutdown.
    """
    configure_logging(get_settings().log_level)
    logger = logging.getLogger("uvicorn")

    cache = get_service_cache()
    if cache.uses_database:
        await create_tables(cache.engine)
        logger.info("Database tables ready")

    try:
        removed = await cache.embedding_cache.purge_expired()
        logger.info(f"Purged {removed} idle embedding cache entries")
    except EmbeddingCacheError as e:
        logger.warning(f"Embedding cache purge failed: {e}")

    yield

    await cache.aclose()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Context Pipeline API",
        description="Document chunking, cached embeddings and grounded retrieval",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(retrieval_router, prefix="/api/v1")
    app.include_router(embeddings_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "context_pipeline.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
