"""
Vector store factory.

Selects the in-memory store (dev/tests) or the pgvector store (production)
from VECTOR_STORE_STORE_TYPE.

Dependencies: context_pipeline.boundary.vdb, context_pipeline.configs
System role: Vector store instantiation and selection
"""

import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from context_pipeline.boundary.vdb.base import VectorSearchBackend
from context_pipeline.boundary.vdb.memory_store import InMemoryVectorStore
from context_pipeline.boundary.vdb.pgvector_store import PGVectorStore
from context_pipeline.configs.vector_store import VectorStoreSettings
from context_pipeline.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def get_vector_store(
    settings: VectorStoreSettings,
    session_factory: async_sessionmaker | None = None,
) -> VectorSearchBackend:
    """
    Build the configured vector store.

    Args:
        settings: Vector store settings
        session_factory: Async session factory, required for 'pgvector'

    Returns:
        VectorSearchBackend: Configured store

    Raises:
        ValidationError: If the store type is unknown or pgvector lacks a session factory
    """
    store_type = settings.store_type.lower()

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_store - Creating in-memory vector store (local dev mode)")
        return InMemoryVectorStore()

    if store_type == "pgvector":
        if session_factory is None:
            raise ValidationError("pgvector store requires a database session factory", field="store_type")
        logger.info(f"{__name__}:get_vector_store - Creating pgvector store (production mode)")
        return PGVectorStore(session_factory)

    raise ValidationError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. Must be 'memory' or 'pgvector'.",
        field="store_type",
    )
