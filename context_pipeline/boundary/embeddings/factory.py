"""
Embedding provider factory.

Builds the configured LangChain embeddings client and wraps it in the
provider adapter.

Dependencies: langchain_aws, langchain_google_genai, context_pipeline.configs
System role: Provider selection from settings
"""

import logging

from langchain_core.embeddings import Embeddings

from context_pipeline.boundary.embeddings.provider import LangChainEmbeddingProvider
from context_pipeline.configs.embedding import EmbeddingSettings
from context_pipeline.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def create_embeddings(settings: EmbeddingSettings) -> Embeddings:
    """
    Create the LangChain embeddings client for the configured provider.

    Args:
        settings: Embedding settings

    Returns:
        Embeddings: Google Gemini or Amazon Bedrock embeddings client

    Raises:
        ValidationError: If the provider name is unknown
    """
    provider = settings.provider.lower()
    if provider == "google":
        from context_pipeline.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings

        return FixedDimensionEmbeddings(
            model=settings.model,
            output_dimensionality=settings.dimensions,
        )
    if provider == "bedrock":
        from langchain_aws import BedrockEmbeddings

        return BedrockEmbeddings(
            model_id=settings.bedrock_model_id,
            region_name=settings.aws_region,
        )
    raise ValidationError(f"Unknown embedding provider: {settings.provider}", field="provider")


def create_embedding_provider(settings: EmbeddingSettings) -> LangChainEmbeddingProvider:
    """
    Create the embedding provider adapter from settings.

    Args:
        settings: Embedding settings

    Returns:
        LangChainEmbeddingProvider: Provider with the configured timeout
    """
    embeddings = create_embeddings(settings)
    model_name = settings.bedrock_model_id if settings.provider.lower() == "bedrock" else settings.model
    logger.info(
        f"{__name__}:create_embedding_provider - Using {settings.provider} embeddings",
        extra={"model": model_name, "dimensions": settings.dimensions},
    )
    return LangChainEmbeddingProvider(
        embeddings=embeddings,
        model_name=model_name,
        timeout_seconds=settings.request_timeout_seconds,
    )
