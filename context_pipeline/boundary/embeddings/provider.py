"""
Embedding provider adapters.

Wraps LangChain embedding clients behind a small async interface with a
hard timeout on every provider round trip.

Dependencies: asyncio, langchain_core
System role: Boundary between the embedding service and external providers
"""

import asyncio
import logging
from abc import ABC, abstractmethod

from langchain_core.embeddings import Embeddings

from context_pipeline.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingProvider(ABC):
    """Text to vector provider."""

    model_name: str

    @abstractmethod
    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts in one provider call.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: One vector per text, in input order

        Raises:
            EmbeddingError: If the provider fails or times out
        """


class LangChainEmbeddingProvider(EmbeddingProvider):
    """Adapter for any LangChain Embeddings implementation."""

    def __init__(
        self,
        embeddings: Embeddings,
        model_name: str,
        timeout_seconds: float = 30.0,
    ) -> None:
        """
        Initialize provider.

        Args:
            embeddings: LangChain embeddings client
            model_name: Model identifier used in logs and errors
            timeout_seconds: Timeout for each embed call
        """
        self._embeddings = embeddings
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        try:
            vectors = await asyncio.wait_for(
                self._embeddings.aembed_documents(texts),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise EmbeddingError(
                f"Embedding request timed out after {self.timeout_seconds}s",
                details={"model": self.model_name, "text_count": len(texts)},
            ) from e
        except Exception as e:
            raise EmbeddingError(
                f"Embedding request failed: {e}",
                details={"model": self.model_name, "text_count": len(texts)},
            ) from e

        if len(vectors) != len(texts):
            raise EmbeddingError(
                "Provider returned a different number of vectors than texts",
                details={"model": self.model_name, "expected": len(texts), "received": len(vectors)},
            )

        logger.debug(
            f"{__name__}:embed_texts - Embedded {len(texts)} texts",
            extra={"model": self.model_name, "text_count": len(texts)},
        )
        return [list(vector) for vector in vectors]
