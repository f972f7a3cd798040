"""
Tests for the LangChain embedding provider adapter and provider factory.
"""

import asyncio

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding, Embeddings

from context_pipeline.boundary.embeddings.factory import create_embeddings
from context_pipeline.boundary.embeddings.provider import LangChainEmbeddingProvider
from context_pipeline.configs.embedding import EmbeddingSettings
from context_pipeline.core.exceptions import EmbeddingError, ValidationError


class StaticEmbeddings(Embeddings):
    """Embeddings stub with configurable async behaviour."""

    def __init__(self, delay: float = 0.0, error: Exception | None = None, drop_last: bool = False) -> None:
        self.delay = delay
        self.error = error
        self.drop_last = drop_last

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [[0.5] * 4 for _ in texts]

    def embed_query(self, text: str) -> list[float]:
        return [0.5] * 4

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]:
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        vectors = self.embed_documents(texts)
        return vectors[:-1] if self.drop_last else vectors


class TestLangChainEmbeddingProvider:
    """Test suite for LangChainEmbeddingProvider."""

    @pytest.mark.asyncio
    async def test_embed_texts_should_return_one_vector_per_text(self) -> None:
        """Should return deterministic vectors in input order."""
        provider = LangChainEmbeddingProvider(DeterministicFakeEmbedding(size=8), model_name="fake")

        first = await provider.embed_texts(["alpha", "beta"])
        second = await provider.embed_texts(["alpha"])

        assert len(first) == 2
        assert all(len(vector) == 8 for vector in first)
        assert second[0] == first[0]

    @pytest.mark.asyncio
    async def test_empty_input_should_skip_provider(self) -> None:
        """Should return [] without calling the client."""
        provider = LangChainEmbeddingProvider(StaticEmbeddings(error=RuntimeError("boom")), model_name="stub")

        assert await provider.embed_texts([]) == []

    @pytest.mark.asyncio
    async def test_slow_provider_should_time_out(self) -> None:
        """Should raise EmbeddingError when the client exceeds the timeout."""
        provider = LangChainEmbeddingProvider(StaticEmbeddings(delay=1.0), model_name="stub", timeout_seconds=0.05)

        with pytest.raises(EmbeddingError, match="timed out"):
            await provider.embed_texts(["text"])

    @pytest.mark.asyncio
    async def test_client_error_should_become_embedding_error(self) -> None:
        """Should wrap client exceptions in EmbeddingError."""
        provider = LangChainEmbeddingProvider(StaticEmbeddings(error=RuntimeError("quota exceeded")), model_name="stub")

        with pytest.raises(EmbeddingError) as exc_info:
            await provider.embed_texts(["text"])

        assert exc_info.value.details["model"] == "stub"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_vector_count_mismatch_should_raise(self) -> None:
        """Should reject responses with fewer vectors than texts."""
        provider = LangChainEmbeddingProvider(StaticEmbeddings(drop_last=True), model_name="stub")

        with pytest.raises(EmbeddingError):
            await provider.embed_texts(["one", "two"])


class TestEmbeddingFactory:
    """Test suite for create_embeddings()."""

    def test_unknown_provider_should_raise(self) -> None:
        """Should reject providers other than google and bedrock."""
        with pytest.raises(ValidationError):
            create_embeddings(EmbeddingSettings(provider="openai"))
