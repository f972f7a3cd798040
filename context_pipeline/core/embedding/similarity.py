"""
Vector similarity and validation helpers.

Dependencies: math (stdlib)
System role: Shared vector math for the embedding service and vector stores
"""

import math
from collections.abc import Sequence


def calculate_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two vectors.

    Args:
        a: First vector
        b: Second vector

    Returns:
        float: Cosine similarity, 0.0 when either vector has zero norm

    Raises:
        ValueError: When the vectors differ in length
    """
    if len(a) != len(b):
        raise ValueError(f"Embeddings must have the same dimensions ({len(a)} != {len(b)})")

    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


def is_valid_embedding(vector: object, dimensions: int) -> bool:
    """True if vector has exactly `dimensions` finite real elements."""
    if not isinstance(vector, (list, tuple)) or len(vector) != dimensions:
        return False
    return all(
        isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
        for value in vector
    )
