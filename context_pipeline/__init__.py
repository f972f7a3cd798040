"""
Retrieval-augmented context pipeline.

Chunks organizational documents, embeds them with a content-addressed cache
and retrieves bounded, deduplicated context for text generation.
"""

__version__ = "0.1.0"
