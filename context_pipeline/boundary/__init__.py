"""Boundary adapters: embedding providers, caches, database and vector stores."""
