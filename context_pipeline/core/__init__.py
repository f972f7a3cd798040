"""Core domain logic: chunking, embedding, retrieval and context assembly."""
