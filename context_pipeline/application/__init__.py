"""Application layer: orchestration services."""
