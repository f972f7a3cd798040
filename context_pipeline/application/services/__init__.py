"""
Application services.

Exports: IngestionService, GroundingService
"""

from .grounding_service import GroundingService
from .ingestion_service import IngestionService

__all__ = ["GroundingService", "IngestionService"]
