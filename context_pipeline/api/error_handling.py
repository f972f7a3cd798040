"""
Pipeline error handling for API endpoints.

Maps domain exceptions to HTTP errors in one place.

Dependencies: fastapi, context_pipeline.core.exceptions
System role: Uniform HTTP error responses
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from context_pipeline.core.exceptions import (
    ContextPipelineException,
    DocumentProcessingError,
    EmbeddingError,
    ValidationError,
    VectorStoreError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_pipeline_errors(func: F) -> F:
    """
    Decorator turning pipeline exceptions into HTTPExceptions.

    ValidationError maps to 400, provider and vector store failures to 502,
    other processing errors to 422 and anything else to 500.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except ValidationError as e:
            logger.warning("Invalid pipeline request", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e

        except (EmbeddingError, VectorStoreError) as e:
            logger.error("Upstream dependency failed", extra={"error": str(e), "error_type": type(e).__name__})
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message) from e

        except DocumentProcessingError as e:
            logger.error("Document processing failed", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message) from e

        except ContextPipelineException as e:
            logger.exception("Pipeline operation failed", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message) from e

        except Exception as e:
            logger.exception("Unexpected error in pipeline endpoint", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An unexpected error occurred",
            ) from e

    return wrapper  # type: ignore[return-value]
