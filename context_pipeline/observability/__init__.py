"""
Observability: logging configuration, structured log helpers and
retrieval analytics sinks.
"""

from .analytics import LoggingRetrievalAnalytics, RetrievalAnalytics, SqlRetrievalAnalytics
from .log_utils import log_exception_with_context, log_with_context, safe_log_value
from .logger import configure_logging

__all__ = [
    "LoggingRetrievalAnalytics",
    "RetrievalAnalytics",
    "SqlRetrievalAnalytics",
    "configure_logging",
    "log_exception_with_context",
    "log_with_context",
    "safe_log_value",
]
