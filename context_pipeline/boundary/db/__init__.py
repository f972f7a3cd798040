"""
Database boundary.

Exports: Base, session factory helpers, create_tables
"""

from .base import Base
from .connection import create_tables, get_async_engine, get_async_session_factory

__all__ = ["Base", "create_tables", "get_async_engine", "get_async_session_factory"]
