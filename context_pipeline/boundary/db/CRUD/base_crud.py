"""
Base CRUD operations for SQLAlchemy models.

Generic create/read/count operations inherited by model-specific CRUD
classes. Sessions are passed in; transaction boundaries belong to callers.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from context_pipeline.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated defaults
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_one_by(self, session: AsyncSession, **filters: Any) -> ModelT | None:
        """
        Retrieve a single record matching equality filters.

        Args:
            session: Async database session
            **filters: Column name to value

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).filter_by(**filters)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def count(self, session: AsyncSession) -> int:
        """Number of rows in the table."""
        result = await session.execute(select(func.count()).select_from(self.model))
        return int(result.scalar_one())
