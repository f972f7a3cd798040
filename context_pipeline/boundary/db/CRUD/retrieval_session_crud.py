"""
Retrieval session CRUD operations.

Dependencies: sqlalchemy, context_pipeline.boundary.db.models
System role: Retrieval analytics persistence
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from context_pipeline.boundary.db.CRUD.base_crud import BaseCRUD
from context_pipeline.boundary.db.models import RetrievalSessionModel


class RetrievalSessionCRUD(BaseCRUD[RetrievalSessionModel]):
    """CRUD operations for retrieval analytics rows."""

    def __init__(self) -> None:
        super().__init__(RetrievalSessionModel)

    async def get_recent_for_organization(
        self,
        session: AsyncSession,
        organization_id: str,
        limit: int = 50,
    ) -> Sequence[RetrievalSessionModel]:
        """
        Most recent retrieval sessions of an organization, newest first.

        Args:
            session: Async database session
            organization_id: Organization scope
            limit: Maximum rows to return

        Returns:
            Sequence of RetrievalSessionModel rows
        """
        stmt = (
            select(RetrievalSessionModel)
            .where(RetrievalSessionModel.organization_id == organization_id)
            .order_by(RetrievalSessionModel.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


retrieval_session_crud = RetrievalSessionCRUD()
