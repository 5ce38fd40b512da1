"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select


ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    async def get_many(self, ids: list[UUID]) -> list[ModelType]:
        """Get all records whose primary key is in `ids` (missing ids are skipped)."""
        if not ids:
            return []
        result = await self.session.execute(
            select(self.model).where(self.model.id.in_(ids))  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        """Mark entity for deletion (no commit)."""
        await self.session.delete(entity)

    async def paginate(
        self,
        query: Any,  # SelectOfScalar or Select - SQLModel/SQLAlchemy query
        page: int,
        page_size: int,
        order_by: Any,
    ) -> tuple[list[ModelType], int]:
        """Execute offset pagination on a query.

        Args:
            query: The base query to paginate (without ORDER BY)
            page: 1-based page number
            page_size: Maximum number of items to return
            order_by: Column expression or list of expressions to sort by

        Returns:
            Tuple of (items, total) where total counts every matching row.
        """
        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.session.execute(count_query)).scalar_one()

        if not isinstance(order_by, (list, tuple)):
            order_by = [order_by]
        query = query.order_by(*order_by).offset((page - 1) * page_size).limit(page_size)

        result = await self.session.execute(query)
        return list(result.scalars().all()), total
