"""Base repository with common data access operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.projecthub.schemas.pagination import decode_cursor, encode_cursor

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit,
    rollback) belongs to the service layer.
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

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def paginate(
        self,
        query: Any,
        cursor: str | None,
        limit: int,
        order_field: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Execute keyset pagination on a query, newest first.

        Rows are ordered by (order_field, id) descending. The id breaks ties, so
        rows sharing a timestamp are neither skipped nor repeated across pages.

        Args:
            query: The base SQLAlchemy query to paginate
            cursor: Optional cursor from previous page
            limit: Maximum number of items to return
            order_field: Datetime column to order by, e.g. created_at

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        id_field = self.model.id  # type: ignore[attr-defined]

        if cursor:
            try:
                after_value, after_id = decode_cursor(cursor)
            except ValueError:
                # Invalid cursor - start from the beginning
                pass
            else:
                query = query.where(
                    or_(
                        order_field < after_value,
                        and_(order_field == after_value, id_field < after_id),
                    )
                )

        query = query.order_by(order_field.desc(), id_field.desc()).limit(limit + 1)

        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            last = items[-1]
            next_cursor = encode_cursor(getattr(last, order_field.key), last.id)  # type: ignore[attr-defined]

        return items, next_cursor, has_more
