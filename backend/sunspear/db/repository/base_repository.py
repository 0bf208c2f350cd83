"""
Base repository pattern implementation

Session-level CRUD helpers shared by the concrete repositories. Helpers take
the session explicitly; the public repository methods get theirs from
``@async_with_session``.
"""

from abc import ABC
from typing import Any, Generic, List, Optional, Sequence, TypeVar, Type

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Asynchronous base Repository class

    Generic parameters:
        ModelType: SQLAlchemy model type with an integer ``id`` primary key
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get_by_id(self, session: AsyncSession, record_id: int) -> Optional[ModelType]:
        return await session.get(self.model, record_id)

    async def get_all(self, session: AsyncSession, order_by: Sequence[str] = ()) -> List[ModelType]:
        """
        Get every record

        Args:
            session: Asynchronous database session
            order_by: Column names, ``"-name"`` for descending
        """
        stmt = select(self.model)
        for field in order_by:
            column = getattr(self.model, field.lstrip("-"))
            stmt = stmt.order_by(column.desc() if field.startswith("-") else column)

        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, session: AsyncSession, **values: Any) -> ModelType:
        """
        Insert a record

        Returns:
            The new instance, with store-assigned id and timestamps loaded
        """
        db_obj = self.model(**values)
        session.add(db_obj)
        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def update_fields(self, session: AsyncSession, record_id: int, **values: Any) -> int:
        """
        Update columns of one record without loading it

        Returns:
            Number of rows matched, 0 when the record is gone
        """
        stmt = (
            update(self.model)
            .where(self.model.id == record_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

    async def delete(self, session: AsyncSession, record_id: int) -> Optional[ModelType]:
        """
        Delete a record

        Returns:
            The deleted instance, or None when there was nothing to delete
        """
        obj = await self.get_by_id(session, record_id)
        if obj is not None:
            await session.delete(obj)
            await session.flush()
        return obj
