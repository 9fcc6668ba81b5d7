import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from src.dao.sqlalchemy_dao import SQLAlchemyDAO

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Binds a model to its DAO. Subclasses add the queries of their table
    and run them on ``self.db``, the session the DAO writes through."""

    model: type[T]
    dao_class: type[SQLAlchemyDAO] = SQLAlchemyDAO

    def __init__(self, db: AsyncSession):
        self.db = db
        self.dao = self.dao_class(self.model, db)

    async def find_by_id(self, _id: uuid.UUID, lock: bool = False) -> T | None:
        return await self.dao.find_by_id(_id, lock=lock)

    async def find_one_or_none(self, **filter_by) -> T | None:
        return await self.dao.find_one_or_none(**filter_by)

    async def exists(self, _id: uuid.UUID) -> bool:
        return await self.dao.find_by_id(_id) is not None

    async def insert_one(self, obj: Any) -> T | None:
        return await self.dao.insert_one(obj)

    async def update_one(self, obj: Any) -> T | None:
        return await self.dao.update_one(obj)

    async def delete_one(self, _id: uuid.UUID) -> bool:
        return await self.dao.delete_one(_id)
