import uuid
from typing import Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.dao.base_dao import BaseDAO
from src.logger import logger

T = TypeVar("T")


class SQLAlchemyDAO(BaseDAO, Generic[T]):
    def __init__(self, model: type[T], db: AsyncSession):
        self.model = model
        self.db = db

    async def find_by_id(self, _id: uuid.UUID, lock: bool = False) -> T | None:
        query = select(self.model).where(self.model.id == _id)
        if lock:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalars().first()

    async def find_one_or_none(self, **filter_by) -> T | None:
        query = select(self.model).filter_by(**filter_by)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def insert_one(self, obj: T) -> T | None:
        try:
            self.db.add(obj)
            await self.db.commit()
            await self.db.refresh(obj)
            logger.info(f"Inserted new {self.model.__name__} with ID: {obj.id}")
            return obj
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"IntegrityError while inserting {self.model.__name__}: {e}")
            return None

    async def update_one(self, obj: T) -> T | None:
        try:
            await self.db.commit()
            await self.db.refresh(obj)
            logger.info(f"Updated {self.model.__name__} with ID: {obj.id}")
            return obj
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"IntegrityError while updating {self.model.__name__}: {e}")
            return None

    async def delete_one(self, _id: uuid.UUID) -> bool:
        """Delete by primary key; False when no row matched."""
        result = await self.db.execute(delete(self.model).where(self.model.id == _id))
        await self.db.commit()
        if not result.rowcount:
            logger.warning(f"{self.model.__name__} with ID: {_id} not found")
            return False

        logger.info(f"Deleted {self.model.__name__} with ID: {_id}")
        return True
