import uuid
from abc import ABC, abstractmethod
from typing import Any


class BaseDAO(ABC):
    @abstractmethod
    async def find_by_id(self, _id: uuid.UUID, lock: bool = False) -> Any | None: ...

    @abstractmethod
    async def find_one_or_none(self, **filter_by) -> Any | None: ...

    @abstractmethod
    async def insert_one(self, obj: Any) -> Any | None: ...

    @abstractmethod
    async def update_one(self, obj: Any) -> Any | None: ...

    @abstractmethod
    async def delete_one(self, _id: uuid.UUID) -> bool: ...
