import uuid

from sqlalchemy import or_, select

from src.models.user import User
from src.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def find_by_username_or_email(
        self, username: str | None, email: str | None, exclude_id: uuid.UUID | None = None
    ) -> User | None:
        """Find a user clashing with either the username or the email"""
        conditions = []
        if username:
            conditions.append(User.username == username)
        if email:
            conditions.append(User.email == email)
        if not conditions:
            return None

        query = select(User).where(or_(*conditions))
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await self.db.execute(query)
        return result.scalars().first()
