import uuid
from typing import List

from sqlalchemy import and_, delete, func, or_, select

from src.models.follow import Follow, FollowStatus
from src.repositories.base_repository import BaseRepository

COUNTED_STATUSES = (FollowStatus.PENDING, FollowStatus.ACCEPTED)


class FollowRepository(BaseRepository[Follow]):
    model = Follow

    async def find_between(
        self, user_a: uuid.UUID, user_b: uuid.UUID, lock: bool = False
    ) -> Follow | None:
        """Find the relationship of a pair of users, whichever direction it points"""
        query = select(Follow).where(
            or_(
                and_(Follow.sender_id == user_a, Follow.recipient_id == user_b),
                and_(Follow.sender_id == user_b, Follow.recipient_id == user_a),
            )
        )
        if lock:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalars().first()

    async def create_follow(
        self, sender_id: uuid.UUID, recipient_id: uuid.UUID, status: FollowStatus
    ) -> Follow | None:
        """Create a relationship; None if the pair already has one"""
        follow = Follow(
            sender_id=sender_id,
            recipient_id=recipient_id,
            pair_key=Follow.make_pair_key(sender_id, recipient_id),
            status=status,
        )
        return await self.dao.insert_one(follow)

    async def delete_follow(self, _id: uuid.UUID) -> bool:
        return await self.dao.delete_one(_id)

    async def delete_for_user(self, user_id: uuid.UUID) -> int:
        """Delete every relationship of a user without committing"""
        result = await self.db.execute(
            delete(Follow).where(or_(Follow.sender_id == user_id, Follow.recipient_id == user_id))
        )
        return result.rowcount

    async def list_for_user(self, user_id: uuid.UUID) -> List[Follow]:
        """Get every relationship the user is a party to"""
        query = (
            select(Follow)
            .where(or_(Follow.sender_id == user_id, Follow.recipient_id == user_id))
            .order_by(Follow.created_at.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count_sent(self, user_id: uuid.UUID) -> int:
        query = select(func.count(Follow.id)).where(
            Follow.sender_id == user_id, Follow.status.in_(COUNTED_STATUSES)
        )
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def count_received(self, user_id: uuid.UUID) -> int:
        query = select(func.count(Follow.id)).where(
            Follow.recipient_id == user_id, Follow.status.in_(COUNTED_STATUSES)
        )
        result = await self.db.execute(query)
        return result.scalar() or 0
