from datetime import datetime

import bcrypt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.follow import Follow, FollowStatus
from src.models.user import User
from src.utils.token.auth.token_util import generate_token

TEST_PASSWORD = "password123"
TEST_PASSWORD_HASH = bcrypt.hashpw(TEST_PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode()


async def create_user(db_session: AsyncSession, username: str) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        _hashed_password=TEST_PASSWORD_HASH,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def create_follow(
    db_session: AsyncSession,
    sender: User,
    recipient: User,
    status: FollowStatus = FollowStatus.PENDING,
) -> Follow:
    follow = Follow(
        sender=sender,
        recipient=recipient,
        pair_key=Follow.make_pair_key(sender.id, recipient.id),
        status=status,
        accepted_at=datetime.now() if status == FollowStatus.ACCEPTED else None,
    )
    db_session.add(follow)
    await db_session.commit()
    await db_session.refresh(follow)
    return follow


async def follows_between(db_session: AsyncSession, user_a: User, user_b: User) -> list[Follow]:
    """All rows of the pair, in either direction"""
    result = await db_session.execute(
        select(Follow)
        .where(Follow.pair_key == Follow.make_pair_key(user_a.id, user_b.id))
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


def make_auth_headers(user: User) -> dict:
    access_token = generate_token(user.id)
    return {"Authorization": f"Bearer {access_token}"}
