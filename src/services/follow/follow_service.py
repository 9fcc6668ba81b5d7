import uuid

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from src.logger import logger
from src.models.follow import Follow, FollowStatus
from src.repositories.follow_repository import FollowRepository
from src.repositories.user_repository import UserRepository
from src.schemas.follow import (
    FollowActionResponseDTO,
    FollowDataDTO,
    FollowDTO,
    FollowListDTO,
    FollowListResponseDTO,
    FollowUserDTO,
    FriendDTO,
    IncomingFollowDTO,
    OutgoingFollowDTO,
)
from src.services.follow.follow_transitions import (
    FollowSnapshot,
    Operation,
    Transition,
    decide_block,
    decide_delete,
    decide_respond,
    decide_send,
    ensure_not_self,
)
from src.utils.exceptions import ConflictError, InternalInconsistencyError, NotFoundError


class FollowService:
    """Runs follow actions against the store.

    Each action reads the relationship row with a row lock and writes it
    back in the same transaction of the request session.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.follow_repository = FollowRepository(session)
        self.user_repository = UserRepository(session)

    async def _ensure_user_exists(self, user_id: uuid.UUID, message: str) -> None:
        if not await self.user_repository.exists(user_id):
            raise NotFoundError(message)

    async def _apply(self, transition: Transition, follow: Follow | None) -> Follow:
        if transition.operation == Operation.CREATE:
            created = await self.follow_repository.create_follow(
                transition.sender_id, transition.recipient_id, transition.status
            )
            if not created:
                raise ConflictError("A relationship with this user already exists")
            return created

        follow.sender_id = transition.sender_id
        follow.recipient_id = transition.recipient_id
        follow.status = transition.status
        if transition.status == FollowStatus.ACCEPTED:
            follow.accepted_at = func.now()
        else:
            follow.accepted_at = None

        updated = await self.follow_repository.update_one(follow)
        if not updated:
            raise InternalInconsistencyError("Failed to update relationship")
        # Sender and recipient may have swapped
        await self.session.refresh(updated, ["sender", "recipient"])
        return updated

    @staticmethod
    def _response(transition: Transition, follow: Follow) -> FollowActionResponseDTO:
        return FollowActionResponseDTO(
            message=transition.message,
            data=FollowDataDTO(follow=FollowDTO.model_validate(follow)),
        )

    async def send_follow(
        self, sender_id: uuid.UUID, recipient_id: uuid.UUID
    ) -> tuple[int, FollowActionResponseDTO]:
        """Send a follow request, returns the HTTP status with the response"""
        ensure_not_self(sender_id, recipient_id, "follow")
        await self._ensure_user_exists(recipient_id, "Recipient user not found")

        follow = await self.follow_repository.find_between(sender_id, recipient_id, lock=True)
        transition = decide_send(sender_id, recipient_id, FollowSnapshot.of(follow))

        follow = await self._apply(transition, follow)
        logger.info(f"User {sender_id} follow -> {recipient_id}: {follow.status.value}")
        return transition.http_status, self._response(transition, follow)

    async def update_follow_status(
        self, user_id: uuid.UUID, follow_id: uuid.UUID, new_status: FollowStatus
    ) -> FollowActionResponseDTO:
        """Accept or refuse a follow request as its recipient"""
        follow = await self.follow_repository.find_by_id(follow_id, lock=True)
        transition = decide_respond(user_id, FollowSnapshot.of(follow), new_status)

        follow = await self._apply(transition, follow)
        logger.info(f"User {user_id} set follow {follow_id} to {new_status.value}")
        return self._response(transition, follow)

    async def block_user(
        self, blocker_id: uuid.UUID, blocked_id: uuid.UUID
    ) -> FollowActionResponseDTO:
        """Block a user, overriding whatever relationship the pair had"""
        ensure_not_self(blocker_id, blocked_id, "block")
        await self._ensure_user_exists(blocked_id, "User not found")

        follow = await self.follow_repository.find_between(blocker_id, blocked_id, lock=True)
        transition = decide_block(blocker_id, blocked_id, FollowSnapshot.of(follow))

        follow = await self._apply(transition, follow)
        logger.info(f"User {blocker_id} blocked {blocked_id}")
        return self._response(transition, follow)

    async def delete_follow(
        self, user_id: uuid.UUID, follow_id: uuid.UUID
    ) -> FollowActionResponseDTO:
        """Unfollow, cancel a request or unblock, depending on the current status"""
        follow = await self.follow_repository.find_by_id(follow_id, lock=True)
        transition = decide_delete(user_id, FollowSnapshot.of(follow))

        # Serialised before the row goes away
        deleted = FollowDTO.model_validate(follow)
        if not await self.follow_repository.delete_follow(follow_id):
            # Removed by a concurrent request between lookup and delete
            raise NotFoundError("Relationship was already deleted")

        logger.info(f"User {user_id} deleted follow {follow_id} ({transition.status.value})")
        return FollowActionResponseDTO(
            message=transition.message,
            data=FollowDataDTO(follow=deleted),
        )

    async def get_follows(self, user_id: uuid.UUID) -> FollowListResponseDTO:
        """Group the user's relationships into accepted, incoming, pending and blocked"""
        follows = await self.follow_repository.list_for_user(user_id)

        accepted, incoming, pending, blocked = [], [], [], []
        for follow in follows:
            is_sender = follow.sender_id == user_id

            if follow.status == FollowStatus.ACCEPTED:
                other = follow.recipient if is_sender else follow.sender
                accepted.append(FriendDTO(
                    id=follow.id,
                    created_at=follow.created_at,
                    accepted_at=follow.accepted_at,
                    user=FollowUserDTO.model_validate(other),
                ))
            elif follow.status == FollowStatus.PENDING and not is_sender:
                incoming.append(IncomingFollowDTO(
                    id=follow.id,
                    status=follow.status,
                    created_at=follow.created_at,
                    sender=FollowUserDTO.model_validate(follow.sender),
                ))
            elif follow.status in (FollowStatus.PENDING, FollowStatus.BLOCKED) and is_sender:
                target = pending if follow.status == FollowStatus.PENDING else blocked
                target.append(OutgoingFollowDTO(
                    id=follow.id,
                    status=follow.status,
                    created_at=follow.created_at,
                    recipient=FollowUserDTO.model_validate(follow.recipient),
                ))

        return FollowListResponseDTO(
            message="Follows fetched successfully",
            data=FollowListDTO(
                accepted=accepted,
                incoming=incoming,
                pending=pending,
                blocked=blocked,
            ),
        )
