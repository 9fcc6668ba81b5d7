"""Decision logic for follow relationships.

Every function here is pure: it looks at the acting user and the current
relationship (a ``FollowSnapshot``, or ``None`` when the pair has none) and
either raises a classified ``AppError`` or returns the ``Transition`` the
caller has to persist. Nothing in this module touches the database.
"""
import enum
import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import status as http_status

from src.logger import logger
from src.models.follow import FollowStatus
from src.utils.exceptions import (
    ConflictError,
    ForbiddenError,
    InternalInconsistencyError,
    InvalidRequestError,
    NotFoundError,
)

FOLLOWED_MESSAGE = "Followed user successfully"
AUTO_ACCEPTED_MESSAGE = "Accepted friend request successfully"
STATUS_UPDATED_MESSAGE = "Follow status updated successfully"
BLOCKED_MESSAGE = "Blocked user successfully"

DELETE_MESSAGES = {
    FollowStatus.BLOCKED: "Unblocked user successfully",
    FollowStatus.PENDING: "Cancelled request successfully",
    FollowStatus.ACCEPTED: "Unfollowed user successfully",
    FollowStatus.REFUSED: "Unfollowed user successfully",
}


class Operation(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class FollowSnapshot:
    id: uuid.UUID
    sender_id: uuid.UUID
    recipient_id: uuid.UUID
    status: FollowStatus

    @classmethod
    def of(cls, follow) -> Optional["FollowSnapshot"]:
        if follow is None:
            return None
        return cls(
            id=follow.id,
            sender_id=follow.sender_id,
            recipient_id=follow.recipient_id,
            status=follow.status,
        )


@dataclass(frozen=True)
class Transition:
    operation: Operation
    sender_id: uuid.UUID
    recipient_id: uuid.UUID
    status: FollowStatus
    http_status: int
    message: str


def _status_name(status) -> str:
    return getattr(status, "value", str(status))


def _inconsistent(actor_id: uuid.UUID, current: FollowSnapshot, action: str) -> InternalInconsistencyError:
    logger.error(
        f"Unexpected follow state: actor={actor_id} follow={current.id} "
        f"sender={current.sender_id} recipient={current.recipient_id} "
        f"status={_status_name(current.status)} action={action}"
    )
    return InternalInconsistencyError(f"Unexpected follow state in {_status_name(current.status)} case")


def ensure_not_self(actor_id: uuid.UUID, target_id: uuid.UUID, verb: str) -> None:
    if actor_id == target_id:
        raise InvalidRequestError(f"Cannot {verb} yourself!")


def decide_send(
    actor_id: uuid.UUID, target_id: uuid.UUID, current: FollowSnapshot | None
) -> Transition:
    """Decide what a follow request from ``actor_id`` to ``target_id`` does"""
    ensure_not_self(actor_id, target_id, "follow")

    if current is None:
        return Transition(
            Operation.CREATE, actor_id, target_id, FollowStatus.PENDING,
            http_status.HTTP_201_CREATED, FOLLOWED_MESSAGE,
        )

    target_is_sender = current.sender_id == target_id and current.recipient_id == actor_id
    actor_is_sender = current.sender_id == actor_id and current.recipient_id == target_id

    if current.status == FollowStatus.BLOCKED:
        if target_is_sender:
            raise ForbiddenError("You have been blocked by this user")
        if actor_is_sender:
            raise ForbiddenError("You have blocked this user")

    elif current.status == FollowStatus.PENDING:
        # Two opposing requests collapse into a friendship
        if target_is_sender:
            return Transition(
                Operation.UPDATE, current.sender_id, current.recipient_id, FollowStatus.ACCEPTED,
                http_status.HTTP_200_OK, AUTO_ACCEPTED_MESSAGE,
            )
        if actor_is_sender:
            raise ConflictError("You already sent a follow request to this user")

    elif current.status == FollowStatus.ACCEPTED:
        if target_is_sender or actor_is_sender:
            raise ConflictError("You are already following this user")

    elif current.status == FollowStatus.REFUSED:
        if actor_is_sender or target_is_sender:
            return Transition(
                Operation.UPDATE, actor_id, target_id, FollowStatus.PENDING,
                http_status.HTTP_200_OK, FOLLOWED_MESSAGE,
            )

    raise _inconsistent(actor_id, current, "send")


def decide_respond(
    actor_id: uuid.UUID, current: FollowSnapshot | None, new_status: FollowStatus
) -> Transition:
    """Decide what the recipient accepting or refusing a request does"""
    if current is None:
        raise NotFoundError("Follow request not found")

    if actor_id != current.recipient_id:
        raise ForbiddenError("Only the recipient can accept or refuse the follow request")

    if current.status == new_status:
        raise InvalidRequestError(f"Follow status is already {current.status.value}")

    if current.status == FollowStatus.BLOCKED:
        raise InvalidRequestError("Cannot update blocked relationship")

    # Request validation only lets ACCEPTED and REFUSED through
    if new_status not in (FollowStatus.ACCEPTED, FollowStatus.REFUSED):
        raise InvalidRequestError("Cannot go back to pending status")

    return Transition(
        Operation.UPDATE, current.sender_id, current.recipient_id, new_status,
        http_status.HTTP_200_OK, STATUS_UPDATED_MESSAGE,
    )


def decide_block(
    actor_id: uuid.UUID, target_id: uuid.UUID, current: FollowSnapshot | None
) -> Transition:
    """Decide what ``actor_id`` blocking ``target_id`` does.

    Blocking overrides any other state, and the blocker always ends up as
    the sender of the record.
    """
    ensure_not_self(actor_id, target_id, "block")

    if current is None:
        return Transition(
            Operation.CREATE, actor_id, target_id, FollowStatus.BLOCKED,
            http_status.HTTP_200_OK, BLOCKED_MESSAGE,
        )

    if current.status == FollowStatus.BLOCKED:
        raise InvalidRequestError("User is already blocked")

    return Transition(
        Operation.UPDATE, actor_id, target_id, FollowStatus.BLOCKED,
        http_status.HTTP_200_OK, BLOCKED_MESSAGE,
    )


def deletion_message(status: FollowStatus) -> str:
    return DELETE_MESSAGES[status]


def decide_delete(actor_id: uuid.UUID, current: FollowSnapshot | None) -> Transition:
    """Decide whether ``actor_id`` may unfollow, cancel or unblock"""
    if current is None:
        raise NotFoundError("You are currently not following or blocking this user")

    if actor_id not in (current.sender_id, current.recipient_id):
        raise ForbiddenError("You are not authorized to delete this relationship")

    if current.status not in DELETE_MESSAGES:
        raise _inconsistent(actor_id, current, "delete")

    return Transition(
        Operation.DELETE, current.sender_id, current.recipient_id, current.status,
        http_status.HTTP_200_OK, deletion_message(current.status),
    )
