import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    UUID,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from . import Base

if TYPE_CHECKING:
    from .user import User


class FollowStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REFUSED = "REFUSED"
    BLOCKED = "BLOCKED"


class Follow(Base):
    __tablename__ = "follows"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, nullable=False
    )

    # Initiator of the current state, not necessarily the original follower
    sender_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    recipient_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Same value for both orderings of the pair
    pair_key: Mapped[str] = mapped_column(String(73), nullable=False)

    status: Mapped[FollowStatus] = mapped_column(
        Enum(FollowStatus, name="follow_status"),
        default=FollowStatus.PENDING,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=func.now(), nullable=False
    )
    accepted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Relationships
    sender: Mapped["User"] = relationship("User", foreign_keys=[sender_id], lazy="selectin")
    recipient: Mapped["User"] = relationship("User", foreign_keys=[recipient_id], lazy="selectin")

    __table_args__ = (
        UniqueConstraint("pair_key", name="unique_follow_pair"),
        CheckConstraint("sender_id != recipient_id", name="ck_follows_not_self"),
    )

    @staticmethod
    def make_pair_key(user_a: uuid.UUID, user_b: uuid.UUID) -> str:
        return ":".join(sorted((str(user_a), str(user_b))))

    def __repr__(self):
        return (
            f"<Follow(id={self.id}, sender_id={self.sender_id}, "
            f"recipient_id={self.recipient_id}, status={self.status})>"
        )
