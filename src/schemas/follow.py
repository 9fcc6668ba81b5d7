import uuid
from datetime import datetime

from pydantic import BaseModel, field_validator

from src.models.follow import FollowStatus


class SendFollowDTO(BaseModel):
    recipient_id: uuid.UUID


class UpdateFollowStatusDTO(BaseModel):
    status: FollowStatus

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        if v not in (FollowStatus.ACCEPTED.value, FollowStatus.REFUSED.value):
            raise ValueError("Status must be ACCEPTED or REFUSED")
        return v


class FollowUserDTO(BaseModel):
    id: uuid.UUID
    username: str
    about_me: str | None = None
    image_url: str | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class FollowDTO(BaseModel):
    id: uuid.UUID
    status: FollowStatus
    created_at: datetime
    accepted_at: datetime | None = None
    sender: FollowUserDTO
    recipient: FollowUserDTO

    class Config:
        from_attributes = True


class IncomingFollowDTO(BaseModel):
    id: uuid.UUID
    status: FollowStatus
    created_at: datetime
    sender: FollowUserDTO


class OutgoingFollowDTO(BaseModel):
    id: uuid.UUID
    status: FollowStatus
    created_at: datetime
    recipient: FollowUserDTO


class FriendDTO(BaseModel):
    """An accepted relationship seen from one side: ``user`` is the other party"""
    id: uuid.UUID
    created_at: datetime
    accepted_at: datetime | None = None
    user: FollowUserDTO


class FollowListDTO(BaseModel):
    accepted: list[FriendDTO]
    incoming: list[IncomingFollowDTO]
    pending: list[OutgoingFollowDTO]
    blocked: list[OutgoingFollowDTO]


class FollowDataDTO(BaseModel):
    follow: FollowDTO


class FollowActionResponseDTO(BaseModel):
    success: bool = True
    message: str
    data: FollowDataDTO


class FollowListResponseDTO(BaseModel):
    success: bool = True
    message: str
    data: FollowListDTO
