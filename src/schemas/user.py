import re
import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9 ]{1,20}$")
PASSWORD_PATTERN = re.compile(r"^[a-zA-Z0-9!@#$%^&*]{6,32}$")


def _check_username(v: str) -> str:
    v = v.strip()
    if not USERNAME_PATTERN.match(v):
        raise ValueError("Username must only have characters numbers and spaces")
    return v


def _check_password(v: str) -> str:
    v = v.strip()
    if not PASSWORD_PATTERN.match(v):
        raise ValueError(
            "Password must be 6 to 32 letters, numbers, or special characters (!@#$%^&*)"
        )
    return v


class UserSignUpDTO(BaseModel):
    username: str = Field(..., min_length=1, max_length=20)
    password: str
    email: EmailStr | None = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _check_username(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password(v)


class UserLogInDTO(BaseModel):
    username: str
    password: str


class UserUpdateDTO(BaseModel):
    """Profile changes; a missing optional field keeps its current value"""
    username: str = Field(..., min_length=1, max_length=20)
    password: str | None = None
    about_me: str | None = None
    email: EmailStr | None = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _check_username(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return _check_password(v) if v is not None else v

    @field_validator("about_me")
    @classmethod
    def validate_about_me(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if len(v) > 200:
            raise ValueError("About me has a maximum length of 200 characters")
        return v


class UserDTO(BaseModel):
    id: uuid.UUID
    username: str
    email: str | None = None
    about_me: str | None = None
    image_url: str | None = None
    created_at: datetime
    sent_follows_count: int = 0
    received_follows_count: int = 0


class UserSummaryDTO(BaseModel):
    username: str
    about_me: str | None = None
    email: str | None = None

    class Config:
        from_attributes = True


class UserDataDTO(BaseModel):
    user: UserSummaryDTO


class UserActionResponseDTO(BaseModel):
    success: bool = True
    message: str
    data: UserDataDTO
