import uuid
from datetime import UTC, datetime, timedelta

import jwt
from fastapi import HTTPException, status

from src.config import settings


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def generate_token(user_id: uuid.UUID) -> str:
    """Issue an access token carrying the user id"""
    now = datetime.now(UTC)
    claims = {
        "user_id": str(user_id),
        "iat": now,
        "exp": now + timedelta(seconds=settings.JWT_EXPIRATION),
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> uuid.UUID:
    """Decode an access token and return the user id it was issued for"""
    try:
        claims = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "user_id"]},
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token expired!")
    except jwt.InvalidTokenError:
        raise _unauthorized("Invalid token!")

    try:
        return uuid.UUID(claims["user_id"])
    except (TypeError, ValueError):
        raise _unauthorized("Invalid user ID format")
