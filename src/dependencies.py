import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db_session
from src.models import User
from src.repositories.user_repository import UserRepository
from src.utils.token.auth.token_util import verify_token

logger = logging.getLogger(__name__)

DBSessionDep = Annotated[AsyncSession, Depends(get_db_session)]

security = HTTPBearer()


async def get_current_user(
    session: DBSessionDep,
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> User:
    """Resolve the acting user from the bearer JWT"""
    try:
        user_id = verify_token(credentials.credentials)  # raises 401 on a bad token

        user_repository = UserRepository(session)
        user = await user_repository.find_by_id(user_id)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User not found"
            )

        return user
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Authentication error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication failed: {str(e)}"
        )


CurrentUserDep = Annotated[User, Depends(get_current_user)]
