import uuid
import logging

from fastapi import APIRouter, status, HTTPException

from src.dependencies import DBSessionDep, CurrentUserDep
from src.schemas.user import UserActionResponseDTO, UserDTO, UserUpdateDTO
from src.services.user.user_service import UserService
from src.utils.exceptions import AppError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get('/me', status_code=200, response_model=UserDTO)
async def get_current_user_profile(session: DBSessionDep, current_user: CurrentUserDep):
    try:
        user_service = UserService(session)
        return await user_service.get_user_profile(current_user.id, include_email=True)
    except (HTTPException, AppError):
        raise
    except Exception as e:
        logger.error(f"Error getting user profile: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error getting user profile: {e}"
        )


@router.put('/me', status_code=200, response_model=UserActionResponseDTO)
async def update_current_user_profile(
    user_data: UserUpdateDTO,
    session: DBSessionDep,
    current_user: CurrentUserDep
):
    try:
        user_service = UserService(session)
        return await user_service.update_profile(current_user.id, user_data)
    except (HTTPException, AppError):
        raise
    except Exception as e:
        logger.error(f"Error updating user profile: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error updating user profile: {e}"
        )


@router.delete('/me', status_code=200, response_model=UserActionResponseDTO)
async def delete_current_user(session: DBSessionDep, current_user: CurrentUserDep):
    try:
        user_service = UserService(session)
        return await user_service.delete_user(current_user.id)
    except (HTTPException, AppError):
        raise
    except Exception as e:
        logger.error(f"Error deleting user: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error deleting user: {e}"
        )


@router.get('/{user_id}', status_code=200, response_model=UserDTO)
async def get_user_by_id(user_id: uuid.UUID, session: DBSessionDep, current_user: CurrentUserDep):
    try:
        user_service = UserService(session)
        return await user_service.get_user_profile(user_id)
    except (HTTPException, AppError):
        raise
    except Exception as e:
        logger.error(f"Error getting user by ID: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error getting user by ID: {e}"
        )
