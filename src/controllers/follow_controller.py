import uuid
import logging

from fastapi import APIRouter, status, HTTPException, Response

from src.dependencies import DBSessionDep, CurrentUserDep
from src.schemas.follow import (
    FollowActionResponseDTO,
    FollowListResponseDTO,
    SendFollowDTO,
    UpdateFollowStatusDTO,
)
from src.services.follow.follow_service import FollowService
from src.utils.exceptions import AppError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", status_code=status.HTTP_200_OK, response_model=FollowListResponseDTO)
async def get_follows(db: DBSessionDep, current_user: CurrentUserDep):
    """Get accepted, incoming, pending and blocked relationships"""
    try:
        follow_service = FollowService(db)
        return await follow_service.get_follows(current_user.id)
    except (HTTPException, AppError):
        raise
    except Exception as e:
        logger.error(f"Error getting follows: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error getting follows: {e}"
        )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=FollowActionResponseDTO,
    responses={200: {"description": "Existing relationship updated"}},
)
async def send_follow(
    follow_data: SendFollowDTO,
    response: Response,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    """Send a follow request"""
    try:
        follow_service = FollowService(db)
        status_code, result = await follow_service.send_follow(
            current_user.id, follow_data.recipient_id
        )
        response.status_code = status_code
        return result
    except (HTTPException, AppError):
        raise
    except Exception as e:
        logger.error(f"Error sending follow request: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error sending follow request: {e}"
        )


@router.patch("/{follow_id}", status_code=status.HTTP_200_OK, response_model=FollowActionResponseDTO)
async def update_follow_status(
    follow_id: uuid.UUID,
    status_data: UpdateFollowStatusDTO,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    """Accept or refuse a follow request (recipient only)"""
    try:
        follow_service = FollowService(db)
        return await follow_service.update_follow_status(
            current_user.id, follow_id, status_data.status
        )
    except (HTTPException, AppError):
        raise
    except Exception as e:
        logger.error(f"Error updating follow status: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error updating follow status: {e}"
        )


@router.post("/{user_id}/block", status_code=status.HTTP_200_OK, response_model=FollowActionResponseDTO)
async def block_user(
    user_id: uuid.UUID,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    """Block a user"""
    try:
        follow_service = FollowService(db)
        return await follow_service.block_user(current_user.id, user_id)
    except (HTTPException, AppError):
        raise
    except Exception as e:
        logger.error(f"Error blocking user: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error blocking user: {e}"
        )


@router.delete("/{follow_id}", status_code=status.HTTP_200_OK, response_model=FollowActionResponseDTO)
async def delete_follow(
    follow_id: uuid.UUID,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    """Cancel a follow request, unfollow or unblock"""
    try:
        follow_service = FollowService(db)
        return await follow_service.delete_follow(current_user.id, follow_id)
    except (HTTPException, AppError):
        raise
    except Exception as e:
        logger.error(f"Error deleting follow: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error deleting follow: {e}"
        )
