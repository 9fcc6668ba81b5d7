from fastapi import APIRouter

from src.controllers.auth_controller import router as auth_router
from src.controllers.user_controller import router as user_router
from src.controllers.follow_controller import router as follow_router


router = APIRouter(
    responses={
            401: {"description": "Unauthorized"},
            500: {"description": "Internal server error"},
    }
)

router.include_router(auth_router, prefix="/auth", tags=["auth"])
router.include_router(user_router, prefix="/users", tags=["users"])
router.include_router(follow_router, prefix="/follows", tags=["follows"])
