from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.logger import logger
from src.models import User
from src.repositories.follow_repository import FollowRepository
from src.repositories.user_repository import UserRepository
from src.schemas.user import (
    UserActionResponseDTO,
    UserDataDTO,
    UserDTO,
    UserLogInDTO,
    UserSignUpDTO,
    UserSummaryDTO,
    UserUpdateDTO,
)
from src.utils.exceptions import ConflictError, NotFoundError
from src.utils.token.auth.token_util import generate_token


class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)
        self.follow_repository = FollowRepository(session)

    async def create_user(self, user_data: UserSignUpDTO) -> None:
        existing_user = await self.user_repository.find_by_username_or_email(
            user_data.username, user_data.email
        )
        if existing_user:
            field = "Username" if existing_user.username == user_data.username else "Email"
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=f"{field} already in use!"
            )

        new_user = User.create_user(user_data)
        created_user = await self.user_repository.insert_one(new_user)
        if not created_user:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error creating user!",
            )

    async def authenticate_user(self, user_data: UserLogInDTO) -> str:
        user = await self.user_repository.find_one_or_none(username=user_data.username)
        if not user or not user.check_password(user_data.password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials!"
            )

        return generate_token(user.id)

    async def get_user_profile(self, user_id: UUID, include_email: bool = False) -> UserDTO:
        """Get a user with the counts of their sent and received follows"""
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        return UserDTO(
            id=user.id,
            username=user.username,
            email=user.email if include_email else None,
            about_me=user.about_me,
            image_url=user.image_url,
            created_at=user.created_at,
            sent_follows_count=await self.follow_repository.count_sent(user.id),
            received_follows_count=await self.follow_repository.count_received(user.id),
        )

    async def update_profile(self, user_id: UUID, user_data: UserUpdateDTO) -> UserActionResponseDTO:
        """Change username, password, about me or email of a user"""
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        existing_user = await self.user_repository.find_by_username_or_email(
            user_data.username, user_data.email, exclude_id=user_id
        )
        if existing_user:
            if existing_user.username == user_data.username:
                raise ConflictError("Username already taken")
            raise ConflictError("Email already in use")

        user.username = user_data.username
        if user_data.password:
            user.set_password(user_data.password)
        if user_data.about_me:
            user.about_me = user_data.about_me
        if user_data.email:
            user.email = user_data.email

        updated_user = await self.user_repository.update_one(user)
        if not updated_user:
            raise ConflictError("Username or email already in use")

        logger.info(f"User {user_id} updated their profile")
        return UserActionResponseDTO(
            message="Updated profile successfully",
            data=UserDataDTO(user=UserSummaryDTO.model_validate(updated_user)),
        )

    async def delete_user(self, user_id: UUID) -> UserActionResponseDTO:
        """Delete a user together with every relationship they are part of"""
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        deleted = UserSummaryDTO.model_validate(user)
        # Removed in the same transaction as the user row
        removed = await self.follow_repository.delete_for_user(user_id)
        if not await self.user_repository.delete_one(user_id):
            raise NotFoundError("User not found")

        logger.info(f"Deleted user {user_id} and {removed} relationship(s)")
        return UserActionResponseDTO(
            message="User deleted successfully",
            data=UserDataDTO(user=deleted),
        )
