import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.follow import Follow, FollowStatus
from src.models.user import User
from tests.helpers import TEST_PASSWORD, create_follow, create_user, follows_between


class TestUserController:
    """Test cases for user controller endpoints."""

    @pytest.mark.asyncio
    async def test_get_current_user(self, async_client: AsyncClient, test_user: User, auth_headers: dict):
        """Test getting current user profile."""
        response = await async_client.get("/api/v1/users/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(test_user.id)
        assert data["username"] == test_user.username
        assert data["email"] == test_user.email
        assert data["sent_follows_count"] == 0
        assert data["received_follows_count"] == 0
        assert "password" not in data
        assert "hashed_password" not in data

    @pytest.mark.asyncio
    async def test_get_current_user_unauthorized(self, async_client: AsyncClient):
        """Test getting current user without authentication."""
        response = await async_client.get("/api/v1/users/me")

        assert response.status_code in (401, 403)

    @pytest.mark.asyncio
    async def test_get_current_user_invalid_token(self, async_client: AsyncClient):
        """Test getting current user with invalid token."""
        headers = {"Authorization": "Bearer invalid_token"}
        response = await async_client.get("/api/v1/users/me", headers=headers)

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_follow_counts(self, async_client: AsyncClient, db_session: AsyncSession,
                                 test_user: User, auth_headers: dict):
        user2 = await create_user(db_session, "user2")
        user3 = await create_user(db_session, "user3")
        user4 = await create_user(db_session, "user4")
        user5 = await create_user(db_session, "user5")

        await create_follow(db_session, test_user, user2, FollowStatus.PENDING)
        await create_follow(db_session, test_user, user3, FollowStatus.ACCEPTED)
        await create_follow(db_session, user4, test_user, FollowStatus.ACCEPTED)
        # Refused and blocked relationships are not counted
        await create_follow(db_session, test_user, user5, FollowStatus.BLOCKED)

        response = await async_client.get("/api/v1/users/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["sent_follows_count"] == 2
        assert data["received_follows_count"] == 1

    @pytest.mark.asyncio
    async def test_get_user_by_id(self, async_client: AsyncClient, test_user: User,
                                  test_user_2: User, auth_headers: dict):
        """Test getting another user's profile by ID."""
        response = await async_client.get(f"/api/v1/users/{test_user_2.id}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(test_user_2.id)
        assert data["username"] == "user2"
        assert data["email"] is None

    @pytest.mark.asyncio
    async def test_get_user_by_id_not_found(self, async_client: AsyncClient, test_user: User,
                                            auth_headers: dict):
        """Test getting non-existent user by ID."""
        response = await async_client.get(f"/api/v1/users/{uuid.uuid4()}", headers=auth_headers)

        assert response.status_code == 404
        data = response.json()
        assert data["detail"] == "User not found"
        assert data["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_user_by_invalid_id(self, async_client: AsyncClient, test_user: User,
                                          auth_headers: dict):
        response = await async_client.get("/api/v1/users/invalid-id", headers=auth_headers)

        assert response.status_code == 400


class TestUpdateProfile:
    """Test cases for PUT /users/me."""

    @pytest.mark.asyncio
    async def test_update_profile(self, async_client: AsyncClient, test_user: User, auth_headers: dict):
        profile = {
            "username": "renamed",
            "about_me": "  Walks dogs on weekends  ",
            "email": "renamed@example.com",
        }

        response = await async_client.put("/api/v1/users/me", json=profile, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Updated profile successfully"
        assert data["data"]["user"] == {
            "username": "renamed",
            "about_me": "Walks dogs on weekends",
            "email": "renamed@example.com",
        }

        me = await async_client.get("/api/v1/users/me", headers=auth_headers)
        assert me.json()["username"] == "renamed"

    @pytest.mark.asyncio
    async def test_omitted_fields_are_kept(self, async_client: AsyncClient, test_user: User,
                                           auth_headers: dict):
        response = await async_client.put(
            "/api/v1/users/me", json={"username": "user1"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["user"]["email"] == "user1@example.com"

        login = await async_client.post(
            "/api/v1/auth/login", json={"username": "user1", "password": TEST_PASSWORD}
        )
        assert login.status_code == 200

    @pytest.mark.asyncio
    async def test_update_password(self, async_client: AsyncClient, test_user: User, auth_headers: dict):
        response = await async_client.put(
            "/api/v1/users/me",
            json={"username": "user1", "password": "n3wPass!"},
            headers=auth_headers,
        )
        assert response.status_code == 200

        old_login = await async_client.post(
            "/api/v1/auth/login", json={"username": "user1", "password": TEST_PASSWORD}
        )
        assert old_login.status_code == 401

        new_login = await async_client.post(
            "/api/v1/auth/login", json={"username": "user1", "password": "n3wPass!"}
        )
        assert new_login.status_code == 200

    @pytest.mark.asyncio
    async def test_username_taken(self, async_client: AsyncClient, test_user: User, test_user_2: User,
                                  auth_headers: dict):
        response = await async_client.put(
            "/api/v1/users/me", json={"username": "user2"}, headers=auth_headers
        )

        assert response.status_code == 409
        data = response.json()
        assert data["detail"] == "Username already taken"
        assert data["error"]["code"] == "CONFLICT"

    @pytest.mark.asyncio
    async def test_email_taken(self, async_client: AsyncClient, test_user: User, test_user_2: User,
                               auth_headers: dict):
        response = await async_client.put(
            "/api/v1/users/me",
            json={"username": "user1", "email": "user2@example.com"},
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Email already in use"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "profile, field",
        [
            ({"username": ""}, "username"),
            ({"username": "no_underscores"}, "username"),
            ({"username": "x" * 21}, "username"),
            ({"username": "user1", "password": "123"}, "password"),
            ({"username": "user1", "password": "no spaces allowed"}, "password"),
            ({"username": "user1", "about_me": "a" * 201}, "about_me"),
            ({"username": "user1", "email": "not-an-email"}, "email"),
            ({"about_me": "missing username"}, "username"),
        ],
    )
    async def test_invalid_profile(self, async_client: AsyncClient, test_user: User, auth_headers: dict,
                                   profile: dict, field: str):
        response = await async_client.put("/api/v1/users/me", json=profile, headers=auth_headers)

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == "BAD_REQUEST"
        assert data["errors"][0]["field"] == field

    @pytest.mark.asyncio
    async def test_requires_authentication(self, async_client: AsyncClient):
        response = await async_client.put("/api/v1/users/me", json={"username": "someone"})

        assert response.status_code in (401, 403)


class TestDeleteUser:
    """Test cases for DELETE /users/me."""

    @pytest.mark.asyncio
    async def test_delete_user(self, async_client: AsyncClient, test_user: User, auth_headers: dict):
        response = await async_client.delete("/api/v1/users/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "User deleted successfully"
        assert data["data"]["user"]["username"] == "user1"

        me = await async_client.get("/api/v1/users/me", headers=auth_headers)
        assert me.status_code == 401

    @pytest.mark.asyncio
    async def test_delete_user_removes_relationships(self, async_client: AsyncClient, db_session: AsyncSession,
                                                     test_user: User, test_user_2: User, test_user_3: User,
                                                     auth_headers: dict, auth_headers_2: dict):
        await create_follow(db_session, test_user, test_user_2, FollowStatus.ACCEPTED)
        await create_follow(db_session, test_user_3, test_user, FollowStatus.BLOCKED)
        await create_follow(db_session, test_user_2, test_user_3, FollowStatus.PENDING)

        response = await async_client.delete("/api/v1/users/me", headers=auth_headers)
        assert response.status_code == 200

        assert await follows_between(db_session, test_user, test_user_2) == []
        assert await follows_between(db_session, test_user, test_user_3) == []
        remaining = await db_session.scalar(select(func.count(Follow.id)))
        assert remaining == 1
        assert len(await follows_between(db_session, test_user_2, test_user_3)) == 1

        profile = await async_client.get("/api/v1/users/me", headers=auth_headers_2)
        assert profile.json()["received_follows_count"] == 0
        assert profile.json()["sent_follows_count"] == 1

    @pytest.mark.asyncio
    async def test_deleted_user_cannot_be_followed(self, async_client: AsyncClient, test_user: User,
                                                   test_user_2: User, auth_headers: dict,
                                                   auth_headers_2: dict):
        deleted = await async_client.delete("/api/v1/users/me", headers=auth_headers)
        assert deleted.status_code == 200

        response = await async_client.post(
            "/api/v1/follows", json={"recipient_id": str(test_user.id)}, headers=auth_headers_2
        )

        assert response.status_code == 404
