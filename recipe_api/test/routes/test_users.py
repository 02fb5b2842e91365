# recipe_api/test/routes/test_users.py

# Para Rodar o Script:
# pytest recipe_api/test/routes/test_users.py -v

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from recipe_api.domain.models.user_domain_model import CookingLevel, UserRole, UserStatus
from recipe_api.test.helpers.http import BASE_URL, csrf_headers, login
from recipe_api.test.helpers.users import DEFAULT_PASSWORD


def user_url(user_id: str) -> str:
    return f"/api/v1/users/{user_id}"


def favorite_url(recipe_id: str) -> str:
    return f"/api/v1/recipes/{recipe_id}/favorite"


@pytest_asyncio.fixture
async def admin_client(app, users):
    users.add(email="admin@example.com", role=UserRole.admin)
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as client:
        response = await login(client, "admin@example.com", DEFAULT_PASSWORD)
        assert response.status_code == 200
        yield client


@pytest.fixture
def member(users):
    return users.add(email="member@example.com")


@pytest_asyncio.fixture
async def member_client(app, member):
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as client:
        response = await login(client, "member@example.com", DEFAULT_PASSWORD)
        assert response.status_code == 200
        yield client


class TestGetProfile:

    async def test_owner_sees_email(self, member_client, member):
        response = await member_client.get(user_url(member.id))

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["email"] == "member@example.com"
        assert user["favorites"] == []
        assert "password_hash" not in user
        assert "token_version" not in user

    async def test_admin_sees_email(self, admin_client, users):
        target = users.add(email="target@example.com")

        response = await admin_client.get(user_url(target.id))

        assert response.json()["data"]["user"]["email"] == "target@example.com"

    async def test_anonymous_gets_public_profile(self, async_client, users):
        target = users.add(email="target@example.com")

        response = await async_client.get(user_url(target.id))

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["id"] == target.id
        assert user["username"] == target.username
        assert "email" not in user
        assert "password_hash" not in user

    async def test_other_member_gets_public_profile(self, member_client, users):
        target = users.add(email="target@example.com")

        response = await member_client.get(user_url(target.id))

        assert "email" not in response.json()["data"]["user"]

    async def test_unknown_user(self, async_client):
        response = await async_client.get(user_url("user-missing"))

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "User not found"


class TestUpdateProfile:

    async def test_owner_updates_profile(self, member_client, member, users):
        response = await member_client.patch(
            user_url(member.id),
            json={"firstName": "Ana", "bio": "<b>Pão</b> de fermentação natural", "cookingLevel": "Advanced"},
            headers=csrf_headers(member_client),
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Profile updated"
        stored = users.users[member.id]
        assert stored.first_name == "Ana"
        assert stored.bio == "Pão de fermentação natural"
        assert stored.cooking_level == CookingLevel.advanced
        assert stored.last_name == member.last_name

    async def test_non_admin_cannot_change_role_or_status(self, member_client, member, users):
        response = await member_client.patch(
            user_url(member.id),
            json={"role": "admin", "status": "suspended", "location": "Recife"},
            headers=csrf_headers(member_client),
        )

        assert response.status_code == 200
        stored = users.users[member.id]
        assert stored.role == UserRole.user
        assert stored.status == UserStatus.active
        assert stored.location == "Recife"

    async def test_admin_can_change_role_and_status(self, admin_client, users):
        target = users.add(email="target@example.com", status=UserStatus.pending)

        response = await admin_client.patch(
            user_url(target.id),
            json={"role": "admin", "status": "active"},
            headers=csrf_headers(admin_client),
        )

        assert response.status_code == 200
        assert users.users[target.id].role == UserRole.admin
        assert users.users[target.id].status == UserStatus.active

    async def test_other_member_is_forbidden(self, member_client, users):
        target = users.add(email="target@example.com")

        response = await member_client.patch(
            user_url(target.id), json={"bio": "hacked"}, headers=csrf_headers(member_client)
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"
        assert users.users[target.id].bio == ""

    async def test_invalid_username(self, member_client, member):
        response = await member_client.patch(
            user_url(member.id), json={"username": "no spaces"}, headers=csrf_headers(member_client)
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_requires_csrf_token(self, member_client, member):
        response = await member_client.patch(user_url(member.id), json={"bio": "x"})

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "CSRF_TOKEN_INVALID"

    async def test_admin_updating_unknown_user(self, admin_client):
        response = await admin_client.patch(
            user_url("user-missing"), json={"bio": "x"}, headers=csrf_headers(admin_client)
        )

        assert response.status_code == 404


class TestFavorites:

    async def test_toggle_adds_then_removes(self, member_client, member, users):
        first = await member_client.post(favorite_url("recipe-1"), headers=csrf_headers(member_client))
        assert first.status_code == 200
        assert first.json()["data"] == {"favorited": True}
        assert users.users[member.id].favorites == ["recipe-1"]

        second = await member_client.post(favorite_url("recipe-1"), headers=csrf_headers(member_client))
        assert second.json()["data"] == {"favorited": False}
        assert users.users[member.id].favorites == []

    async def test_favorites_show_on_own_profile(self, member_client, member):
        await member_client.post(favorite_url("recipe-1"), headers=csrf_headers(member_client))
        await member_client.post(favorite_url("recipe-2"), headers=csrf_headers(member_client))

        response = await member_client.get(user_url(member.id))

        assert response.json()["data"]["user"]["favorites"] == ["recipe-1", "recipe-2"]

    async def test_admin_cannot_favorite(self, admin_client):
        response = await admin_client.post(favorite_url("recipe-1"), headers=csrf_headers(admin_client))

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    @pytest.mark.parametrize("status", [UserStatus.suspended, UserStatus.pending, UserStatus.inactive])
    async def test_non_active_accounts_cannot_favorite(self, member_client, member, users, status):
        # Mudança feita depois do login (ex.: moderação)
        users.users[member.id].status = status

        response = await member_client.post(favorite_url("recipe-1"), headers=csrf_headers(member_client))

        assert response.status_code == 403

    async def test_revoked_session_cannot_favorite(self, member_client, member, users):
        await users.increment_token_version(member.id)

        response = await member_client.post(favorite_url("recipe-1"), headers=csrf_headers(member_client))

        assert response.status_code == 401
