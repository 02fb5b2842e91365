# recipe_api/test/unit/test_session_guard.py

# Para Rodar o Script:
# pytest recipe_api/test/unit/test_session_guard.py -v

from datetime import timedelta

import pytest
from starlette.requests import Request

from recipe_api.adapters.inbound.api.session_guard import SessionGuard
from recipe_api.adapters.outbound.security.token_codec import TokenCodec
from recipe_api.domain.exceptions import Forbidden, Unauthenticated
from recipe_api.domain.models.user_domain_model import UserRole, UserStatus
from recipe_api.test.helpers.http import TEST_SECRET
from recipe_api.test.helpers.users import InMemoryUserRepository


def request_with(cookie: str = None, authorization: str = None) -> Request:
    headers = []
    if cookie is not None:
        headers.append((b"cookie", f"ko_access={cookie}".encode()))
    if authorization is not None:
        headers.append((b"authorization", authorization.encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(TEST_SECRET)


@pytest.fixture
def guard(codec) -> SessionGuard:
    return SessionGuard(codec)


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


class TestResolveIdentity:

    async def test_valid_cookie_resolves_current_user_state(self, guard, codec, users):
        user = users.add(status=UserStatus.active)
        token = codec.issue_access_token(user)
        users.users[user.id].status = UserStatus.suspended

        identity = await guard.resolve_identity(request_with(cookie=token), users)

        assert identity.user_id == user.id
        assert identity.role == UserRole.user
        # Estado vem do banco, não do token
        assert identity.status == UserStatus.suspended

    async def test_bearer_header_fallback(self, guard, codec, users):
        user = users.add()
        token = codec.issue_access_token(user)

        identity = await guard.resolve_identity(request_with(authorization=f"Bearer {token}"), users)

        assert identity is not None
        assert identity.user_id == user.id

    async def test_no_token(self, guard, users):
        assert await guard.resolve_identity(request_with(), users) is None

    async def test_garbage_token(self, guard, users):
        assert await guard.resolve_identity(request_with(cookie="garbage"), users) is None

    async def test_refresh_token_is_not_an_access_token(self, guard, codec, users):
        user = users.add()
        token = codec.issue_refresh_token(user)
        assert await guard.resolve_identity(request_with(cookie=token), users) is None

    async def test_expired_token(self, guard, users):
        user = users.add()
        expired = TokenCodec(TEST_SECRET, access_ttl=timedelta(seconds=-5)).issue_access_token(user)
        assert await guard.resolve_identity(request_with(cookie=expired), users) is None

    async def test_unknown_user(self, guard, codec, users):
        user = users.add()
        token = codec.issue_access_token(user)
        del users.users[user.id]
        assert await guard.resolve_identity(request_with(cookie=token), users) is None

    async def test_revoked_by_token_version_bump(self, guard, codec, users):
        user = users.add()
        token = codec.issue_access_token(user)

        await users.increment_token_version(user.id)

        assert await guard.resolve_identity(request_with(cookie=token), users) is None

    async def test_store_failure_means_no_session(self, guard, codec, users):
        user = users.add()
        token = codec.issue_access_token(user)
        users.fail = True

        assert await guard.resolve_identity(request_with(cookie=token), users) is None


class TestRequirements:

    async def test_require_identity_raises_unauthenticated(self, guard, users):
        with pytest.raises(Unauthenticated) as exc_info:
            await guard.require_identity(request_with(), users)
        assert exc_info.value.status_code == 401
        assert exc_info.value.internal_code == "UNAUTHORIZED"

    async def test_require_role(self, guard, codec, users):
        admin = users.add(role=UserRole.admin)
        member = users.add(role=UserRole.user)

        identity = await guard.require_role(request_with(cookie=codec.issue_access_token(admin)), users, UserRole.admin)
        assert identity.is_admin

        with pytest.raises(Forbidden):
            await guard.require_role(request_with(cookie=codec.issue_access_token(member)), users, UserRole.admin)

    async def test_require_role_without_session_is_unauthenticated(self, guard, users):
        with pytest.raises(Unauthenticated):
            await guard.require_role(request_with(), users, UserRole.admin)

    @pytest.mark.parametrize("role,status,allowed", [
        (UserRole.user, UserStatus.active, True),
        (UserRole.user, UserStatus.inactive, False),
        (UserRole.user, UserStatus.suspended, False),
        (UserRole.user, UserStatus.pending, False),
        (UserRole.admin, UserStatus.active, False),
    ])
    async def test_require_active_non_admin(self, guard, codec, users, role, status, allowed):
        user = users.add(role=role, status=status)
        request = request_with(cookie=codec.issue_access_token(user))

        if allowed:
            identity = await guard.require_active_non_admin(request, users)
            assert identity.user_id == user.id
        else:
            with pytest.raises(Forbidden):
                await guard.require_active_non_admin(request, users)
