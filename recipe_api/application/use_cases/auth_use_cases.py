# recipe_api/application/use_cases/auth_use_cases.py

"""
Service for user authentication.

Signup, login, refresh and the two logout flavours. Token issuance goes
through TokenCodec; cookies are the HTTP layer's concern and are written by
the endpoints with the tokens returned here.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from recipe_api.adapters.outbound.security.passwords import PasswordHasher
from recipe_api.adapters.outbound.security.token_codec import REFRESH, TokenCodec
from recipe_api.application.dtos.user_dto import LoginRequest, SignupRequest
from recipe_api.application.ports.outbound.user_repository_port import IUserRepository
from recipe_api.domain.exceptions import (
    InvalidCredentials,
    ResourceAlreadyExists,
    Unauthenticated,
)
from recipe_api.domain.models.user_domain_model import User, UserRole, UserStatus

logger = logging.getLogger(__name__)

# Status transitions on login/logout. Suspended accounts are never touched here.
LOGIN_ACTIVATES = (UserStatus.pending, UserStatus.inactive)
LOGOUT_DEACTIVATES = (UserStatus.active, UserStatus.inactive)


@dataclass
class AuthResult:
    user: User
    access_token: str
    refresh_token: str


class AsyncAuthService:
    """
    Application service for authentication-related operations.

    Responsibilities:
    - Register new users
    - Authenticate users and issue token pairs
    - Rotate tokens from a refresh token
    - Log out (status change) and log out everywhere (token_version bump)
    """

    def __init__(self, users: IUserRepository, codec: TokenCodec, hasher: PasswordHasher):
        self.users = users
        self.codec = codec
        self.hasher = hasher

    def _issue(self, user: User) -> AuthResult:
        return AuthResult(
            user=user,
            access_token=self.codec.issue_access_token(user),
            refresh_token=self.codec.issue_refresh_token(user),
        )

    async def signup(self, user_input: SignupRequest) -> AuthResult:
        """
        Register a new user and open a session for it.

        Raises:
            ResourceAlreadyExists: Email already registered.
        """
        if await self.users.get_by_email(user_input.email):
            logger.warning("Signup rejected: email already registered")
            raise ResourceAlreadyExists("Email already registered")

        password_hash = await self.hasher.hash_password(user_input.password)
        now = datetime.now(timezone.utc)

        user = await self.users.create({
            "id": f"user-{uuid.uuid4().hex}",
            "username": user_input.username,
            "first_name": user_input.first_name,
            "last_name": user_input.last_name,
            "email": user_input.email,
            "password_hash": password_hash,
            "birthday": user_input.birthday,
            "bio": user_input.bio,
            "location": user_input.location,
            "cooking_level": user_input.cooking_level,
            "role": UserRole.user,
            "status": UserStatus.pending,
            "token_version": 0,
            "joined_date": now,
        })

        logger.info(f"User registered successfully: {user.id}")
        return self._issue(user)

    async def login(self, user_input: LoginRequest) -> AuthResult:
        """
        Authenticate by email and password.

        Unknown email and wrong password fail the same way.

        Raises:
            InvalidCredentials: If credentials are incorrect.
        """
        user = await self.users.get_by_email(user_input.email)
        if user is None or not await self.hasher.verify_password(user_input.password, user.password_hash):
            logger.warning("Authentication failed: invalid credentials")
            raise InvalidCredentials()

        changes = {"last_active": datetime.now(timezone.utc)}
        if user.status in LOGIN_ACTIVATES:
            changes["status"] = UserStatus.active

        user = await self.users.update_fields(user.id, changes) or user

        logger.info(f"User logged in successfully: {user.id}")
        return self._issue(user)

    async def refresh(self, refresh_token: Optional[str]) -> AuthResult:
        """
        Validate a refresh token and rotate both tokens.

        Raises:
            Unauthenticated: NO_REFRESH_TOKEN when absent; INVALID_TOKEN for
                any other failure (bad signature, expiry, wrong kind, unknown
                user or revoked version), without saying which.
        """
        if not refresh_token:
            raise Unauthenticated("Refresh token not found", internal_code="NO_REFRESH_TOKEN")

        claims = self.codec.verify(refresh_token, expected_kind=REFRESH)
        user = await self.users.get_by_id(claims.subject) if claims else None

        if claims is None or user is None or user.token_version != claims.token_version:
            logger.warning("Refresh rejected: invalid, unknown or revoked token")
            raise Unauthenticated("Invalid refresh token", internal_code="INVALID_TOKEN")

        logger.info(f"Session refreshed for user {user.id}")
        return self._issue(user)

    async def logout(self, user_id: str) -> None:
        """Mark the account inactive; suspended and pending accounts keep their status."""
        user = await self.users.get_by_id(user_id)
        if user and user.status in LOGOUT_DEACTIVATES:
            await self.users.update_fields(user_id, {"status": UserStatus.inactive})
        logger.info(f"User logged out: {user_id}")

    async def logout_all(self, user_id: str) -> Optional[int]:
        """Revoke every outstanding token of the user."""
        new_version = await self.users.increment_token_version(user_id)
        logger.info(f"All sessions invalidated for user {user_id}")
        return new_version
