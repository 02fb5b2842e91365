# recipe_api/adapters/inbound/api/session_guard.py

"""
Resolução de identidade por requisição.

resolve_identity answers "who is calling?" and never raises: a missing
cookie, a bad or expired token, an unknown user or a stale token_version all
mean "no session". The require_* helpers are where exceptions start.
"""

import logging
from typing import Optional

from fastapi import Request

from recipe_api.adapters.outbound.security.cookies import ACCESS_COOKIE
from recipe_api.adapters.outbound.security.token_codec import ACCESS, TokenCodec
from recipe_api.application.ports.outbound.user_repository_port import IUserRepository
from recipe_api.domain.exceptions import DomainException, Forbidden, Unauthenticated
from recipe_api.domain.models.user_domain_model import Identity, UserRole, UserStatus

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class SessionGuard:
    """
    Identity resolution and access preconditions.

    The user store is passed per call because it is request-scoped (one
    database session per request).
    """

    def __init__(self, codec: TokenCodec, cookie_name: str = ACCESS_COOKIE):
        self.codec = codec
        self.cookie_name = cookie_name

    def extract_token(self, request: Request) -> Optional[str]:
        """Access token from the cookie, else from `Authorization: Bearer`."""
        token = request.cookies.get(self.cookie_name)
        if token:
            return token

        authorization = request.headers.get("authorization", "")
        if authorization.lower().startswith(BEARER_PREFIX):
            return authorization[len(BEARER_PREFIX):].strip() or None
        return None

    async def resolve_identity(self, request: Request, users: IUserRepository) -> Optional[Identity]:
        token = self.extract_token(request)
        if not token:
            return None

        claims = self.codec.verify(token, expected_kind=ACCESS)
        if claims is None:
            return None

        try:
            user = await users.get_by_id(claims.subject)
        except DomainException as e:
            # Falha do banco conta como "sem sessão"; o erro fica no log
            logger.error(f"User lookup failed while resolving identity: {e.message}")
            return None

        if user is None:
            logger.warning(f"Token for unknown user {claims.subject}")
            return None

        if user.token_version != claims.token_version:
            logger.warning(
                f"Revoked token used for user {user.id} "
                f"(token version {claims.token_version}, current {user.token_version})"
            )
            return None

        return Identity.from_user(user)

    async def require_identity(self, request: Request, users: IUserRepository) -> Identity:
        identity = await self.resolve_identity(request, users)
        if identity is None:
            raise Unauthenticated()
        return identity

    async def require_role(self, request: Request, users: IUserRepository, role: UserRole) -> Identity:
        identity = await self.require_identity(request, users)
        if identity.role != role:
            logger.warning(f"User {identity.user_id} lacks role {UserRole(role).value}")
            raise Forbidden()
        return identity

    async def require_active_non_admin(self, request: Request, users: IUserRepository) -> Identity:
        """Gate for end-user interactions (likes, favorites, reviews)."""
        identity = await self.require_identity(request, users)
        if identity.status != UserStatus.active or identity.is_admin:
            raise Forbidden("Only active non-admin users can perform this action")
        return identity
