# recipe_api/adapters/inbound/api/deps.py

"""
Dependencies for injection into API endpoints.

Services come from request.app.state.services; the user store is built per
request over its own database session. Tests replace get_user_repository
through app.dependency_overrides.
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_api.adapters.configuration.container import ServiceContainer
from recipe_api.adapters.outbound.persistence.database import DatabaseSessionManager, get_db
from recipe_api.adapters.outbound.persistence.repositories.user_repository import (
    SqlAlchemyUserRepository,
)
from recipe_api.application.ports.outbound.user_repository_port import IUserRepository
from recipe_api.application.use_cases.admin_use_cases import AsyncAdminUserService
from recipe_api.application.use_cases.auth_use_cases import AsyncAuthService
from recipe_api.application.use_cases.user_use_cases import AsyncUserService
from recipe_api.domain.exceptions import RateLimited, ServiceUnavailable
from recipe_api.domain.models.user_domain_model import Identity, UserRole
from recipe_api.shared.utils.rate_limiter import client_ip

logger = logging.getLogger(__name__)


########################################################################
# Services and persistence
########################################################################

def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_database_manager(services: ServiceContainer = Depends(get_services)) -> DatabaseSessionManager:
    if services.db is None:
        raise ServiceUnavailable("Database not configured")
    return services.db


async def get_user_repository(db: AsyncSession = Depends(get_db)) -> IUserRepository:
    return SqlAlchemyUserRepository(db)


def get_auth_service(
        services: ServiceContainer = Depends(get_services),
        users: IUserRepository = Depends(get_user_repository),
) -> AsyncAuthService:
    return AsyncAuthService(users, services.codec, services.hasher)


def get_admin_service(users: IUserRepository = Depends(get_user_repository)) -> AsyncAdminUserService:
    return AsyncAdminUserService(users)


def get_user_service(users: IUserRepository = Depends(get_user_repository)) -> AsyncUserService:
    return AsyncUserService(users)


########################################################################
# Rate limiting
########################################################################

def rate_limit(operation_class: str) -> Callable:
    """
    Dependency factory: count the request against `operation_class` for the
    caller's IP and reject with 429 once the window's allowance is used up.
    """

    def _check(request: Request, services: ServiceContainer = Depends(get_services)) -> None:
        decision = services.rate_limiter.check(operation_class, client_ip(request))
        if not decision.allowed:
            raise RateLimited(decision.retry_after_seconds)

    _check.__name__ = f"rate_limit_{operation_class}"
    return _check


########################################################################
# Identity
########################################################################

async def get_optional_identity(
        request: Request,
        services: ServiceContainer = Depends(get_services),
        users: IUserRepository = Depends(get_user_repository),
) -> Optional[Identity]:
    return await services.guard.resolve_identity(request, users)


async def get_current_identity(
        request: Request,
        services: ServiceContainer = Depends(get_services),
        users: IUserRepository = Depends(get_user_repository),
) -> Identity:
    return await services.guard.require_identity(request, users)


async def require_admin(
        request: Request,
        services: ServiceContainer = Depends(get_services),
        users: IUserRepository = Depends(get_user_repository),
) -> Identity:
    return await services.guard.require_role(request, users, UserRole.admin)


async def require_active_user(
        request: Request,
        services: ServiceContainer = Depends(get_services),
        users: IUserRepository = Depends(get_user_repository),
) -> Identity:
    return await services.guard.require_active_non_admin(request, users)
