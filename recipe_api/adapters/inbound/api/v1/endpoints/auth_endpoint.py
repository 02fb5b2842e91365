# recipe_api/adapters/inbound/api/v1/endpoints/auth_endpoint.py

"""
Endpoints de autenticação baseada em cookies.

- signup / login / refresh: issue the three session cookies
- logout / logout-all: always clear them, even for an expired session
- me: current profile
- guest-session: anonymous guest id, no cookies
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from recipe_api.adapters.configuration.container import ServiceContainer
from recipe_api.adapters.inbound.api.deps import (
    get_auth_service,
    get_current_identity,
    get_optional_identity,
    get_services,
    get_user_repository,
    rate_limit,
)
from recipe_api.adapters.outbound.security.cookies import REFRESH_COOKIE
from recipe_api.application.dtos.user_dto import LoginRequest, SignupRequest
from recipe_api.application.ports.outbound.user_repository_port import IUserRepository
from recipe_api.application.use_cases.auth_use_cases import AsyncAuthService, AuthResult
from recipe_api.domain.exceptions import ResourceNotFound
from recipe_api.domain.models.user_domain_model import Identity
from recipe_api.shared.utils.error_responses import auth_errors, csrf_errors, rate_limit_errors
from recipe_api.shared.utils.responses import success_response
from recipe_api.shared.utils.success_responses import auth_success, logout_success, signup_success

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _session_response(
        result: AuthResult,
        message: str,
        request: Request,
        services: ServiceContainer,
        status_code: int = status.HTTP_200_OK,
):
    response = success_response({"user": result.user.to_private_dict()}, message, status_code=status_code)
    services.cookies.issue_session_cookies(response, result.access_token, result.refresh_token, request)
    return response


def _logged_out_response(message: str, request: Request, services: ServiceContainer):
    response = success_response(None, message)
    services.cookies.clear_session_cookies(response, request)
    return response


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Creates a pending account and opens a session (three cookies).",
    responses={**signup_success, **auth_errors},
    dependencies=[Depends(rate_limit("auth"))],
)
async def signup(
        user_input: SignupRequest,
        request: Request,
        services: ServiceContainer = Depends(get_services),
        service: AsyncAuthService = Depends(get_auth_service),
):
    result = await service.signup(user_input)
    return _session_response(
        result, "Account created successfully", request, services, status_code=status.HTTP_201_CREATED
    )


@router.post(
    "/login",
    summary="Login with cookies",
    description="Authenticates by email and password and sets the session cookies.",
    responses={**auth_success, **auth_errors},
    dependencies=[Depends(rate_limit("auth"))],
)
async def login(
        user_input: LoginRequest,
        request: Request,
        services: ServiceContainer = Depends(get_services),
        service: AsyncAuthService = Depends(get_auth_service),
):
    result = await service.login(user_input)
    return _session_response(result, "Login successful", request, services)


@router.post(
    "/refresh",
    summary="Rotate session tokens",
    description="Uses the ko_refresh cookie to issue a new access token, refresh token and CSRF token.",
    responses={**auth_success, **auth_errors},
    dependencies=[Depends(rate_limit("auth"))],
)
async def refresh(
        request: Request,
        services: ServiceContainer = Depends(get_services),
        service: AsyncAuthService = Depends(get_auth_service),
):
    result = await service.refresh(request.cookies.get(REFRESH_COOKIE))
    return _session_response(result, "Token refreshed", request, services)


@router.post(
    "/logout",
    summary="Logout",
    description="Marks the account inactive when a session is present and always clears the cookies.",
    responses={**logout_success, **csrf_errors, **rate_limit_errors},
    dependencies=[Depends(rate_limit("write"))],
)
async def logout(
        request: Request,
        identity: Optional[Identity] = Depends(get_optional_identity),
        services: ServiceContainer = Depends(get_services),
        service: AsyncAuthService = Depends(get_auth_service),
):
    if identity is None:
        # Sessão já expirada: tratamos como "já deslogado"
        return _logged_out_response("Logged out", request, services)

    await service.logout(identity.user_id)
    return _logged_out_response("Logged out successfully", request, services)


@router.post(
    "/logout-all",
    summary="Logout from every device",
    description="Bumps the token version, revoking every outstanding token of the user.",
    responses={**logout_success, **csrf_errors, **rate_limit_errors},
    dependencies=[Depends(rate_limit("write"))],
)
async def logout_all(
        request: Request,
        identity: Optional[Identity] = Depends(get_optional_identity),
        services: ServiceContainer = Depends(get_services),
        service: AsyncAuthService = Depends(get_auth_service),
):
    if identity is None:
        return _logged_out_response("Logged out", request, services)

    await service.logout_all(identity.user_id)
    return _logged_out_response("All sessions invalidated", request, services)


@router.get(
    "/me",
    summary="Current user",
    responses={**auth_success, 401: auth_errors[401], **rate_limit_errors},
    dependencies=[Depends(rate_limit("read"))],
)
async def me(
        identity: Identity = Depends(get_current_identity),
        users: IUserRepository = Depends(get_user_repository),
):
    user = await users.get_by_id(identity.user_id)
    if user is None:
        raise ResourceNotFound("User not found")
    return success_response({"user": user.to_private_dict()})


@router.post(
    "/guest-session",
    summary="Anonymous guest id",
    description="Returns a guest id the client sends back in X-Guest-ID. No cookies are set.",
    responses=rate_limit_errors,
    dependencies=[Depends(rate_limit("auth"))],
)
async def guest_session():
    return success_response({"guestId": f"guest-{uuid.uuid4()}", "role": "guest"}, "Guest session ready")
