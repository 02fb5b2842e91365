# recipe_api/adapters/inbound/api/v1/endpoints/admin_endpoint.py

"""
Moderação de usuários (somente admin).
"""

import logging

from fastapi import APIRouter, Depends, Path

from recipe_api.adapters.inbound.api.deps import get_admin_service, rate_limit, require_admin
from recipe_api.application.dtos.user_dto import StatusUpdateRequest
from recipe_api.application.use_cases.admin_use_cases import AsyncAdminUserService
from recipe_api.domain.models.user_domain_model import Identity
from recipe_api.shared.utils.error_responses import admin_errors
from recipe_api.shared.utils.responses import success_response
from recipe_api.shared.utils.success_responses import common_success

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/users",
    tags=["Admin"],
    responses={**common_success, **admin_errors},
)


@router.patch(
    "/{user_id}/status",
    summary="Change a user's status",
    description="Sets active, inactive, suspended or pending. Does not revoke the user's tokens.",
    dependencies=[Depends(rate_limit("write"))],
)
async def update_user_status(
        body: StatusUpdateRequest,
        user_id: str = Path(..., min_length=1, max_length=64),
        admin: Identity = Depends(require_admin),
        service: AsyncAdminUserService = Depends(get_admin_service),
):
    user = await service.update_status(user_id, body.status)
    logger.info(f"Admin {admin.user_id} changed status of {user_id}")
    return success_response({"user": user.to_private_dict()}, "User status updated")


@router.post(
    "/{user_id}/revoke-sessions",
    summary="Revoke every session of a user",
    description="Bumps the user's token version; all outstanding access and refresh tokens stop working.",
    dependencies=[Depends(rate_limit("write"))],
)
async def revoke_user_sessions(
        user_id: str = Path(..., min_length=1, max_length=64),
        admin: Identity = Depends(require_admin),
        service: AsyncAdminUserService = Depends(get_admin_service),
):
    token_version = await service.revoke_sessions(user_id)
    logger.info(f"Admin {admin.user_id} revoked sessions of {user_id}")
    return success_response({"user_id": user_id, "token_version": token_version}, "User sessions revoked")
