# recipe_api/adapters/inbound/api/v1/endpoints/users_endpoint.py

"""
Perfis de usuário.

GET is open to anyone (the email only shows up for the owner or an admin);
PATCH is limited to the owner or an admin.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path

from recipe_api.adapters.inbound.api.deps import (
    get_current_identity,
    get_optional_identity,
    get_user_service,
    rate_limit,
)
from recipe_api.application.dtos.user_dto import UserUpdateRequest
from recipe_api.application.use_cases.user_use_cases import AsyncUserService
from recipe_api.domain.models.user_domain_model import Identity
from recipe_api.shared.utils.error_responses import user_errors
from recipe_api.shared.utils.responses import success_response
from recipe_api.shared.utils.success_responses import common_success

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={**common_success, **user_errors},
)


@router.get(
    "/{user_id}",
    summary="User profile",
    description="Full profile for the owner or an admin; public profile (no email) for everyone else.",
    dependencies=[Depends(rate_limit("read"))],
)
async def get_user(
        user_id: str = Path(..., min_length=1, max_length=64),
        viewer: Optional[Identity] = Depends(get_optional_identity),
        service: AsyncUserService = Depends(get_user_service),
):
    return success_response({"user": await service.get_profile(user_id, viewer)})


@router.patch(
    "/{user_id}",
    summary="Update a user profile",
    description="Owner or admin only. role and status are applied only when the caller is an admin.",
    dependencies=[Depends(rate_limit("write"))],
)
async def update_user(
        body: UserUpdateRequest,
        user_id: str = Path(..., min_length=1, max_length=64),
        identity: Identity = Depends(get_current_identity),
        service: AsyncUserService = Depends(get_user_service),
):
    user = await service.update_profile(user_id, identity, body.changes())
    return success_response({"user": user.to_private_dict()}, "Profile updated")
