# recipe_api/adapters/inbound/api/v1/endpoints/recipes_endpoint.py

"""
Interações com receitas.
"""

import logging

from fastapi import APIRouter, Depends, Path

from recipe_api.adapters.inbound.api.deps import get_user_service, rate_limit, require_active_user
from recipe_api.application.use_cases.user_use_cases import AsyncUserService
from recipe_api.domain.models.user_domain_model import Identity
from recipe_api.shared.utils.error_responses import user_errors
from recipe_api.shared.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["Recipes"], responses=user_errors)


@router.post(
    "/{recipe_id}/favorite",
    summary="Toggle a favorite",
    description="Active non-admin users only. Adds the recipe to the caller's favorites or removes it.",
    responses={200: {"description": "Favorite state after the toggle", "content": {
        "application/json": {"example": {"success": True, "data": {"favorited": True}}}
    }}},
    dependencies=[Depends(rate_limit("write"))],
)
async def toggle_favorite(
        recipe_id: str = Path(..., min_length=1, max_length=64),
        identity: Identity = Depends(require_active_user),
        service: AsyncUserService = Depends(get_user_service),
):
    favorited = await service.toggle_favorite(identity.user_id, recipe_id)
    logger.info(f"User {identity.user_id} {'added' if favorited else 'removed'} favorite {recipe_id}")
    return success_response({"favorited": favorited})
