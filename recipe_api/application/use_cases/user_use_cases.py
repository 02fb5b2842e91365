# recipe_api/application/use_cases/user_use_cases.py

import logging
from typing import Any, Dict, Optional

from recipe_api.application.ports.outbound.user_repository_port import IUserRepository
from recipe_api.domain.exceptions import Forbidden, ResourceNotFound
from recipe_api.domain.models.user_domain_model import Identity, User

logger = logging.getLogger(__name__)

# Campos que só um admin pode alterar
ADMIN_ONLY_FIELDS = ("role", "status")

# Campos sem valor "vazio" válido: null no corpo é ignorado
NON_NULLABLE_FIELDS = ("cooking_level", "role", "status")


class AsyncUserService:
    """
    Profiles and per-user interactions.

    A profile is fully visible to its owner and to admins; everyone else,
    anonymous callers included, gets the public view without the email.
    """

    def __init__(self, users: IUserRepository):
        self.users = users

    async def _get_or_404(self, user_id: str) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFound("User not found")
        return user

    @staticmethod
    def _is_self_or_admin(user_id: str, viewer: Optional[Identity]) -> bool:
        return viewer is not None and (viewer.user_id == user_id or viewer.is_admin)

    async def get_profile(self, user_id: str, viewer: Optional[Identity]) -> Dict[str, Any]:
        user = await self._get_or_404(user_id)
        if self._is_self_or_admin(user_id, viewer):
            return user.to_private_dict()
        return user.to_public_dict()

    async def update_profile(self, user_id: str, actor: Identity, changes: Dict[str, Any]) -> User:
        """
        Apply a partial profile update.

        Raises:
            Forbidden: If the actor is neither the profile owner nor an admin
            ResourceNotFound: If the user does not exist
        """
        if not self._is_self_or_admin(user_id, actor):
            logger.warning(f"User {actor.user_id} tried to update profile {user_id}")
            raise Forbidden("Access denied")

        update = {k: v for k, v in changes.items() if not (k in NON_NULLABLE_FIELDS and v is None)}
        if not actor.is_admin:
            dropped = [k for k in ADMIN_ONLY_FIELDS if k in update]
            for key in dropped:
                del update[key]
            if dropped:
                logger.info(f"Ignored admin-only fields {dropped} from user {actor.user_id}")

        if not update:
            return await self._get_or_404(user_id)

        user = await self.users.update_fields(user_id, update)
        if user is None:
            raise ResourceNotFound("User not found")
        logger.info(f"Profile {user_id} updated by {actor.user_id}: {sorted(update)}")
        return user

    async def toggle_favorite(self, user_id: str, recipe_id: str) -> bool:
        """
        Add the recipe to the user's favorites, or remove it if already there.

        Returns:
            True when the recipe is a favorite after the call
        """
        user = await self._get_or_404(user_id)
        favorites = list(user.favorites)
        if recipe_id in favorites:
            favorites.remove(recipe_id)
        else:
            favorites.append(recipe_id)

        await self.users.update_fields(user_id, {"favorites": favorites})
        return recipe_id in favorites
