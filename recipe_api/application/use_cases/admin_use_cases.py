# recipe_api/application/use_cases/admin_use_cases.py

import logging

from recipe_api.application.ports.outbound.user_repository_port import IUserRepository
from recipe_api.domain.exceptions import ResourceNotFound
from recipe_api.domain.models.user_domain_model import User, UserStatus

logger = logging.getLogger(__name__)


class AsyncAdminUserService:
    """
    Moderation of user accounts.

    Changing a status never revokes tokens by itself; suspending someone and
    cutting their live sessions are two separate calls.
    """

    def __init__(self, users: IUserRepository):
        self.users = users

    async def update_status(self, user_id: str, status: UserStatus) -> User:
        user = await self.users.update_fields(user_id, {"status": status})
        if user is None:
            raise ResourceNotFound("User not found")
        logger.info(f"User {user_id} status set to {UserStatus(status).value}")
        return user

    async def revoke_sessions(self, user_id: str) -> int:
        new_version = await self.users.increment_token_version(user_id)
        if new_version is None:
            raise ResourceNotFound("User not found")
        logger.warning(f"Sessions revoked by admin for user {user_id}")
        return new_version
