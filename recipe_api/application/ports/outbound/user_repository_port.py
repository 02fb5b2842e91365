# recipe_api/application/ports/outbound/user_repository_port.py

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from recipe_api.domain.models.user_domain_model import User


class IUserRepository(ABC):
    """User store interface used by the session and auth layers."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def create(self, user_data: Dict[str, Any]) -> User:
        """
        Persist a new user.

        Raises:
            ResourceAlreadyExists: If the email or username is taken
        """

    @abstractmethod
    async def update_fields(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]:
        """Apply a partial update; returns None when the user does not exist."""

    @abstractmethod
    async def increment_token_version(self, user_id: str) -> Optional[int]:
        """
        Atomically bump token_version, revoking every outstanding token.

        Returns:
            The new version, or None when the user does not exist
        """
