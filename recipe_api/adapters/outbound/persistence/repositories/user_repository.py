# recipe_api/adapters/outbound/persistence/repositories/user_repository.py

import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from recipe_api.adapters.outbound.persistence.models.user_model import User as UserModel
from recipe_api.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from recipe_api.application.ports.outbound.user_repository_port import IUserRepository
from recipe_api.domain.models.user_domain_model import User

logger = logging.getLogger(__name__)

user_crud = AsyncCRUDBase(UserModel)


class SqlAlchemyUserRepository(IUserRepository):
    """User store over a request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: str) -> Optional[User]:
        row = await user_crud.get(self.db, user_id)
        return row.to_domain() if row else None

    async def get_by_email(self, email: str) -> Optional[User]:
        row = await user_crud.get_by_field(self.db, "email", email.strip().lower())
        return row.to_domain() if row else None

    async def create(self, user_data: Dict[str, Any]) -> User:
        row = await user_crud.create(self.db, obj_in=user_data)
        return row.to_domain()

    async def update_fields(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]:
        row = await user_crud.get(self.db, user_id)
        if row is None:
            return None
        row = await user_crud.update(self.db, db_obj=row, obj_in=fields)
        return row.to_domain()

    async def increment_token_version(self, user_id: str) -> Optional[int]:
        new_version = await user_crud.increment(self.db, id=user_id, column="token_version")
        if new_version is not None:
            logger.info(f"token_version bumped to {new_version} for user {user_id}")
        return new_version
