# recipe_api/adapters/outbound/persistence/repositories/base_repository.py

"""
Async Base Repository

Generic CRUD helpers for SQLAlchemy models with uniform logging and error
translation: SQLAlchemy errors never escape, they become
DatabaseOperationException (or ResourceAlreadyExists on unique violations).
"""

import logging
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import update as sql_update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from recipe_api.adapters.outbound.persistence.models.base_model import Base
from recipe_api.domain.exceptions import DatabaseOperationException, ResourceAlreadyExists

ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


def _is_unique_violation(error: IntegrityError) -> bool:
    error_msg = str(error).lower()
    return "unique" in error_msg or "duplicate" in error_msg


class AsyncCRUDBase(Generic[ModelType]):
    """
    Generic asynchronous CRUD base class.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """Retrieve an object by ID."""
        try:
            result = await db.execute(select(self.model).where(self.model.id == id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.model.__name__} with ID {id}: {str(e)}")
            raise DatabaseOperationException(
                message=f"Error fetching {self.model.__name__}", original_error=e
            )

    async def get_by_field(self, db: AsyncSession, field_name: str, value: Any) -> Optional[ModelType]:
        """Retrieve an object by a specific field."""
        try:
            query = select(self.model).where(getattr(self.model, field_name) == value)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.model.__name__} by {field_name}: {str(e)}")
            raise DatabaseOperationException(
                message=f"Error fetching {self.model.__name__} by {field_name}", original_error=e
            )

    async def create(self, db: AsyncSession, *, obj_in: Dict[str, Any]) -> ModelType:
        """Create a new record."""
        try:
            db_obj = self.model(**obj_in)
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)

            self.logger.info(f"{self.model.__name__} created with ID: {db_obj.id}")
            return db_obj

        except IntegrityError as e:
            await db.rollback()
            if _is_unique_violation(e):
                self.logger.warning(f"Attempt to create duplicate {self.model.__name__}")
                raise ResourceAlreadyExists(f"{self.model.__name__} with these data already exists")
            self.logger.error(f"Integrity error creating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(original_error=e)

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                message=f"Error creating {self.model.__name__}", original_error=e
            )

    async def update(self, db: AsyncSession, *, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        """
        Update an existing record.

        Raises:
            ResourceAlreadyExists: If update violates unique constraints
            DatabaseOperationException: For other database errors
        """
        try:
            for field, value in obj_in.items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)

            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)

            self.logger.info(f"{self.model.__name__} with ID {db_obj.id} updated")
            return db_obj

        except IntegrityError as e:
            await db.rollback()
            if _is_unique_violation(e):
                self.logger.warning(f"Uniqueness violation updating {self.model.__name__}")
                raise ResourceAlreadyExists(f"Could not update {self.model.__name__}: value already exists")
            self.logger.error(f"Integrity error updating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(original_error=e)

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error updating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                message=f"Error updating {self.model.__name__}", original_error=e
            )

    async def increment(self, db: AsyncSession, *, id: Any, column: str) -> Optional[int]:
        """
        Atomic `column = column + 1` in a single UPDATE.

        Returns:
            The new value, or None if no row matched
        """
        target = getattr(self.model, column)
        try:
            stmt = (
                sql_update(self.model)
                .where(self.model.id == id)
                .values({column: target + 1})
                .returning(target)
            )
            result = await db.execute(stmt)
            new_value = result.scalar_one_or_none()
            await db.commit()
            return new_value
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error incrementing {self.model.__name__}.{column}: {str(e)}")
            raise DatabaseOperationException(
                message=f"Error updating {self.model.__name__}", original_error=e
            )
