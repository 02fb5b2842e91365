# recipe_api/domain/models/user_domain_model.py

"""
Domain model for users.

Plain dataclasses with no persistence concerns; the repositories convert
their ORM rows into these before handing them to the application layer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class UserRole(str, Enum):
    admin = "admin"
    user = "user"


class UserStatus(str, Enum):
    active = "active"
    inactive = "inactive"
    suspended = "suspended"
    pending = "pending"


class CookingLevel(str, Enum):
    beginner = "Beginner"
    intermediate = "Intermediate"
    advanced = "Advanced"
    professional = "Professional"


@dataclass
class User:
    """
    User account as seen by the application layer.

    token_version is the only revocation mechanism: every token carries a
    snapshot of it, and bumping it invalidates all outstanding tokens.
    """
    id: str
    username: str
    first_name: str
    last_name: str
    email: str
    password_hash: str
    role: UserRole = UserRole.user
    status: UserStatus = UserStatus.pending
    token_version: int = 0
    birthday: Optional[str] = None
    bio: str = ""
    location: str = ""
    cooking_level: CookingLevel = CookingLevel.beginner
    joined_date: Optional[datetime] = None
    last_active: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    favorites: List[str] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    def to_private_dict(self) -> Dict[str, Any]:
        """Profile as seen by its owner or an admin (no credential data)."""
        return {
            "id": self.id,
            "username": self.username,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "full_name": self.full_name,
            "email": self.email,
            "role": UserRole(self.role).value,
            "status": UserStatus(self.status).value,
            "birthday": self.birthday,
            "bio": self.bio,
            "location": self.location,
            "cooking_level": CookingLevel(self.cooking_level).value,
            "joined_date": self.joined_date.isoformat() if self.joined_date else None,
            "last_active": self.last_active.isoformat() if self.last_active else None,
            "favorites": list(self.favorites),
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Profile shown on recipe author pages: no email."""
        profile = self.to_private_dict()
        del profile["email"]
        return profile


@dataclass(frozen=True)
class Identity:
    """
    Resolved identity of the caller for a single request.

    Built from the stored user record, not from the token claims, so role and
    status always reflect the current database state.
    """
    user_id: str
    role: UserRole
    status: UserStatus
    token_version: int = field(default=0, compare=False)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(
            user_id=user.id,
            role=UserRole(user.role),
            status=UserStatus(user.status),
            token_version=user.token_version,
        )
