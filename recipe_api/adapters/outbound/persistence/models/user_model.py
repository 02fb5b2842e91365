# recipe_api/adapters/outbound/persistence/models/user_model.py

"""
Modelo de usuário.

Only the columns the session and auth layers need, plus the public profile
fields and favorites returned by the auth and user endpoints.
"""

from sqlalchemy import JSON, Column, DateTime, Enum, Integer, String, Text, func

from recipe_api.adapters.outbound.persistence.models.base_model import Base
from recipe_api.domain.models.user_domain_model import (
    CookingLevel,
    User as DomainUser,
    UserRole,
    UserStatus,
)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class User(Base):
    """
    Modelo de usuário do sistema.

    Attributes:
        id: Identificador textual ("user-<hex>")
        email: Email do usuário (utilizado para login, sempre minúsculo)
        password_hash: Hash bcrypt da senha
        role / status: Controle de acesso
        token_version: Contador de revogação; todo token carrega uma cópia
    """
    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    username = Column(String(50), nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=_enum_values),
        nullable=False,
        default=UserRole.user,
        index=True,
    )
    status = Column(
        Enum(UserStatus, name="user_status", values_callable=_enum_values),
        nullable=False,
        default=UserStatus.pending,
        index=True,
    )
    token_version = Column(Integer, nullable=False, default=0, server_default="0")
    birthday = Column(String(10), nullable=True)
    bio = Column(Text, nullable=False, default="")
    location = Column(String(100), nullable=False, default="")
    cooking_level = Column(
        Enum(CookingLevel, name="cooking_level", values_callable=_enum_values),
        nullable=False,
        default=CookingLevel.beginner,
    )
    joined_date = Column(DateTime(timezone=True), server_default=func.now())
    last_active = Column(DateTime(timezone=True), nullable=True)
    # IDs de receitas favoritas, na ordem em que foram marcadas
    favorites = Column(JSON, nullable=False, default=lambda: [])
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def to_domain(self) -> DomainUser:
        return DomainUser(
            id=self.id,
            username=self.username,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            password_hash=self.password_hash,
            role=UserRole(self.role),
            status=UserStatus(self.status),
            token_version=self.token_version or 0,
            birthday=self.birthday,
            bio=self.bio or "",
            location=self.location or "",
            cooking_level=CookingLevel(self.cooking_level or CookingLevel.beginner),
            joined_date=self.joined_date,
            last_active=self.last_active,
            created_at=self.created_at,
            updated_at=self.updated_at,
            favorites=list(self.favorites or []),
        )

    def __repr__(self):
        return f"<User {self.email}>"
