# recipe_api/application/dtos/user_dto.py

"""
Schemas for user data.

Request bodies accept both snake_case and the camelCase names used by the
web client (firstName, cookingLevel, ...).
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

from recipe_api.domain.models.user_domain_model import CookingLevel, UserRole, UserStatus
from recipe_api.shared.utils.input_validation import InputValidator


def _check(result):
    is_valid, error_msg = result
    if not is_valid:
        raise ValueError(error_msg)


class CustomBaseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=False)


class LoginRequest(CustomBaseModel):
    """
    Schema for user login.
    """
    email: EmailStr = Field(..., description="Email of the user.")
    password: str = Field(..., description="User's password used for authentication.")

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        _check(InputValidator.validate_email(v))
        return InputValidator.normalize_email(v)

    @field_validator("password")
    def password_present(cls, v):
        if not v:
            raise ValueError("Password is required")
        return v


class SignupRequest(CustomBaseModel):
    """
    Schema for creating a new user.

    New accounts always start as role "user", status "pending" and
    token_version 0; none of those can be chosen by the client.
    """
    username: str = Field(..., description="2-30 characters: letters, numbers, underscores")
    first_name: str = Field(..., validation_alias=AliasChoices("first_name", "firstName"))
    last_name: str = Field(..., validation_alias=AliasChoices("last_name", "lastName"))
    email: EmailStr = Field(..., description="Email of the user. Must be unique.")
    password: str = Field(..., description=f"At least {InputValidator.MIN_PASSWORD_LENGTH} characters")
    birthday: Optional[str] = Field(None, description="YYYY-MM-DD")
    bio: str = Field("", description="Short biography")
    location: str = Field("", description="Free-form location")
    cooking_level: CookingLevel = Field(
        CookingLevel.beginner,
        validation_alias=AliasChoices("cooking_level", "cookingLevel"),
    )

    @field_validator("username")
    def validate_username(cls, v):
        _check(InputValidator.validate_username(v))
        return v.strip()

    @field_validator("first_name")
    def validate_first_name(cls, v):
        _check(InputValidator.validate_name(v, "First name"))
        return InputValidator.sanitize_string(v, InputValidator.MAX_NAME_LENGTH)

    @field_validator("last_name")
    def validate_last_name(cls, v):
        _check(InputValidator.validate_name(v, "Last name"))
        return InputValidator.sanitize_string(v, InputValidator.MAX_NAME_LENGTH)

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        _check(InputValidator.validate_email(v))
        return InputValidator.normalize_email(v)

    @field_validator("password")
    def validate_password(cls, v):
        _check(InputValidator.validate_password(v))
        return v

    @field_validator("birthday")
    def validate_birthday(cls, v):
        _check(InputValidator.validate_birthday(v))
        return v or None

    @field_validator("bio")
    def sanitize_bio(cls, v):
        return InputValidator.sanitize_string(v, InputValidator.MAX_BIO_LENGTH)

    @field_validator("location")
    def sanitize_location(cls, v):
        return InputValidator.sanitize_string(v, InputValidator.MAX_LOCATION_LENGTH)


class StatusUpdateRequest(CustomBaseModel):
    """Admin moderation: new account status."""
    status: UserStatus = Field(..., description="active, inactive, suspended or pending")


class UserUpdateRequest(CustomBaseModel):
    """
    Partial profile update. Only the fields present in the body are applied.

    role and status are honored only when the caller is an admin; for anyone
    else they are dropped by the service, not rejected.
    """
    username: Optional[str] = None
    first_name: Optional[str] = Field(None, validation_alias=AliasChoices("first_name", "firstName"))
    last_name: Optional[str] = Field(None, validation_alias=AliasChoices("last_name", "lastName"))
    bio: Optional[str] = None
    location: Optional[str] = None
    cooking_level: Optional[CookingLevel] = Field(
        None,
        validation_alias=AliasChoices("cooking_level", "cookingLevel"),
    )
    birthday: Optional[str] = Field(None, description="YYYY-MM-DD; empty string clears it")
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None

    @field_validator("username")
    def validate_username(cls, v):
        _check(InputValidator.validate_username(v))
        return v.strip()

    @field_validator("first_name")
    def validate_first_name(cls, v):
        _check(InputValidator.validate_name(v, "First name"))
        return InputValidator.sanitize_string(v, InputValidator.MAX_NAME_LENGTH)

    @field_validator("last_name")
    def validate_last_name(cls, v):
        _check(InputValidator.validate_name(v, "Last name"))
        return InputValidator.sanitize_string(v, InputValidator.MAX_NAME_LENGTH)

    @field_validator("birthday")
    def validate_birthday(cls, v):
        _check(InputValidator.validate_birthday(v))
        return v or None

    @field_validator("bio")
    def sanitize_bio(cls, v):
        return InputValidator.sanitize_string(v, InputValidator.MAX_BIO_LENGTH)

    @field_validator("location")
    def sanitize_location(cls, v):
        return InputValidator.sanitize_string(v, InputValidator.MAX_LOCATION_LENGTH)

    def changes(self) -> dict:
        """Fields the client actually sent, as storage values."""
        return self.model_dump(exclude_unset=True)
