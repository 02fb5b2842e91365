# recipe_api/shared/utils/input_validation.py

import re
from typing import Optional, Tuple

import regex


class InputValidator:
    """
    Validação e sanitização de entradas de usuário.

    Each validate_* method returns (is_valid, error_message) and never raises,
    so it can back both Pydantic validators and ad-hoc checks.
    """

    # ─────────────────────────────────────────────────────────────
    # Constantes de limites
    MAX_NAME_LENGTH = 50
    MIN_PASSWORD_LENGTH = 4
    MAX_PASSWORD_LENGTH = 72  # Limite do bcrypt, em bytes UTF-8
    MAX_EMAIL_LENGTH = 255
    MAX_BIO_LENGTH = 500
    MAX_LOCATION_LENGTH = 100

    # ─────────────────────────────────────────────────────────────
    # Expressões Regulares

    # Nome: qualquer letra Unicode, marcas de acento, espaço, ponto, hífen e apóstrofo
    NAME_PATTERN = regex.compile(r"^[\p{L}\p{M} .'-]+$", flags=regex.UNICODE)

    # Username: 2 a 30 caracteres, letras ASCII, números e underscore
    USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{2,30}$")

    # E-mail: permissivo de propósito; o formato fino fica com o EmailStr
    EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

    HTML_TAG_PATTERN = re.compile(r"<[^>]*>")

    # Data de aniversário no formato ISO (YYYY-MM-DD)
    BIRTHDAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

    # ─────────────────────────────────────────────────────────────

    @classmethod
    def sanitize_string(cls, value: Optional[str], max_length: int = 5000) -> str:
        """Strip HTML tags and surrounding whitespace, then truncate."""
        if not isinstance(value, str):
            return ""
        return cls.HTML_TAG_PATTERN.sub("", value).strip()[:max_length]

    @classmethod
    def normalize_email(cls, email: str) -> str:
        return email.strip().lower()

    @classmethod
    def validate_email(cls, email: Optional[str]) -> Tuple[bool, Optional[str]]:
        if not isinstance(email, str) or not email.strip():
            return False, "Email is required"

        if len(email) > cls.MAX_EMAIL_LENGTH:
            return False, f"Email must be at most {cls.MAX_EMAIL_LENGTH} characters"

        if not cls.EMAIL_PATTERN.match(cls.normalize_email(email)):
            return False, "Invalid email format"

        return True, None

    @classmethod
    def validate_username(cls, username: Optional[str]) -> Tuple[bool, Optional[str]]:
        if not isinstance(username, str):
            return False, "Username is required"

        if not cls.USERNAME_PATTERN.match(username.strip()):
            return False, "Username must be 2-30 characters (letters, numbers, underscores)"

        return True, None

    @classmethod
    def validate_password(cls, password: Optional[str]) -> Tuple[bool, Optional[str]]:
        if not isinstance(password, str) or not password:
            return False, "Password is required"

        if len(password) < cls.MIN_PASSWORD_LENGTH:
            return False, f"Password must be at least {cls.MIN_PASSWORD_LENGTH} characters"

        if len(password.encode("utf-8")) > cls.MAX_PASSWORD_LENGTH:
            return False, f"Password must be at most {cls.MAX_PASSWORD_LENGTH} bytes"

        return True, None

    @classmethod
    def validate_name(cls, name: Optional[str], field_label: str = "Name") -> Tuple[bool, Optional[str]]:
        if not isinstance(name, str) or not name.strip():
            return False, f"{field_label} is required"

        cleaned = cls.sanitize_string(name, cls.MAX_NAME_LENGTH)
        if not cleaned:
            return False, f"{field_label} is required"

        if not cls.NAME_PATTERN.match(cleaned):
            return False, f"{field_label} contains invalid characters"

        return True, None

    @classmethod
    def validate_birthday(cls, birthday: Optional[str]) -> Tuple[bool, Optional[str]]:
        if birthday is None or birthday == "":
            return True, None

        if not isinstance(birthday, str) or not cls.BIRTHDAY_PATTERN.match(birthday):
            return False, "Birthday must use the YYYY-MM-DD format"

        return True, None
