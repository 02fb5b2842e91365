# recipe_api/adapters/outbound/security/passwords.py

import logging

import bcrypt
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

# bcrypt só considera os primeiros 72 bytes; nada maior é aceito
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """bcrypt hashing; the work runs in the threadpool to keep the event loop free."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash_password_sync(self, password: str) -> str:
        """
        Raises:
            ValueError: If the password is longer than 72 bytes in UTF-8
        """
        password_bytes = password.encode("utf-8")
        if len(password_bytes) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
        hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    @staticmethod
    def verify_password_sync(plain_password: str, hashed_password: str) -> bool:
        password_bytes = plain_password.encode("utf-8")
        # Nenhum hash armazenado pode ter vindo de uma senha maior
        if len(password_bytes) > BCRYPT_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False

    async def hash_password(self, password: str) -> str:
        return await run_in_threadpool(self.hash_password_sync, password)

    async def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return await run_in_threadpool(self.verify_password_sync, plain_password, hashed_password)
