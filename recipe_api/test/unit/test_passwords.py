# recipe_api/test/unit/test_passwords.py

# Para Rodar o Script:
# pytest recipe_api/test/unit/test_passwords.py -v

import pytest

from recipe_api.adapters.outbound.security.passwords import PasswordHasher


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


class TestPasswordHasher:

    async def test_hash_and_verify(self, hasher):
        hashed = await hasher.hash_password("abcd")

        assert hashed.startswith("$2")
        assert await hasher.verify_password("abcd", hashed)
        assert not await hasher.verify_password("abce", hashed)

    def test_longer_than_72_bytes_is_rejected(self, hasher):
        with pytest.raises(ValueError):
            hasher.hash_password_sync("x" * 73)

    def test_passwords_sharing_72_bytes_are_not_equal(self, hasher):
        stored = hasher.hash_password_sync("x" * 72)

        assert hasher.verify_password_sync("x" * 72, stored)
        assert not hasher.verify_password_sync("x" * 72 + "tail", stored)

    def test_invalid_stored_hash(self):
        assert not PasswordHasher.verify_password_sync("abcd", "not-a-bcrypt-hash")
