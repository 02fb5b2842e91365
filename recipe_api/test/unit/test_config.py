# recipe_api/test/unit/test_config.py

# Para Rodar o Script:
# pytest recipe_api/test/unit/test_config.py -v

import pytest
from pydantic import ValidationError

from recipe_api.adapters.configuration.config import Settings


def make(**values) -> Settings:
    return Settings(_env_file=None, **values)


class TestDefaults:

    def test_rate_limit_defaults(self):
        s = make()
        assert s.rate_limit_window_seconds == 900
        assert s.rate_limit_maxima == {"auth": 20, "write": 50, "read": 100}

    def test_csrf_defaults(self):
        s = make()
        assert s.CSRF_HEADER_NAME == "X-CSRF-Token"
        assert "/api/v1/auth/login" in s.csrf_exempt_paths
        assert "/api/v1/auth/logout" not in s.csrf_exempt_paths
        assert s.MAX_REQUEST_BODY_BYTES == 1048576


class TestParsing:

    def test_csv_values_are_trimmed(self):
        s = make(ALLOWED_ORIGINS=" http://a.test , ,http://b.test")
        assert s.allowed_origins == ["http://a.test", "http://b.test"]

    def test_log_level_is_normalized(self):
        assert make(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            make(LOG_LEVEL="chatty")

    def test_invalid_samesite(self):
        with pytest.raises(ValidationError):
            make(COOKIE_SAMESITE="sometimes")

    @pytest.mark.parametrize("raw,expected", [
        ("", None),
        ("  ", None),
        ("true", True),
        ("1", True),
        ("false", False),
        (None, None),
    ])
    def test_cookie_secure(self, raw, expected):
        assert make(COOKIE_SECURE=raw).COOKIE_SECURE is expected

    def test_window_must_be_positive(self):
        with pytest.raises(ValidationError):
            make(RATE_LIMIT_WINDOW_MS=0)


class TestDatabaseUrl:

    def test_explicit_url_wins(self):
        assert make(DATABASE_URL="sqlite+aiosqlite:///x.db").database_url == "sqlite+aiosqlite:///x.db"

    def test_assembled_from_parts(self):
        url = make(
            DATABASE_URL=None,
            POSTGRES_USER="chef",
            POSTGRES_PASSWORD="pw",
            POSTGRES_HOST="db",
            POSTGRES_PORT=5433,
            POSTGRES_DB="kitchen",
        ).database_url
        assert url == "postgresql+asyncpg://chef:pw@db:5433/kitchen"


class TestModuleImport:

    def test_importing_config_builds_no_settings(self):
        from recipe_api.adapters.configuration import config

        # Settings só são lidas por create_app / build_services
        assert not hasattr(config, "settings")
