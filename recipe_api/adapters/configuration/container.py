# recipe_api/adapters/configuration/container.py

"""
Service container.

Everything with process lifetime (token codec, rate-limit counters, cookie
policy, database engine) is built here once and stored on app.state, so
tests get fresh state with every new application.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from recipe_api.adapters.configuration.config import Settings
from recipe_api.adapters.inbound.api.session_guard import SessionGuard
from recipe_api.adapters.outbound.persistence.database import DatabaseSessionManager
from recipe_api.adapters.outbound.security.cookies import SessionCookieManager
from recipe_api.adapters.outbound.security.passwords import PasswordHasher
from recipe_api.adapters.outbound.security.token_codec import TokenCodec
from recipe_api.shared.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    settings: Settings
    codec: TokenCodec
    cookies: SessionCookieManager
    hasher: PasswordHasher
    rate_limiter: RateLimiter
    guard: SessionGuard
    db: Optional[DatabaseSessionManager] = None


def build_services(settings: Settings, with_database: bool = True) -> ServiceContainer:
    """
    Build the process-wide services.

    Raises:
        ConfigurationFatal: If JWT_SECRET is missing or too short
    """
    secret = settings.JWT_SECRET.get_secret_value() if settings.JWT_SECRET else None
    access_ttl = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    refresh_ttl = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)

    codec = TokenCodec(
        secret,
        algorithm=settings.JWT_ALGORITHM,
        access_ttl=access_ttl,
        refresh_ttl=refresh_ttl,
    )

    cookies = SessionCookieManager(
        access_max_age=int(access_ttl.total_seconds()),
        refresh_max_age=int(refresh_ttl.total_seconds()),
        samesite=settings.COOKIE_SAMESITE,
        domain=settings.COOKIE_DOMAIN,
        secure_override=settings.COOKIE_SECURE,
    )

    rate_limiter = RateLimiter.from_uri(
        settings.RATE_LIMIT_STORAGE_URI,
        window_seconds=settings.rate_limit_window_seconds,
        maxima=settings.rate_limit_maxima,
    )

    db = None
    if with_database:
        db = DatabaseSessionManager(
            settings.database_url,
            {"echo": settings.DB_ECHO, "pool_pre_ping": True},
        )

    logger.info(
        f"Services built (environment={settings.ENVIRONMENT}, "
        f"rate limits={settings.rate_limit_maxima} per {settings.rate_limit_window_seconds:.0f}s)"
    )

    return ServiceContainer(
        settings=settings,
        codec=codec,
        cookies=cookies,
        hasher=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        rate_limiter=rate_limiter,
        guard=SessionGuard(codec),
        db=db,
    )
