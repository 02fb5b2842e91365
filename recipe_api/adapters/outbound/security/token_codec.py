# recipe_api/adapters/outbound/security/token_codec.py

"""
Signed session tokens (JWT).

Access and refresh tokens both carry the user's token_version snapshot.
Verification never raises for bad input: callers get None and treat it as
"no session".
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from recipe_api.domain.exceptions import ConfigurationFatal

logger = logging.getLogger(__name__)

MIN_SECRET_LENGTH = 32

ACCESS = "access"
REFRESH = "refresh"
TOKEN_KINDS = (ACCESS, REFRESH)


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims of a session token."""
    subject: str
    kind: str
    token_version: int
    expires_at: datetime
    role: Optional[str] = None
    token_id: Optional[str] = None


class TokenCodec:
    """
    Issues and verifies HS256-signed access and refresh tokens.

    Args:
        secret: Signing secret (at least 32 characters)
        algorithm: JOSE algorithm name
        access_ttl: Lifetime of access tokens
        refresh_ttl: Lifetime of refresh tokens

    Raises:
        ConfigurationFatal: If the secret is missing or too short
    """

    def __init__(
            self,
            secret: Optional[str],
            algorithm: str = "HS256",
            access_ttl: timedelta = timedelta(minutes=15),
            refresh_ttl: timedelta = timedelta(days=7),
    ):
        if not secret or len(secret) < MIN_SECRET_LENGTH:
            raise ConfigurationFatal(
                f"JWT_SECRET must be set and at least {MIN_SECRET_LENGTH} characters"
            )
        self._secret = secret
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    # ─────────────────────────────────────────────────────────────
    # Issue

    def issue_access_token(self, user: Any) -> str:
        """Access token: subject, role, kind and token_version."""
        return self._encode(
            {
                "sub": str(user.id),
                "role": _enum_value(user.role),
                "type": ACCESS,
                "token_version": int(user.token_version or 0),
            },
            self.access_ttl,
        )

    def issue_refresh_token(self, user: Any) -> str:
        """Refresh token: subject, kind and token_version (no role)."""
        return self._encode(
            {
                "sub": str(user.id),
                "type": REFRESH,
                "token_version": int(user.token_version or 0),
            },
            self.refresh_ttl,
        )

    def _encode(self, claims: Dict[str, Any], ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "jti": str(uuid.uuid4()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self.algorithm)
        logger.debug(f"{claims['type'].capitalize()} token issued for subject={claims['sub']}")
        return token

    # ─────────────────────────────────────────────────────────────
    # Verify

    def verify(self, token: Any, expected_kind: Optional[str] = None) -> Optional[TokenClaims]:
        """
        Check signature, expiry and claim shape.

        Args:
            token: Raw token string (anything else is rejected)
            expected_kind: When given, tokens of another kind are rejected

        Returns:
            TokenClaims, or None if the token is not usable for any reason
        """
        if not isinstance(token, str) or not token:
            return None

        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except (JWTError, ValueError, TypeError) as e:
            logger.debug(f"Token rejected: {e.__class__.__name__}")
            return None

        claims = _claims_from_payload(payload)
        if claims is None:
            logger.debug("Token rejected: malformed claims")
            return None

        if expected_kind is not None and claims.kind != expected_kind:
            logger.debug(f"Token rejected: expected {expected_kind}, got {claims.kind}")
            return None

        return claims


def _claims_from_payload(payload: Dict[str, Any]) -> Optional[TokenClaims]:
    subject = payload.get("sub")
    kind = payload.get("type")
    version = payload.get("token_version")
    exp = payload.get("exp")
    role = payload.get("role")

    if not isinstance(subject, str) or not subject:
        return None
    if kind not in TOKEN_KINDS:
        return None
    # bool é subclasse de int
    if not isinstance(version, int) or isinstance(version, bool):
        return None
    if not isinstance(exp, (int, float)):
        return None
    if role is not None and not isinstance(role, str):
        return None

    return TokenClaims(
        subject=subject,
        kind=kind,
        token_version=version,
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        role=role,
        token_id=payload.get("jti"),
    )


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)
