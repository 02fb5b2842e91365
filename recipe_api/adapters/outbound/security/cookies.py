# recipe_api/adapters/outbound/security/cookies.py

"""
Gerenciador dos cookies de sessão.

Writes and clears the three session cookies: access token, refresh token
and the double-submit CSRF token.
"""

import logging
import secrets
from typing import Optional

from fastapi import Request, Response

from recipe_api.adapters.configuration.config import REFRESH_PATH

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "ko_access"
REFRESH_COOKIE = "ko_refresh"
CSRF_COOKIE = "ko_csrf"


class SessionCookieManager:
    """
    Sets and removes session cookies with consistent security attributes.

    - access: HttpOnly, path "/", lives as long as the access token
    - refresh: HttpOnly, path restricted to the refresh endpoint
    - csrf: readable by scripts so the frontend can echo it in a header

    Clearing re-sends each cookie with Max-Age=0 and the same attributes;
    browsers only drop a cookie when name, path and domain match.
    """

    def __init__(
            self,
            access_max_age: int = 900,
            refresh_max_age: int = 604800,
            samesite: str = "lax",
            domain: Optional[str] = None,
            secure_override: Optional[bool] = None,
            refresh_path: str = REFRESH_PATH,
    ):
        self.access_max_age = access_max_age
        self.refresh_max_age = refresh_max_age
        self.samesite = samesite
        self.domain = domain
        self.secure_override = secure_override
        self.refresh_path = refresh_path

    @staticmethod
    def create_csrf_token() -> str:
        """Random value for the double-submit cookie."""
        return secrets.token_urlsafe(32)

    def is_secure(self, request: Optional[Request]) -> bool:
        """
        Secure flag: explicit override first, then the request origin.

        X-Forwarded-Proto is honoured because TLS usually terminates at the
        reverse proxy.
        """
        if self.secure_override is not None:
            return self.secure_override
        if request is None:
            return False
        forwarded_proto = request.headers.get("x-forwarded-proto", "")
        if forwarded_proto.split(",")[0].strip().lower() == "https":
            return True
        return request.url.scheme == "https"

    def issue_session_cookies(
            self,
            response: Response,
            access_token: str,
            refresh_token: str,
            request: Optional[Request] = None,
    ) -> str:
        """
        Set access, refresh and a fresh CSRF cookie.

        Returns:
            The new CSRF token (also sent in the cookie)
        """
        secure = self.is_secure(request)
        csrf_token = self.create_csrf_token()

        self._set(response, ACCESS_COOKIE, access_token, self.access_max_age, "/", True, secure)
        self._set(response, REFRESH_COOKIE, refresh_token, self.refresh_max_age, self.refresh_path, True, secure)
        # Não é HttpOnly: o JavaScript precisa ler para enviar no header
        self._set(response, CSRF_COOKIE, csrf_token, self.refresh_max_age, "/", False, secure)

        return csrf_token

    def clear_session_cookies(self, response: Response, request: Optional[Request] = None) -> None:
        """Expire all three session cookies."""
        secure = self.is_secure(request)

        self._set(response, ACCESS_COOKIE, "", 0, "/", True, secure)
        self._set(response, REFRESH_COOKIE, "", 0, self.refresh_path, True, secure)
        self._set(response, CSRF_COOKIE, "", 0, "/", False, secure)

    def _set(
            self,
            response: Response,
            key: str,
            value: str,
            max_age: int,
            path: str,
            httponly: bool,
            secure: bool,
    ) -> None:
        response.set_cookie(
            key=key,
            value=value,
            max_age=max_age,
            path=path,
            domain=self.domain,
            secure=secure,
            httponly=httponly,
            samesite=self.samesite,
        )
