# recipe_api/shared/middleware/csrf_middleware.py

"""
Proteção CSRF (double-submit cookie) e limite de tamanho do corpo.

Runs as a pure ASGI middleware ahead of routing, so rejected requests never
reach a dependency, a handler or the request body.
"""

import hmac
import logging
from typing import Any, Dict, Iterable, Optional, Pattern, Sequence

import regex
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from recipe_api.adapters.outbound.security.cookies import CSRF_COOKIE
from recipe_api.domain.exceptions import CsrfRejected, DomainException, PayloadTooLarge
from recipe_api.shared.utils.responses import error_response

logger = logging.getLogger(__name__)

STATE_CHANGING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def compile_patterns(patterns: Iterable[str]) -> Sequence[Pattern]:
    return [regex.compile(p) for p in patterns]


def is_csrf_exempt(path: str, exempt_paths: Iterable[str], exempt_patterns: Iterable[Pattern] = ()) -> bool:
    """Exact path match, or any exempt pattern matching the whole path."""
    normalized = path.rstrip("/") or "/"
    if normalized in {p.rstrip("/") or "/" for p in exempt_paths}:
        return True
    return any(pattern.fullmatch(normalized) for pattern in exempt_patterns)


def csrf_tokens_match(cookie_token: Optional[str], header_token: Optional[str]) -> bool:
    """Both present, non-empty and equal (constant-time comparison)."""
    if not cookie_token or not header_token:
        return False
    return hmac.compare_digest(cookie_token.encode("utf-8"), header_token.encode("utf-8"))


class CSRFProtectionMiddleware:
    """
    Gate for state-changing requests (POST/PUT/PATCH/DELETE).

    1. Content-Length above max_body_bytes -> 413, before anything else.
       Bodies without a Content-Length are counted while streamed.
    2. Unless the path is exempt, the ko_csrf cookie must equal the CSRF
       header -> otherwise 403 CSRF_TOKEN_INVALID.
    """

    def __init__(
            self,
            app: ASGIApp,
            header_name: str = "X-CSRF-Token",
            exempt_paths: Iterable[str] = (),
            exempt_patterns: Iterable[str] = (),
            max_body_bytes: int = 1048576,
            cookie_name: str = CSRF_COOKIE,
    ):
        self.app = app
        self.header_name = header_name
        self.exempt_paths = list(exempt_paths)
        self.exempt_patterns = compile_patterns(exempt_patterns)
        self.max_body_bytes = max_body_bytes
        self.cookie_name = cookie_name

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] not in STATE_CHANGING_METHODS:
            await self.app(scope, receive, send)
            return

        conn = HTTPConnection(scope)
        path = scope["path"]

        declared_length = _content_length(conn.headers.get("content-length"))
        if declared_length is not None and declared_length > self.max_body_bytes:
            logger.warning(
                f"Payload too large: {scope['method']} {path} "
                f"content-length={declared_length} max={self.max_body_bytes}"
            )
            await self._reject(PayloadTooLarge(), scope, receive, send)
            return

        if not is_csrf_exempt(path, self.exempt_paths, self.exempt_patterns):
            cookie_token = conn.cookies.get(self.cookie_name)
            header_token = conn.headers.get(self.header_name)
            if not csrf_tokens_match(cookie_token, header_token):
                # Nunca logar os valores dos tokens
                logger.warning(
                    f"CSRF validation failed: {scope['method']} {path} "
                    f"(cookie {'present' if cookie_token else 'missing'}, "
                    f"header {'present' if header_token else 'missing'})"
                )
                await self._reject(CsrfRejected(), scope, receive, send)
                return

        if declared_length is None:
            receive = self._limited_receive(receive)

        await self.app(scope, receive, send)

    def _limited_receive(self, receive: Receive) -> Receive:
        received = 0

        async def wrapped() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    raise PayloadTooLarge()
            return message

        return wrapped

    @staticmethod
    async def _reject(exc: DomainException, scope: Scope, receive: Receive, send: Send) -> None:
        response = error_response(exc.internal_code, exc.message, status_code=exc.status_code)
        await response(scope, receive, send)


def _content_length(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def csrf_settings(settings: Any) -> Dict[str, Any]:
    """Middleware kwargs from application settings."""
    return {
        "header_name": settings.CSRF_HEADER_NAME,
        "exempt_paths": settings.csrf_exempt_paths,
        "exempt_patterns": settings.csrf_exempt_patterns,
        "max_body_bytes": settings.MAX_REQUEST_BODY_BYTES,
    }
