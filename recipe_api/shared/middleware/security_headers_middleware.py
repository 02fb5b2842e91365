# recipe_api/shared/middleware/security_headers_middleware.py

"""
Cabeçalhos de segurança e correlation id.

Pure ASGI middleware: reuses the caller's X-Correlation-ID when it looks
sane, otherwise generates one, exposes it to the log filter through a
ContextVar and echoes it on the response together with the security headers.
"""

import re
import uuid
from typing import Any, Dict

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

from recipe_api.shared.utils.logging_config import correlation_id_var

CORRELATION_HEADER = "X-Correlation-ID"
CORRELATION_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,128}$")

SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "same-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class SecurityHeadersMiddleware:

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        incoming = HTTPConnection(scope).headers.get(CORRELATION_HEADER)
        correlation_id = incoming if incoming and CORRELATION_ID_PATTERN.match(incoming) else uuid.uuid4().hex
        token = correlation_id_var.set(correlation_id)
        scope.setdefault("state", {})["correlation_id"] = correlation_id

        async def send_with_headers(message: Dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for name, value in SECURITY_HEADERS.items():
                    if name not in headers:
                        headers[name] = value
                headers[CORRELATION_HEADER] = correlation_id
            await send(message)

        try:
            await self.app(scope, receive, send_with_headers)
        finally:
            correlation_id_var.reset(token)
