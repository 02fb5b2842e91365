# recipe_api/test/unit/test_csrf_middleware.py

# Para Rodar o Script:
# pytest recipe_api/test/unit/test_csrf_middleware.py -v

import pytest
import pytest_asyncio
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from recipe_api.shared.middleware.csrf_middleware import (
    CSRFProtectionMiddleware,
    compile_patterns,
    csrf_tokens_match,
    is_csrf_exempt,
)
from recipe_api.shared.middleware.error_handler_middleware import register_exception_handlers

EXEMPT = ["/api/v1/auth/login", "/api/v1/auth/signup", "/api/v1/auth/refresh", "/api/v1/auth/guest-session"]
PATTERNS = [r"^/api/v1/recipes/[^/]+/view$"]
MAX_BODY = 64


def build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def echo(request: Request):
        body = await request.body()
        return {"path": request.url.path, "size": len(body)}

    app.add_middleware(
        CSRFProtectionMiddleware,
        exempt_paths=EXEMPT,
        exempt_patterns=PATTERNS,
        max_body_bytes=MAX_BODY,
    )
    return app


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=build_app()), base_url="http://testserver") as c:
        yield c


class TestCsrfGate:

    async def test_missing_tokens_rejected(self, client):
        response = await client.post("/api/v1/recipes", json={})

        assert response.status_code == 403
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "CSRF_TOKEN_INVALID"

    async def test_header_without_cookie_rejected(self, client):
        response = await client.delete("/api/v1/reviews/1", headers={"X-CSRF-Token": "abc"})
        assert response.status_code == 403

    async def test_mismatch_rejected(self, client):
        response = await client.patch(
            "/api/v1/users/1",
            json={},
            headers={"Cookie": "ko_csrf=cookie-value", "X-CSRF-Token": "other-value"},
        )
        assert response.status_code == 403

    async def test_matching_tokens_pass(self, client):
        response = await client.put(
            "/api/v1/users/1",
            json={},
            headers={"Cookie": "ko_csrf=same-value", "X-CSRF-Token": "same-value"},
        )
        assert response.status_code == 200

    @pytest.mark.parametrize("path", EXEMPT + ["/api/v1/recipes/r-1/view", "/api/v1/auth/login/"])
    async def test_exempt_paths_pass_without_tokens(self, client, path):
        response = await client.post(path, json={})
        assert response.status_code == 200

    async def test_pattern_must_match_whole_path(self, client):
        response = await client.post("/api/v1/recipes/r-1/view/extra", json={})
        assert response.status_code == 403

    async def test_safe_methods_are_not_checked(self, client):
        response = await client.get("/api/v1/auth/me")
        assert response.status_code == 200


class TestBodySizeGuard:

    async def test_oversized_declared_body_rejected_before_csrf(self, client):
        response = await client.post("/api/v1/recipes", content=b"x" * (MAX_BODY + 1))

        assert response.status_code == 413
        assert response.json()["error"]["code"] == "PAYLOAD_TOO_LARGE"

    async def test_oversized_body_rejected_on_exempt_path(self, client):
        response = await client.post("/api/v1/auth/login", content=b"x" * (MAX_BODY + 1))
        assert response.status_code == 413

    async def test_body_at_limit_accepted(self, client):
        response = await client.post("/api/v1/auth/login", content=b"x" * MAX_BODY)
        assert response.status_code == 200
        assert response.json()["size"] == MAX_BODY

    async def test_oversized_streamed_body_rejected(self, client):
        async def chunks():
            for _ in range(4):
                yield b"x" * 32

        response = await client.post("/api/v1/auth/login", content=chunks())
        assert response.status_code == 413

    async def test_oversized_get_is_not_checked(self, client):
        response = await client.request("GET", "/api/v1/anything", content=b"x" * (MAX_BODY + 1))
        assert response.status_code == 200


class TestHelpers:

    def test_tokens_match(self):
        assert csrf_tokens_match("abc", "abc")
        assert not csrf_tokens_match("abc", "abd")
        assert not csrf_tokens_match("", "")
        assert not csrf_tokens_match(None, "abc")
        assert not csrf_tokens_match("abc", None)

    def test_is_csrf_exempt(self):
        patterns = compile_patterns(PATTERNS)
        assert is_csrf_exempt("/api/v1/auth/signup", EXEMPT, patterns)
        assert is_csrf_exempt("/api/v1/recipes/42/view", EXEMPT, patterns)
        assert not is_csrf_exempt("/api/v1/auth/logout", EXEMPT, patterns)
        assert not is_csrf_exempt("/api/v1/recipes/42", EXEMPT, patterns)
