# recipe_api/test/unit/test_rate_limiter.py

# Para Rodar o Script:
# pytest recipe_api/test/unit/test_rate_limiter.py -v

import asyncio

import pytest
from starlette.requests import Request

from recipe_api.shared.utils.rate_limiter import RateLimiter, client_ip

MAXIMA = {"auth": 20, "write": 50, "read": 100}


@pytest.fixture
def limiter() -> RateLimiter:
    return RateLimiter(900, MAXIMA)


@pytest.fixture
def short_limiter() -> RateLimiter:
    # Janela de 1000 ms
    return RateLimiter(1.0, {"auth": 2, "write": 2, "read": 2})


def make_request(headers: dict) -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in headers.items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


class TestFixedWindow:

    def test_allows_up_to_maximum_then_denies(self, limiter):
        decisions = [limiter.check("auth", "1.1.1.1") for _ in range(21)]

        assert all(d.allowed for d in decisions[:20])
        assert not decisions[20].allowed
        assert 899 <= decisions[20].retry_after_seconds <= 900

    def test_allowed_decision_has_no_retry_after(self, limiter):
        decision = limiter.check("read", "1.1.1.1")
        assert decision.allowed
        assert decision.retry_after_seconds is None

    def test_retry_after_is_at_least_one_second(self, short_limiter):
        for _ in range(2):
            short_limiter.check("auth", "1.1.1.1")

        decision = short_limiter.check("auth", "1.1.1.1")

        assert not decision.allowed
        assert decision.retry_after_seconds == 1

    async def test_window_resets_after_elapsing(self, short_limiter):
        for _ in range(3):
            short_limiter.check("auth", "1.1.1.1")
        assert not short_limiter.check("auth", "1.1.1.1").allowed

        await asyncio.sleep(1.2)

        assert short_limiter.check("auth", "1.1.1.1").allowed

    async def test_window_opens_at_first_request(self, short_limiter):
        await asyncio.sleep(0.6)
        assert short_limiter.check("auth", "1.1.1.1").allowed
        assert short_limiter.check("auth", "1.1.1.1").allowed

        # Ainda dentro da janela aberta pelo primeiro hit
        await asyncio.sleep(0.5)

        assert not short_limiter.check("auth", "1.1.1.1").allowed

    def test_ips_are_isolated(self, limiter):
        for _ in range(21):
            limiter.check("auth", "1.1.1.1")

        assert limiter.check("auth", "2.2.2.2").allowed

    def test_classes_are_isolated(self, limiter):
        for _ in range(21):
            limiter.check("auth", "1.1.1.1")

        assert limiter.check("write", "1.1.1.1").allowed
        assert limiter.check("read", "1.1.1.1").allowed

    def test_unknown_class_is_a_programming_error(self, limiter):
        with pytest.raises(ValueError):
            limiter.check("upload", "1.1.1.1")

    def test_invalid_window(self):
        with pytest.raises(ValueError):
            RateLimiter(0, MAXIMA)

    def test_reset_clears_counters(self, limiter):
        for _ in range(21):
            limiter.check("auth", "1.1.1.1")

        limiter.reset()

        assert limiter.check("auth", "1.1.1.1").allowed

    def test_limiters_do_not_share_memory_storage(self):
        first = RateLimiter.from_uri("memory://", 900, MAXIMA)
        second = RateLimiter.from_uri("memory://", 900, MAXIMA)
        for _ in range(21):
            first.check("auth", "1.1.1.1")

        assert second.check("auth", "1.1.1.1").allowed


class TestClientIp:

    def test_first_forwarded_hop_wins(self):
        request = make_request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "X-Real-IP": "10.0.0.9"})
        assert client_ip(request) == "203.0.113.7"

    def test_real_ip_fallback(self):
        assert client_ip(make_request({"X-Real-IP": "198.51.100.2"})) == "198.51.100.2"

    def test_loopback_fallback(self):
        assert client_ip(make_request({})) == "127.0.0.1"
