# recipe_api/shared/utils/rate_limiter.py

"""
Fixed-window rate limiter on top of `limits`.

Counters are keyed by (operation class, client IP). With the default
memory:// storage they live only in this process: several instances behind a
load balancer each enforce their own limits. A fixed window admits up to twice
the nominal rate around a window boundary; that is acceptable for abuse
deterrence.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from limits import RateLimitItem, RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage, storage_from_string
from limits.strategies import FixedWindowRateLimiter
from starlette.requests import Request

logger = logging.getLogger(__name__)

LOOPBACK = "127.0.0.1"


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    retry_after_seconds: Optional[int] = None


class RateLimiter:
    """
    Fixed-window counter per (operation class, client IP).

    The window opens on the first hit of a key and expires `window_seconds`
    later; expired keys are dropped by the storage itself.

    Args:
        window_seconds: Window length (rounded up to whole seconds)
        maxima: Allowed requests per window for each operation class
        storage: `limits` storage; in-memory when omitted
    """

    def __init__(
            self,
            window_seconds: float,
            maxima: Mapping[str, int],
            storage: Optional[Storage] = None,
    ):
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.window_seconds = max(1, math.ceil(window_seconds))
        self.storage = storage or MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self.storage)
        self.items: Dict[str, RateLimitItem] = {
            operation_class: RateLimitItemPerSecond(maximum, self.window_seconds)
            for operation_class, maximum in maxima.items()
        }

    @classmethod
    def from_uri(cls, storage_uri: str, window_seconds: float, maxima: Mapping[str, int]) -> "RateLimiter":
        """Build with a storage URI such as memory:// or redis://host:6379."""
        return cls(window_seconds, maxima, storage=storage_from_string(storage_uri))

    def check(self, operation_class: str, client_ip: str) -> RateLimitDecision:
        """
        Count one request and decide whether it may proceed.

        Raises:
            ValueError: If the operation class has no configured maximum
        """
        try:
            item = self.items[operation_class]
        except KeyError:
            raise ValueError(f"Unknown rate limit class: {operation_class!r}")

        if self._strategy.hit(item, operation_class, client_ip):
            return RateLimitDecision(allowed=True)

        stats = self._strategy.get_window_stats(item, operation_class, client_ip)
        retry_after = max(1, math.ceil(stats.reset_time - time.time()))
        logger.warning(
            f"Rate limit exceeded: class={operation_class} ip={client_ip} "
            f"max={item.amount} retry_after={retry_after}s"
        )
        return RateLimitDecision(allowed=False, retry_after_seconds=retry_after)

    def reset(self) -> None:
        self.storage.reset()


def client_ip(request: Request) -> str:
    """
    Client address as reported by the reverse proxy.

    Takes the first hop of X-Forwarded-For, then X-Real-IP, then falls back
    to loopback. These headers are only trustworthy behind a proxy that
    overwrites them; a client talking to the app directly can spoof them.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.headers.get("x-real-ip") or LOOPBACK
