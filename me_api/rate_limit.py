"""Per-client request rate limiting.

One fixed-window counter per client address covers every path, so all
routes draw from the same allowance. Counting happens in middleware and does
not depend on route resolution.

Usage:
    app.state.limiter = RateLimiter.from_settings(settings)
    setup_rate_limiting(app)
"""

import logging
from collections.abc import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter
from slowapi.util import get_remote_address

from me_api.config import Settings
from me_api.errors import RateLimitError

logger = logging.getLogger(__name__)


class RateLimiter:
    """Fixed-window request counter keyed by client address."""

    def __init__(
        self,
        limit: str,
        enabled: bool = True,
        key_func: Callable[[Request], str] = get_remote_address,
    ):
        self.limit = parse(limit)
        self.enabled = enabled
        self.key_func = key_func
        self._strategy = FixedWindowRateLimiter(MemoryStorage())

    @classmethod
    def from_settings(cls, settings: Settings) -> "RateLimiter":
        return cls(settings.rate_limit, enabled=settings.rate_limit_enabled)

    def hit(self, request: Request) -> bool:
        """Count one request; False once the client is over the limit."""
        return self._strategy.hit(self.limit, self.key_func(request))


def setup_rate_limiting(app: FastAPI) -> None:
    """Reject requests over ``app.state.limiter``'s limit with a 429."""

    @app.middleware("http")
    async def limit_requests(request: Request, call_next):
        limiter: RateLimiter = request.app.state.limiter
        if limiter.enabled and not limiter.hit(request):
            error = RateLimitError()
            logger.warning(f"{error.error_type}: {limiter.key_func(request)} ({request.url.path})")
            return JSONResponse(status_code=error.status_code, content=error.to_dict())
        return await call_next(request)
