from fastapi import Request
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from pagecast.config.settings import settings
from pagecast.core.exceptions import RateLimitedError

# Fixed window per caller address. General traffic gets `rate_limit` through
# SlowAPIMiddleware; stricter scopes are applied with `rate_limited`.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit],
    enabled=settings.rate_limit_enabled,
)


def rate_limited(limit_value: str, scope: str):
    """Dependency factory counting every request to a route against `scope`.

    List it before authentication so rejected and unauthenticated calls are
    counted too; `@limiter.limit` only sees requests that reach the handler.
    """
    item = parse(limit_value)

    def check_rate_limit(request: Request) -> None:
        if not limiter.enabled:
            return
        if not limiter.limiter.hit(item, scope, get_remote_address(request)):
            raise RateLimitedError(f"Rate limit exceeded: {item}")

    return check_rate_limit


admin_rate_limit = rate_limited(settings.admin_rate_limit, "admin")
settings_rate_limit = rate_limited(settings.settings_rate_limit, "settings")
