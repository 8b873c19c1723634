# rdmpass Middleware
from rdmpass.middleware.rate_limit import RateLimiter, RateLimitConfig, rate_limiter
from rdmpass.middleware.security import SecurityMiddleware

__all__ = ["SecurityMiddleware", "RateLimiter", "RateLimitConfig", "rate_limiter"]
