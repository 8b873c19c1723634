"""
Security middleware for request filtering
"""

import random

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from rdmpass.config import settings
from rdmpass.middleware import rate_limit
from rdmpass.logging_config import log_oversized_body, log_rate_limited
from rdmpass.utils.network import get_client_ip


class SecurityMiddleware(BaseHTTPMiddleware):
    """
    Middleware that runs before route handlers
    - Caps request body size
    - Applies per-IP rate limiting
    - Adds security headers
    """

    # Paths that skip rate limiting
    BYPASS_PATHS = {"/health", "/health/ready"}

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in self.BYPASS_PATHS:
            response = await call_next(request)
            return self._add_security_headers(response)

        client_ip = get_client_ip(request)

        if request.method == "POST":
            rejected = self._check_body_size(request, client_ip)
            if rejected is not None:
                return self._add_security_headers(rejected)

        limiter = rate_limit.rate_limiter
        if not limiter.is_allowed(client_ip):
            log_rate_limited(client_ip)
            return self._add_security_headers(JSONResponse(
                status_code=429,
                content={"error": "Too many requests"}
            ))

        # Occasionally drop idle buckets
        if random.random() < 0.01:
            limiter.cleanup_old_entries()

        response = await call_next(request)
        return self._add_security_headers(response)

    def _check_body_size(self, request: Request, client_ip: str):
        """Return an error response when the declared body is missing or too large"""
        declared = request.headers.get("Content-Length")
        if declared is None:
            return JSONResponse(
                status_code=411,
                content={"error": "Content-Length header is required"}
            )
        try:
            size = int(declared)
        except ValueError:
            return JSONResponse(
                status_code=400,
                content={"error": "Invalid Content-Length header"}
            )
        if size > settings.MAX_REQUEST_BODY_BYTES:
            log_oversized_body(client_ip, size)
            return JSONResponse(
                status_code=413,
                content={"error": "Request body too large"}
            )
        return None

    def _add_security_headers(self, response: Response) -> Response:
        """Add security headers to response"""
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Content-Security-Policy"] = "default-src 'self'"
        return response
