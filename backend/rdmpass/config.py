"""
Service configuration loaded from environment variables (or .env)
"""

from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path

from rdmpass.security_limits import (
    DEFAULT_MAX_COVERAGE_ATTEMPTS,
    MAX_REQUEST_BODY_BYTES,
)


def _find_env_file() -> str:
    """Find .env file in current or project root directory"""
    if Path(".env").exists():
        return ".env"
    root_env = Path(__file__).parent.parent.parent / ".env"
    if root_env.exists():
        return str(root_env)
    return ".env"


# Smallest body cap that still admits a maximal valid request
# (44-char entropy, 256 custom characters escaped as \uXXXX, flags).
MIN_REQUEST_BODY_BYTES = 2048

ALLOWED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings from environment"""

    # Application
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 8000
    FRONTEND_URL: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Derivation limits
    MAX_REQUEST_BODY_BYTES: int = MAX_REQUEST_BODY_BYTES
    MAX_COVERAGE_ATTEMPTS: int = DEFAULT_MAX_COVERAGE_ATTEMPTS
    GENERATE_TIMEOUT_SECONDS: float = 5.0

    # Rate limiting (per client IP)
    RATE_LIMIT_PER_MINUTE: int = 60
    RATE_LIMIT_BURST: int = 10

    # Proxy handling
    TRUST_PROXY_HEADERS: bool = True
    TRUSTED_PROXY_CIDRS_RAW: str = "127.0.0.1/32,::1/128,10.0.0.0/8,172.16.0.0/12,192.168.0.0/16"

    @property
    def trusted_proxy_cidrs(self) -> list[str]:
        raw = self.TRUSTED_PROXY_CIDRS_RAW
        if not raw:
            return []
        return [item.strip() for item in str(raw).split(",") if item.strip()]

    class Config:
        env_file = _find_env_file()
        case_sensitive = True


def validate_service_settings(active_settings: Settings) -> None:
    """Validate settings that bound the derivation work per request."""
    errors = []

    if active_settings.MAX_COVERAGE_ATTEMPTS < 1:
        errors.append("MAX_COVERAGE_ATTEMPTS must be >= 1")

    if active_settings.GENERATE_TIMEOUT_SECONDS <= 0:
        errors.append("GENERATE_TIMEOUT_SECONDS must be > 0")

    if active_settings.MAX_REQUEST_BODY_BYTES < MIN_REQUEST_BODY_BYTES:
        errors.append(f"MAX_REQUEST_BODY_BYTES must be >= {MIN_REQUEST_BODY_BYTES}")

    if active_settings.RATE_LIMIT_PER_MINUTE < 1:
        errors.append("RATE_LIMIT_PER_MINUTE must be >= 1")

    if active_settings.RATE_LIMIT_BURST < 1:
        errors.append("RATE_LIMIT_BURST must be >= 1")

    if active_settings.LOG_LEVEL.upper() not in ALLOWED_LOG_LEVELS:
        allowed = ", ".join(ALLOWED_LOG_LEVELS)
        errors.append(f"LOG_LEVEL must be one of: {allowed}")

    if errors:
        raise ValueError("Invalid service configuration:\n- " + "\n- ".join(errors))


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance"""
    return Settings()


settings = get_settings()
