"""
Logging configuration
Derivation events are logged but never include the seed, samples or password
"""

import logging
import sys
from typing import Set


class SecurityFilter(logging.Filter):
    """Filter that redacts sensitive information"""

    SENSITIVE_KEYS: Set[str] = {
        "password",
        "entropy",
        "seed",
        "secret",
        "token",
        "key",
    }

    def filter(self, record: logging.LogRecord) -> bool:
        if hasattr(record, "msg"):
            msg = str(record.msg).lower()
            for key in self.SENSITIVE_KEYS:
                if key in msg and "=" in str(record.msg):
                    # Likely contains sensitive value assignment
                    record.msg = "[REDACTED - Sensitive data filtered]"
                    record.args = None
                    break
        return True


def setup_logging(level: str = "INFO"):
    """Configure application logging"""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    handler.addFilter(SecurityFilter())

    root = logging.getLogger()
    root.setLevel(level.upper())

    # Clear existing handlers to avoid duplicates
    root.handlers = []
    root.addHandler(handler)

    # Reduce noise from libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# Derivation event logger
generation_logger = logging.getLogger("rdmpass.generation")
security_logger = logging.getLogger("rdmpass.security")


def log_generation_success(ip: str, length: int, alphabet_size: int, attempts: int):
    """Log a completed derivation (no secret material)"""
    generation_logger.info(
        f"Derived {length} characters for {ip} "
        f"(alphabet {alphabet_size}, attempts {attempts})"
    )


def log_generation_failure(ip: str, error: Exception):
    """Log a rejected derivation by error class only"""
    generation_logger.warning(f"Derivation failed for {ip}: {type(error).__name__}")


def log_generation_timeout(ip: str, seconds: float):
    generation_logger.error(f"Derivation for {ip} exceeded {seconds}s")


def log_rate_limited(ip: str):
    """Log rate limit event"""
    security_logger.warning(f"Rate limit exceeded for {ip}")


def log_oversized_body(ip: str, declared: int):
    """Log rejected oversize request body"""
    security_logger.warning(f"Request body of {declared} bytes from {ip} rejected")
