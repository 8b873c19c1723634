# rdmpass API Routers
from rdmpass.routers import health, generate

__all__ = ["health", "generate"]
