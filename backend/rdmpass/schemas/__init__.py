# rdmpass Pydantic Schemas
from rdmpass.schemas.generate import (
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    PasswordSettings,
)

__all__ = [
    "ErrorResponse",
    "GenerateRequest",
    "GenerateResponse",
    "PasswordSettings",
]
