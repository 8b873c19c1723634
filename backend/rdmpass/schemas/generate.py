"""
Derivation request/response schemas
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from rdmpass.security_limits import (
    DEFAULT_PASSWORD_LENGTH,
    MAX_CUSTOM_CHARACTERS,
    MAX_ENTROPY_B64_CHARS,
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
)
from rdmpass.services.charsets import Category, GenerationSettings


class PasswordSettings(BaseModel):
    """Generation options as sent by the client (camelCase on the wire)"""
    model_config = ConfigDict(populate_by_name=True)

    length: Optional[int] = Field(default=DEFAULT_PASSWORD_LENGTH)
    include_lowercase: bool = Field(default=False, alias="includeLowercase")
    include_uppercase: bool = Field(default=False, alias="includeUppercase")
    include_numbers: bool = Field(default=False, alias="includeNumbers")
    include_symbols: bool = Field(default=False, alias="includeSymbols")
    include_extended_latin: bool = Field(default=False, alias="includeExtendedLatin")
    custom_characters: Optional[str] = Field(
        default="",
        alias="customCharacters",
        max_length=MAX_CUSTOM_CHARACTERS,
    )
    require_each_selected: bool = Field(default=False, alias="requireEachSelected")

    @field_validator("length", mode="before")
    @classmethod
    def reject_bool_length(cls, v):
        if isinstance(v, bool):
            raise ValueError("length must be an integer")
        return v

    @field_validator("length")
    @classmethod
    def clamp_length(cls, v: Optional[int]) -> int:
        if v is None:
            return DEFAULT_PASSWORD_LENGTH
        return max(MIN_PASSWORD_LENGTH, min(v, MAX_PASSWORD_LENGTH))

    @field_validator("custom_characters")
    @classmethod
    def normalize_custom(cls, v: Optional[str]) -> str:
        return v or ""

    def to_generation_settings(self) -> GenerationSettings:
        """Immutable snapshot handed to the core"""
        flags = (
            (self.include_lowercase, Category.LOWERCASE),
            (self.include_uppercase, Category.UPPERCASE),
            (self.include_numbers, Category.NUMBERS),
            (self.include_symbols, Category.SYMBOLS),
            (self.include_extended_latin, Category.EXTENDED_LATIN),
        )
        return GenerationSettings(
            length=self.length,
            categories=frozenset(category for enabled, category in flags if enabled),
            custom_characters=self.custom_characters,
            require_each_selected=self.require_each_selected,
        )


class GenerateRequest(BaseModel):
    """Seed (base64, 32 bytes once decoded) plus settings"""
    entropy: str = Field(..., min_length=1, max_length=MAX_ENTROPY_B64_CHARS)
    settings: PasswordSettings


class GenerateResponse(BaseModel):
    password: str


class ErrorResponse(BaseModel):
    error: str
