"""
Password derivation: unbiased byte-to-character sampling with a bounded
category-coverage retry loop.

The result is a pure function of (seed, settings): the first candidate is
always the same, and retries continue the same expander counter sequence.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from rdmpass.security_limits import DEFAULT_MAX_COVERAGE_ATTEMPTS, MAX_ALPHABET_SIZE
from rdmpass.services.charsets import Alphabet, GenerationSettings, build_alphabet, validate_length
from rdmpass.errors import CoverageUnsatisfiable, InvalidSettings
from rdmpass.utils.crypto import EntropyExpander

logger = logging.getLogger("rdmpass.generator")


@dataclass(frozen=True)
class DerivationResult:
    """Password plus non-secret bookkeeping about how it was produced"""
    password: str
    alphabet_size: int
    attempts: int
    bytes_consumed: int


def rejection_limit(alphabet_size: int) -> int:
    """Largest multiple of alphabet_size not exceeding 256"""
    if not 1 <= alphabet_size <= MAX_ALPHABET_SIZE:
        raise InvalidSettings(f"Alphabet size must be between 1 and {MAX_ALPHABET_SIZE}")
    return 256 - (256 % alphabet_size)


def sample_characters(stream: Iterator[int], alphabet: Alphabet, length: int) -> str:
    """
    Draw length characters from alphabet, one accepted byte per character.

    Bytes at or above the rejection limit are discarded so every index is
    equally likely.
    """
    size = len(alphabet)
    limit = rejection_limit(size)
    chars = []
    while len(chars) < length:
        value = next(stream)
        if value >= limit:
            continue
        chars.append(alphabet[value % size])
    return "".join(chars)


def derive(
    seed: bytes,
    settings: GenerationSettings,
    max_attempts: Optional[int] = None,
) -> DerivationResult:
    """
    Derive a password from a 32-byte seed.

    Raises:
      InvalidSeed: seed is not 32 bytes.
      InvalidSettings: bad length, empty alphabet, or categories that can
        never all fit in the requested length.
      CoverageUnsatisfiable: require_each_selected could not be met within
        max_attempts candidates.
    """
    if max_attempts is None:
        max_attempts = DEFAULT_MAX_COVERAGE_ATTEMPTS
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    length = validate_length(settings.length)
    expander = EntropyExpander(seed)
    alphabet = build_alphabet(settings)

    if settings.require_each_selected:
        needed = alphabet.minimum_cover_size()
        if needed > length:
            raise InvalidSettings(
                f"length {length} is too short to include all {len(alphabet.required)} selected categories"
            )

    stream = expander.iter_bytes()
    missing = ()
    for attempt in range(1, max_attempts + 1):
        candidate = sample_characters(stream, alphabet, length)
        if not settings.require_each_selected:
            return DerivationResult(candidate, len(alphabet), attempt, expander.bytes_consumed)

        missing = alphabet.missing_categories(candidate)
        if not missing:
            if attempt > 1:
                logger.debug(f"Coverage satisfied after {attempt} attempts")
            return DerivationResult(candidate, len(alphabet), attempt, expander.bytes_consumed)

    raise CoverageUnsatisfiable(max_attempts, [c.value for c in missing])


def derive_password(
    seed: bytes,
    settings: GenerationSettings,
    max_attempts: Optional[int] = None,
) -> str:
    """Convenience wrapper returning only the password string"""
    return derive(seed, settings, max_attempts=max_attempts).password
