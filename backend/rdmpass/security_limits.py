"""
Size and range limits shared by the core, the schemas and the middleware.
"""

# Seed / entropy.
SEED_BYTES = 32
HMAC_BLOCK_BYTES = 32

# Password settings.
MIN_PASSWORD_LENGTH = 1
MAX_PASSWORD_LENGTH = 2048
DEFAULT_PASSWORD_LENGTH = 16
MAX_CUSTOM_CHARACTERS = 256

# A single expander byte addresses at most 256 alphabet positions.
MAX_ALPHABET_SIZE = 256

# Coverage retry ceiling when the caller does not supply one.
DEFAULT_MAX_COVERAGE_ATTEMPTS = 1000

# Motion collection.
MIN_REQUIRED_MOVES = 50
MAX_REQUIRED_MOVES = 1000
DEFAULT_REQUIRED_MOVES = 250

# Request body cap, 10 KiB.
MAX_REQUEST_BODY_BYTES = 10 * 1024


def base64_max_length(byte_limit: int) -> int:
    """Return the largest padded base64 string length for byte_limit bytes."""
    return ((byte_limit + 2) // 3) * 4


MAX_ENTROPY_B64_CHARS = base64_max_length(SEED_BYTES)
