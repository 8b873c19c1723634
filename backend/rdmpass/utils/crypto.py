"""
Cryptographic primitives for seed reduction and counter-mode expansion
"""

import hmac
import hashlib
from typing import Iterator

from rdmpass.security_limits import HMAC_BLOCK_BYTES, SEED_BYTES
from rdmpass.errors import InvalidSeed


def sha256_digest(data: bytes) -> bytes:
    """Compute the raw 32-byte SHA-256 digest of data"""
    return hashlib.sha256(data).digest()


def validate_seed(seed: bytes) -> bytes:
    """Return seed as bytes, raising InvalidSeed unless it is exactly 32 bytes"""
    if not isinstance(seed, (bytes, bytearray, memoryview)):
        raise InvalidSeed(f"Seed must be bytes, got {type(seed).__name__}")
    seed = bytes(seed)
    if len(seed) != SEED_BYTES:
        raise InvalidSeed(f"Seed must be exactly {SEED_BYTES} bytes, got {len(seed)}")
    return seed


def encode_counter(index: int) -> bytes:
    """
    Encode a block index for the HMAC message.

    Blocks 0-255 use a single byte. Larger indexes use the minimal
    big-endian encoding, which is at least two bytes long and therefore
    never collides with a single-byte counter.
    """
    if index < 0:
        raise ValueError("Block index must be non-negative")
    if index < 256:
        return bytes([index])
    return index.to_bytes((index.bit_length() + 7) // 8, "big")


class EntropyExpander:
    """
    Deterministic HMAC-SHA256 counter-mode expander.

    Block i is HMAC(seed, counter(i)) and depends only on (seed, i), so
    callers can keep reading past any initial allocation without changing
    bytes already produced.
    """

    def __init__(self, seed: bytes):
        self._seed = validate_seed(seed)
        self._next_block = 0
        self.bytes_consumed = 0

    def block(self, index: int) -> bytes:
        return hmac.new(self._seed, encode_counter(index), hashlib.sha256).digest()

    def iter_bytes(self) -> Iterator[int]:
        """Yield expanded bytes one at a time, continuing the counter sequence"""
        while True:
            data = self.block(self._next_block)
            self._next_block += 1
            for value in data:
                self.bytes_consumed += 1
                yield value

    @property
    def blocks_used(self) -> int:
        return self._next_block


def expand_entropy(seed: bytes, byte_count: int) -> bytes:
    """Produce exactly byte_count pseudo-random bytes from seed"""
    if byte_count < 0:
        raise ValueError("byte_count must be non-negative")
    expander = EntropyExpander(seed)
    blocks = -(-byte_count // HMAC_BLOCK_BYTES)
    out = b"".join(expander.block(i) for i in range(blocks))
    return out[:byte_count]
