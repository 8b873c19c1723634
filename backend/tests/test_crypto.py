import hashlib
import hmac

import pytest

from rdmpass.errors import InvalidSeed
from rdmpass.utils.crypto import (
    EntropyExpander,
    encode_counter,
    expand_entropy,
    sha256_digest,
    validate_seed,
)

SEED = bytes(range(32))


def test_block_zero_matches_hmac_sha256_over_single_counter_byte(zero_seed):
    expected = bytes.fromhex(
        "6620b31f2924b8c01547745f41825d322336f83ebb13d723678789d554d8a3ef"
    )
    assert EntropyExpander(zero_seed).block(0) == expected


def test_expand_entropy_concatenates_blocks_and_truncates(zero_seed):
    out = expand_entropy(zero_seed, 40)
    assert len(out) == 40
    assert out[:32] == hmac.new(zero_seed, b"\x00", hashlib.sha256).digest()
    assert out[32:] == hmac.new(zero_seed, b"\x01", hashlib.sha256).digest()[:8]


@pytest.mark.parametrize("count", [0, 1, 31, 32, 33, 100])
def test_expand_entropy_returns_exact_length(count):
    assert len(expand_entropy(SEED, count)) == count


def test_longer_expansion_extends_shorter_one():
    short = expand_entropy(SEED, 50)
    long = expand_entropy(SEED, 500)
    assert long[:50] == short


def test_streamed_bytes_match_block_expansion():
    expander = EntropyExpander(SEED)
    stream = expander.iter_bytes()
    streamed = bytes(next(stream) for _ in range(100))

    assert streamed == expand_entropy(SEED, 100)
    assert expander.bytes_consumed == 100
    assert expander.blocks_used == 4


def test_block_is_pure_function_of_seed_and_index():
    first = EntropyExpander(SEED)
    second = EntropyExpander(SEED)
    for _ in range(10):
        first.block(3)
    assert first.block(7) == second.block(7)


def test_counter_encoding_widens_past_255():
    assert encode_counter(0) == b"\x00"
    assert encode_counter(255) == b"\xff"
    assert encode_counter(256) == b"\x01\x00"
    assert encode_counter(70000) == (70000).to_bytes(3, "big")


def test_blocks_past_255_do_not_alias_earlier_blocks():
    expander = EntropyExpander(SEED)
    early = {expander.block(i) for i in range(256)}
    assert expander.block(256) not in early
    assert expander.block(512) not in early
    assert expander.block(256) != expander.block(512)


def test_counter_rejects_negative_index():
    with pytest.raises(ValueError):
        encode_counter(-1)


@pytest.mark.parametrize("seed", [b"", bytes(31), bytes(33), bytes(64)])
def test_wrong_seed_length_is_invalid_seed(seed):
    with pytest.raises(InvalidSeed):
        EntropyExpander(seed)


def test_non_bytes_seed_is_invalid_seed():
    with pytest.raises(InvalidSeed):
        validate_seed("0" * 32)


def test_bytearray_seed_is_accepted():
    assert validate_seed(bytearray(32)) == bytes(32)


def test_sha256_digest_is_raw_32_bytes():
    digest = sha256_digest(b"abc")
    assert len(digest) == 32
    assert digest.hex() == hashlib.sha256(b"abc").hexdigest()


def test_stream_reads_past_block_255_without_repeating():
    expander = EntropyExpander(SEED)
    stream = expander.iter_bytes()
    streamed = bytes(next(stream) for _ in range(257 * 32))

    assert expander.blocks_used == 257
    assert streamed[256 * 32:] == expander.block(256)
    assert streamed[256 * 32:] != streamed[:32]
