"""
Motion entropy collection and seed reduction.

A collector owns one sample buffer per collection session and moves
through Idle -> Collecting -> SeedReady. The transition to SeedReady fires
exactly once, when the buffer reaches the required number of samples; the
raw samples are dropped as soon as the seed is computed.
"""

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable, List, Optional

from rdmpass.security_limits import (
    DEFAULT_REQUIRED_MOVES,
    MAX_REQUIRED_MOVES,
    MIN_REQUIRED_MOVES,
)
from rdmpass.errors import CollectorStateError, InvalidSample
from rdmpass.utils.crypto import sha256_digest

logger = logging.getLogger("rdmpass.collector")

_TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class MotionSample:
    """Cursor position and monotonic timestamp"""
    x: float
    y: float
    t: float


def format_coordinate(value: float) -> str:
    """
    Format a value with two fractional digits, rounding halves away from zero.

    Matches the browser client's Number.prototype.toFixed(2), so the same
    movements always reduce to the same seed on either side.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidSample(f"Sample values must be numbers, got {type(value).__name__}")
    if not math.isfinite(value):
        raise InvalidSample("Sample values must be finite")
    if value == 0:
        # -0.0 formats as "0.00"; small negatives keep their sign ("-0.00").
        value = 0.0
    return str(Decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def serialize_samples(samples: Iterable[MotionSample]) -> bytes:
    """Serialize samples in order as 'x,y,t;' records"""
    parts = []
    for sample in samples:
        parts.append(
            f"{format_coordinate(sample.x)},{format_coordinate(sample.y)},{format_coordinate(sample.t)};"
        )
    return "".join(parts).encode("utf-8")


def reduce_samples(samples: Iterable[MotionSample]) -> bytes:
    """Fold an ordered sequence of samples into a 32-byte seed"""
    return sha256_digest(serialize_samples(samples))


class CollectorState(str, Enum):
    IDLE = "idle"
    COLLECTING = "collecting"
    SEED_READY = "seed_ready"


class MotionCollector:
    """Single-owner state machine for one entropy collection cycle at a time"""

    def __init__(self, required_moves: int = DEFAULT_REQUIRED_MOVES):
        if not MIN_REQUIRED_MOVES <= required_moves <= MAX_REQUIRED_MOVES:
            raise ValueError(
                f"required_moves must be between {MIN_REQUIRED_MOVES} and {MAX_REQUIRED_MOVES}"
            )
        self.required_moves = required_moves
        self.state = CollectorState.IDLE
        self._samples: List[MotionSample] = []
        self._seed: Optional[bytes] = None

    @property
    def count(self) -> int:
        if self.state == CollectorState.SEED_READY:
            return self.required_moves
        return len(self._samples)

    @property
    def progress(self) -> float:
        return min(1.0, self.count / self.required_moves)

    def start(self) -> None:
        """Begin a new session; any previous seed or samples are discarded"""
        if self.state == CollectorState.COLLECTING:
            raise CollectorStateError("Collection already in progress")
        self._samples = []
        self._seed = None
        self.state = CollectorState.COLLECTING

    def record(self, x: float, y: float, t: float) -> CollectorState:
        """
        Record one movement.

        Samples arriving after the threshold are ignored. A sample that
        cannot be serialized aborts the session back to Idle.
        """
        if self.state == CollectorState.SEED_READY:
            return self.state
        if self.state != CollectorState.COLLECTING:
            raise CollectorStateError("Collection has not been started")

        self._samples.append(MotionSample(x, y, t))
        if len(self._samples) >= self.required_moves:
            self._complete()
        return self.state

    def _complete(self) -> None:
        samples, self._samples = self._samples, []
        try:
            seed = reduce_samples(samples)
        except InvalidSample:
            self.state = CollectorState.IDLE
            logger.warning("Entropy collection aborted: malformed sample")
            raise
        self._seed = seed
        self.state = CollectorState.SEED_READY
        logger.info(f"Entropy collection complete ({self.required_moves} moves)")

    def take_seed(self) -> bytes:
        """Hand the seed over exactly once; the collector returns to Idle"""
        if self.state != CollectorState.SEED_READY or self._seed is None:
            raise CollectorStateError("No seed is ready")
        seed, self._seed = self._seed, None
        self.state = CollectorState.IDLE
        return seed

    def reset(self) -> None:
        self._samples = []
        self._seed = None
        self.state = CollectorState.IDLE
