"""
Error taxonomy for password derivation and entropy collection.

Every error is reported to the caller; none of them is ever replaced by a
weaker or default password.
"""


class GenerationError(ValueError):
    """Base class for derivation failures"""


class InvalidSettings(GenerationError):
    """Settings cannot produce a password (empty alphabet, impossible coverage, bad length)"""


class InvalidSeed(GenerationError):
    """Seed is not exactly 32 bytes"""


class CoverageUnsatisfiable(GenerationError):
    """Coverage retry limit exhausted before every category appeared"""

    def __init__(self, attempts: int, missing):
        self.attempts = attempts
        self.missing = tuple(missing)
        names = ", ".join(self.missing)
        super().__init__(
            f"Could not cover every selected category after {attempts} attempts (missing: {names})"
        )


class InvalidSample(ValueError):
    """Motion sample cannot be serialized; the collection is aborted"""


class CollectorStateError(RuntimeError):
    """Collector operation not allowed in its current state"""
