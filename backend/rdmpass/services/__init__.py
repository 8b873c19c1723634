# rdmpass Derivation Services
from rdmpass.services.charsets import Alphabet, Category, GenerationSettings, build_alphabet
from rdmpass.services.collector import CollectorState, MotionCollector, MotionSample, reduce_samples
from rdmpass.errors import (
    CollectorStateError,
    CoverageUnsatisfiable,
    GenerationError,
    InvalidSample,
    InvalidSeed,
    InvalidSettings,
)
from rdmpass.services.generator import DerivationResult, derive, derive_password

__all__ = [
    "Alphabet", "Category", "GenerationSettings", "build_alphabet",
    "CollectorState", "MotionCollector", "MotionSample", "reduce_samples",
    "CollectorStateError", "CoverageUnsatisfiable", "GenerationError",
    "InvalidSample", "InvalidSeed", "InvalidSettings",
    "DerivationResult", "derive", "derive_password",
]
