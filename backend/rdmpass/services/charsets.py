"""
Character-set builder

Turns a settings snapshot into an ordered alphabet plus an explicit
character -> categories membership map used for coverage checks.
"""

from dataclasses import dataclass, field
from enum import Enum
from itertools import combinations
from typing import Dict, FrozenSet, Iterable, Tuple

from rdmpass.security_limits import (
    DEFAULT_PASSWORD_LENGTH,
    MAX_ALPHABET_SIZE,
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
)
from rdmpass.errors import InvalidSettings


class Category(str, Enum):
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    NUMBERS = "numbers"
    SYMBOLS = "symbols"
    EXTENDED_LATIN = "extendedLatin"
    CUSTOM = "custom"


LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
NUMBERS = "0123456789"
# All 32 printable ASCII punctuation characters between '!' and '~'.
SYMBOLS = "!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"
# Latin-1 supplement, U+00A0 through U+00FF inclusive.
EXTENDED_LATIN = "".join(chr(code) for code in range(0xA0, 0x100))

# Order in which enabled categories are concatenated into the alphabet.
STANDARD_CATEGORIES: Tuple[Tuple[Category, str], ...] = (
    (Category.LOWERCASE, LOWERCASE),
    (Category.UPPERCASE, UPPERCASE),
    (Category.NUMBERS, NUMBERS),
    (Category.SYMBOLS, SYMBOLS),
    (Category.EXTENDED_LATIN, EXTENDED_LATIN),
)


@dataclass(frozen=True)
class GenerationSettings:
    """Immutable settings snapshot for one derivation"""

    length: int = DEFAULT_PASSWORD_LENGTH
    categories: FrozenSet[Category] = frozenset()
    custom_characters: str = ""
    require_each_selected: bool = False

    def __post_init__(self):
        # Accept any iterable of categories or category names.
        object.__setattr__(
            self, "categories", frozenset(Category(c) for c in self.categories)
        )
        if Category.CUSTOM in self.categories:
            raise InvalidSettings("custom is enabled by supplying custom_characters")

    @classmethod
    def of(cls, length: int, *categories, custom_characters: str = "", require_each_selected: bool = False):
        return cls(
            length=length,
            categories=frozenset(categories),
            custom_characters=custom_characters,
            require_each_selected=require_each_selected,
        )


@dataclass(frozen=True)
class Alphabet:
    """Ordered alphabet with explicit category membership"""

    characters: str
    required: Tuple[Category, ...]
    memberships: Dict[str, FrozenSet[Category]] = field(repr=False)

    def __len__(self) -> int:
        return len(self.characters)

    def __getitem__(self, index: int) -> str:
        return self.characters[index]

    def categories_of(self, char: str) -> FrozenSet[Category]:
        return self.memberships.get(char, frozenset())

    def missing_categories(self, chars: Iterable[str]) -> Tuple[Category, ...]:
        """Return required categories not represented by chars, in alphabet order"""
        present = set()
        for char in chars:
            present |= self.memberships[char]
        return tuple(c for c in self.required if c not in present)

    def minimum_cover_size(self) -> int:
        """
        Fewest characters needed to represent every required category.

        Characters are grouped by their membership set; at most eleven
        distinct sets exist (five standard, custom alone, custom plus one
        standard), so brute force over combinations is cheap.
        """
        required = set(self.required)
        if not required:
            return 0
        signatures = sorted(
            {m & required for m in self.memberships.values() if m & required},
            key=lambda s: sorted(s),
        )
        for size in range(1, len(required) + 1):
            for combo in combinations(signatures, size):
                if required <= frozenset().union(*combo):
                    return size
        # Unreachable: every required category contributed at least one character.
        return len(required)


def validate_length(length: int) -> int:
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidSettings("length must be an integer")
    if not MIN_PASSWORD_LENGTH <= length <= MAX_PASSWORD_LENGTH:
        raise InvalidSettings(
            f"length must be between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH}"
        )
    return length


def build_alphabet(settings: GenerationSettings) -> Alphabet:
    """
    Build the alphabet for a settings snapshot.

    Duplicates from overlapping categories are kept in place; a character
    supplied both by a standard category and by custom_characters belongs
    to both categories.

    Raises:
      InvalidSettings if the alphabet is empty or larger than 256 characters.
    """
    parts = []
    required = []
    memberships: Dict[str, set] = {}

    for category, chars in STANDARD_CATEGORIES:
        if category not in settings.categories:
            continue
        parts.append(chars)
        required.append(category)
        for char in chars:
            memberships.setdefault(char, set()).add(category)

    custom = settings.custom_characters or ""
    if custom:
        parts.append(custom)
        required.append(Category.CUSTOM)
        for char in custom:
            memberships.setdefault(char, set()).add(Category.CUSTOM)

    characters = "".join(parts)
    if not characters:
        raise InvalidSettings("No character categories selected")
    if len(characters) > MAX_ALPHABET_SIZE:
        raise InvalidSettings(
            f"Character set has {len(characters)} characters; at most {MAX_ALPHABET_SIZE} are supported"
        )

    return Alphabet(
        characters=characters,
        required=tuple(required),
        memberships={char: frozenset(cats) for char, cats in memberships.items()},
    )
