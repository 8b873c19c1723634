import string

import pytest

from rdmpass.errors import InvalidSettings
from rdmpass.services.charsets import (
    EXTENDED_LATIN,
    SYMBOLS,
    Category,
    GenerationSettings,
    build_alphabet,
    validate_length,
)


def test_symbols_are_the_32_ascii_punctuation_characters():
    assert len(SYMBOLS) == 32
    assert set(SYMBOLS) == set(string.punctuation)


def test_extended_latin_covers_a0_through_ff():
    assert len(EXTENDED_LATIN) == 96
    assert EXTENDED_LATIN[0] == "\xa0"
    assert EXTENDED_LATIN[-1] == "\xff"


def test_alphabet_concatenates_categories_in_fixed_order():
    settings = GenerationSettings.of(8, Category.NUMBERS, Category.LOWERCASE)
    alphabet = build_alphabet(settings)

    assert alphabet.characters == string.ascii_lowercase + string.digits
    assert alphabet.required == (Category.LOWERCASE, Category.NUMBERS)


def test_all_standard_categories_give_190_characters():
    settings = GenerationSettings.of(
        8,
        Category.LOWERCASE,
        Category.UPPERCASE,
        Category.NUMBERS,
        Category.SYMBOLS,
        Category.EXTENDED_LATIN,
    )
    assert len(build_alphabet(settings)) == 190


def test_custom_characters_are_appended_verbatim_and_tracked():
    settings = GenerationSettings.of(8, Category.NUMBERS, custom_characters="xyx")
    alphabet = build_alphabet(settings)

    assert alphabet.characters == string.digits + "xyx"
    assert alphabet.required == (Category.NUMBERS, Category.CUSTOM)
    assert alphabet.categories_of("x") == {Category.CUSTOM}


def test_custom_character_overlapping_a_standard_one_belongs_to_both():
    settings = GenerationSettings.of(8, Category.LOWERCASE, custom_characters="a!")
    alphabet = build_alphabet(settings)

    assert alphabet.categories_of("a") == {Category.LOWERCASE, Category.CUSTOM}
    assert alphabet.missing_categories("a") == ()
    assert alphabet.missing_categories("b") == (Category.CUSTOM,)


def test_custom_characters_alone_form_an_alphabet():
    alphabet = build_alphabet(GenerationSettings(length=4, custom_characters="01"))
    assert alphabet.characters == "01"
    assert alphabet.required == (Category.CUSTOM,)


def test_empty_alphabet_is_invalid_settings():
    with pytest.raises(InvalidSettings):
        build_alphabet(GenerationSettings(length=8))


def test_alphabet_larger_than_256_is_invalid_settings():
    settings = GenerationSettings.of(
        8,
        Category.LOWERCASE,
        Category.UPPERCASE,
        Category.NUMBERS,
        Category.SYMBOLS,
        Category.EXTENDED_LATIN,
        custom_characters="Ā" * 67,
    )
    with pytest.raises(InvalidSettings):
        build_alphabet(settings)


def test_alphabet_of_exactly_256_is_accepted():
    settings = GenerationSettings.of(
        8,
        Category.LOWERCASE,
        Category.UPPERCASE,
        Category.NUMBERS,
        Category.SYMBOLS,
        Category.EXTENDED_LATIN,
        custom_characters="Ā" * 66,
    )
    assert len(build_alphabet(settings)) == 256


def test_settings_accept_category_names():
    settings = GenerationSettings(length=4, categories={"lowercase", "extendedLatin"})
    assert settings.categories == {Category.LOWERCASE, Category.EXTENDED_LATIN}


def test_custom_cannot_be_enabled_as_a_flag():
    with pytest.raises(InvalidSettings):
        GenerationSettings(length=4, categories={Category.CUSTOM})


def test_minimum_cover_counts_disjoint_categories():
    settings = GenerationSettings.of(4, Category.LOWERCASE, Category.NUMBERS, Category.SYMBOLS)
    assert build_alphabet(settings).minimum_cover_size() == 3


def test_minimum_cover_uses_overlapping_custom_characters():
    settings = GenerationSettings.of(1, Category.LOWERCASE, custom_characters="a")
    assert build_alphabet(settings).minimum_cover_size() == 1


@pytest.mark.parametrize("length", [0, -1, 2049, True, 3.5])
def test_validate_length_rejects_out_of_range(length):
    with pytest.raises(InvalidSettings):
        validate_length(length)


@pytest.mark.parametrize("length", [1, 16, 2048])
def test_validate_length_accepts_bounds(length):
    assert validate_length(length) == length
