import pytest

from authorhub.collations import (
    BINARY_COLLATION_ID,
    COLLATIONS,
    DEFAULT_COLLATION_ID,
    UNSAFE_COLLATIONS,
    UnknownCollationError,
    collation_id,
    is_unsafe_collation,
)


def test_default_collation_is_utf8mb4_general_ci():
    assert collation_id("utf8mb4_general_ci") == DEFAULT_COLLATION_ID


def test_binary_collation():
    assert collation_id("binary") == BINARY_COLLATION_ID


def test_highest_listed_collation():
    assert collation_id("utf8mb4_0900_ai_ci") == 255


@pytest.mark.parametrize(
    "name, ident",
    [
        ("armscii8_bin", 64),
        ("koi8u_bin", 75),
        ("latin2_bin", 77),
        ("tis620_bin", 89),
        ("utf8_unicode_ci", 192),
        ("utf8_vietnamese_ci", 215),
        ("utf8mb4_unicode_ci", 224),
        ("utf8mb4_unicode_520_ci", 246),
        ("utf8mb4_vietnamese_ci", 247),
        ("cp1250_polish_ci", 99),
    ],
)
def test_known_ids(name, ident):
    assert collation_id(name) == ident


@pytest.mark.parametrize("name", ["ucs2_general_ci", "utf16_bin", "utf32_unicode_ci", "nope"])
def test_unusable_collations_raise(name):
    with pytest.raises(UnknownCollationError) as info:
        collation_id(name)
    assert info.value.name == name
    assert isinstance(info.value, KeyError)


def test_ids_fit_in_one_byte_and_are_unique():
    ids = list(COLLATIONS.values())
    assert all(0 < i < 256 for i in ids)
    assert len(set(ids)) == len(ids)


def test_every_unsafe_collation_is_known():
    for name in UNSAFE_COLLATIONS:
        assert collation_id(name) == COLLATIONS[name]


@pytest.mark.parametrize("name", ["sjis_bin", "gbk_chinese_ci", "gb18030_unicode_520_ci"])
def test_unsafe(name):
    assert is_unsafe_collation(name) is True


@pytest.mark.parametrize("name", ["utf8mb4_general_ci", "binary", "latin1_swedish_ci", "nope"])
def test_safe(name):
    assert is_unsafe_collation(name) is False


def test_mapping_is_read_only():
    with pytest.raises(TypeError):
        COLLATIONS["custom"] = 1  # type: ignore[index]
    with pytest.raises(UnknownCollationError):
        collation_id("custom")