"""MySQL collation names and the ids the handshake sends for them."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

DEFAULT_COLLATION_ID = 45  # utf8mb4_general_ci
BINARY_COLLATION_ID = 63

# Id/name pairs that follow no pattern.  The handshake carries the collation
# id in one byte, so only ids below 256 appear; ucs2, utf16 and utf32 cannot
# be a connection character set and are left out.
_IRREGULAR = """
1 big5_chinese_ci 2 latin2_czech_cs 3 dec8_swedish_ci 4 cp850_general_ci
5 latin1_german1_ci 6 hp8_english_ci 7 koi8r_general_ci 8 latin1_swedish_ci
9 latin2_general_ci 10 swe7_swedish_ci 11 ascii_general_ci 12 ujis_japanese_ci
13 sjis_japanese_ci 14 cp1251_bulgarian_ci 15 latin1_danish_ci 16 hebrew_general_ci
18 tis620_thai_ci 19 euckr_korean_ci 20 latin7_estonian_cs 21 latin2_hungarian_ci
22 koi8u_general_ci 23 cp1251_ukrainian_ci 24 gb2312_chinese_ci 25 greek_general_ci
26 cp1250_general_ci 27 latin2_croatian_ci 28 gbk_chinese_ci 29 cp1257_lithuanian_ci
30 latin5_turkish_ci 31 latin1_german2_ci 32 armscii8_general_ci 33 utf8_general_ci
34 cp1250_czech_cs 36 cp866_general_ci 37 keybcs2_general_ci 38 macce_general_ci
39 macroman_general_ci 40 cp852_general_ci 41 latin7_general_ci 42 latin7_general_cs
43 macce_bin 44 cp1250_croatian_ci 45 utf8mb4_general_ci 46 utf8mb4_bin
47 latin1_bin 48 latin1_general_ci 49 latin1_general_cs 50 cp1251_bin
51 cp1251_general_ci 52 cp1251_general_cs 53 macroman_bin 57 cp1256_general_ci
58 cp1257_bin 59 cp1257_general_ci 63 binary 76 utf8_tolower_ci 91 ujis_bin
92 geostd8_general_ci 93 geostd8_bin 94 latin1_spanish_ci 95 cp932_japanese_ci
96 cp932_bin 97 eucjpms_japanese_ci 98 eucjpms_bin 99 cp1250_polish_ci
223 utf8_general_mysql500_ci 248 gb18030_chinese_ci 249 gb18030_bin
250 gb18030_unicode_520_ci 255 utf8mb4_0900_ai_ci
"""

# Consecutive runs of "<charset>_bin" collations, by first id.
_BINARY_RUNS = {
    64: "armscii8 ascii cp1250 cp1256 cp866 dec8 greek hebrew hp8 keybcs2 koi8r koi8u",
    77: "latin2 latin5 latin7 cp850 cp852 swe7 utf8 big5 euckr gb2312 gbk sjis tis620",
}

# Language-specific collations, numbered the same way for utf8 and utf8mb4.
_LANGUAGE_RUNS = {"utf8": 192, "utf8mb4": 224}
_LANGUAGES = (
    "unicode icelandic latvian romanian slovenian polish estonian spanish "
    "swedish turkish czech danish lithuanian slovak spanish2 roman persian "
    "esperanto hungarian sinhala german2 croatian unicode_520 vietnamese"
).split()


def _build_table() -> dict[str, int]:
    tokens = _IRREGULAR.split()
    table = {name: int(ident) for ident, name in zip(tokens[::2], tokens[1::2])}
    for first, charsets in _BINARY_RUNS.items():
        for ident, charset in enumerate(charsets.split(), start=first):
            table[f"{charset}_bin"] = ident
    for charset, first in _LANGUAGE_RUNS.items():
        for ident, language in enumerate(_LANGUAGES, start=first):
            table[f"{charset}_{language}_ci"] = ident
    return dict(sorted(table.items(), key=lambda item: item[1]))


_COLLATIONS = _build_table()

COLLATIONS: Mapping[str, int] = MappingProxyType(_COLLATIONS)

# Multibyte encodings whose trailing bytes may contain 0x5c (a backslash);
# client-side parameter interpolation is unsafe with them.
UNSAFE_COLLATIONS: frozenset[str] = frozenset(
    """
    big5_chinese_ci sjis_japanese_ci gbk_chinese_ci big5_bin gb2312_bin gbk_bin
    sjis_bin cp932_japanese_ci cp932_bin gb18030_chinese_ci gb18030_bin
    gb18030_unicode_520_ci
    """.split()
)


class UnknownCollationError(KeyError):
    """The collation name is not one the client can use."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown collation: {self.name!r}"


def collation_id(name: str) -> int:
    """Return the handshake id of the collation ``name``."""
    try:
        return _COLLATIONS[name]
    except KeyError:
        raise UnknownCollationError(name) from None


def is_unsafe_collation(name: str) -> bool:
    """Tell whether interpolating parameters is unsafe under ``name``."""
    return name in UNSAFE_COLLATIONS