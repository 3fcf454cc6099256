import json
from datetime import datetime, timedelta, timezone

import pytest

from authorhub.interpolate import (
    RawJSON,
    SkipInterpolation,
    build_set_statement,
    interpolate_params,
    transaction_statement,
)
from authorhub.protocol import MAX_PACKET_SIZE


def test_interpolate_params():
    assert interpolate_params("SELECT ?+?", [42, "gopher"]) == "SELECT 42+'gopher'"


def test_interpolate_params_json_raw_message():
    raw = RawJSON(json.dumps({"value": 42}, separators=(",", ":")).encode())
    assert interpolate_params("SELECT ?", [raw]) == "SELECT '{\\\"value\\\":42}'"


def test_interpolate_params_too_many_placeholders():
    with pytest.raises(SkipInterpolation):
        interpolate_params("SELECT ?+?", [42])


def test_interpolate_params_placeholder_in_string():
    with pytest.raises(SkipInterpolation):
        interpolate_params("SELECT 'abc?xyz',?", [42])


def test_interpolate_params_uint64():
    assert interpolate_params("SELECT ?", [42]) == "SELECT 42"


def test_large_unsigned_value():
    assert interpolate_params("SELECT ?", [(1 << 64) - 1]) == "SELECT 18446744073709551615"


def test_null_and_bool():
    assert interpolate_params("SELECT ?, ?, ?", [None, True, False]) == "SELECT NULL, 1, 0"


def test_bytes_are_binary_literals():
    assert interpolate_params("SELECT ?", [b"ab'c"]) == "SELECT _binary'ab\\'c'"


def test_string_backslash_escaping():
    result = interpolate_params("SELECT ?", ["it's\n\\"])
    assert result == "SELECT 'it\\'s\\n\\\\'"


def test_string_quote_escaping_without_backslashes():
    result = interpolate_params("SELECT ?", ["it's\\"], no_backslash_escapes=True)
    assert result == "SELECT 'it''s\\'"


@pytest.mark.parametrize(
    "value, expected",
    [
        (3.5, "3.5"),
        (123456.0, "123456"),
        (1e6, "1e+06"),
        (0.0001, "0.0001"),
        (0.00001, "1e-05"),
        (0.0, "0"),
        (-2.25, "-2.25"),
        (float("inf"), "+Inf"),
    ],
)
def test_float_formatting(value, expected):
    assert interpolate_params("?", [value]) == expected


def test_zero_datetime():
    assert interpolate_params("?", [datetime(1, 1, 1)]) == "'0000-00-00'"


def test_datetime_naive():
    assert interpolate_params("?", [datetime(2024, 1, 2, 3, 4, 5)]) == "'2024-01-02 03:04:05'"


def test_datetime_midnight_has_no_clock():
    assert interpolate_params("?", [datetime(2024, 1, 2)]) == "'2024-01-02'"


def test_datetime_fraction_trimmed():
    value = datetime(2024, 1, 2, 3, 4, 5, 500000)
    assert interpolate_params("?", [value]) == "'2024-01-02 03:04:05.5'"


def test_aware_datetime_converted_to_zone():
    seoul = timezone(timedelta(hours=9))
    value = datetime(2024, 1, 2, 12, 0, 0, tzinfo=seoul)
    assert interpolate_params("?", [value]) == "'2024-01-02 03:00:00'"
    assert interpolate_params("?", [value], tz=seoul) == "'2024-01-02 12:00:00'"


def test_unsupported_type_skips():
    with pytest.raises(SkipInterpolation):
        interpolate_params("SELECT ?", [object()])


def test_exceeding_max_allowed_packet_skips():
    with pytest.raises(SkipInterpolation):
        interpolate_params("SELECT ?", ["x" * 20], max_allowed_packet=16)
    assert interpolate_params("SELECT ?", ["x"], max_allowed_packet=MAX_PACKET_SIZE) == "SELECT 'x'"


def test_no_arguments_returns_query():
    assert interpolate_params("SELECT 1", []) == "SELECT 1"


def test_build_set_statement():
    assert build_set_statement({}) == ""
    assert (
        build_set_statement({"autocommit": "1", "time_zone": "'+00:00'"})
        == "SET autocommit = 1, time_zone = '+00:00'"
    )


def test_transaction_statement():
    assert transaction_statement(False) == "START TRANSACTION"
    assert transaction_statement(True) == "START TRANSACTION READ ONLY"