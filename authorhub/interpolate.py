"""Client-side interpolation of query parameters and small SQL builders."""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from .protocol import MAX_PACKET_SIZE

_ZERO_TIME_NAIVE = datetime(1, 1, 1)

_BACKSLASH_ESCAPES = {
    b"\x00": b"\\0",
    b"\n": b"\\n",
    b"\r": b"\\r",
    b"\x1a": b"\\Z",
    b"'": b"\\'",
    b'"': b'\\"',
    b"\\": b"\\\\",
}
_BACKSLASH_PATTERN = re.compile(rb"[\x00\n\r\x1a'\"\\]")


class SkipInterpolation(Exception):
    """The query cannot be interpolated on the client; prepare it instead."""


class RawJSON(bytes):
    """Pre-encoded JSON text, sent as a quoted string rather than binary."""


def _escape_backslash(data: bytes) -> bytes:
    return _BACKSLASH_PATTERN.sub(lambda m: _BACKSLASH_ESCAPES[m.group()], data)


def _escape_quotes(data: bytes) -> bytes:
    return data.replace(b"'", b"''")


def _format_float(value: float) -> str:
    """Format like the shortest ``%g`` form: exponent below -4 or from 6 on."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = list(digit_tuple)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    text = "".join(str(d) for d in digits)
    prefix = "-" if sign else ""
    if text == "0":
        return prefix + "0"

    point = len(text) + exponent
    exp = point - 1
    if exp < -4 or exp >= 6:
        mantissa = text[0] + ("." + text[1:] if len(text) > 1 else "")
        return f"{prefix}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{text}"
    if point >= len(text):
        return prefix + text + "0" * (point - len(text))
    return f"{prefix}{text[:point]}.{text[point:]}"


def _is_zero_time(value: datetime) -> bool:
    offset = value.utcoffset()
    if offset is None:
        return value == _ZERO_TIME_NAIVE
    try:
        return value.replace(tzinfo=None) == _ZERO_TIME_NAIVE + offset
    except OverflowError:
        return False


def _format_datetime(value: datetime, tz: tzinfo) -> bytes:
    if value.utcoffset() is not None:
        try:
            value = value.astimezone(tz)
        except OverflowError:
            raise ValueError("year is out of range") from None
    text = f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
    if value.hour or value.minute or value.second or value.microsecond:
        text += f" {value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        if value.microsecond:
            text += f".{value.microsecond:06d}".rstrip("0")
    return text.encode("ascii")


def _encode_arg(arg: Any, no_backslash_escapes: bool, tz: tzinfo) -> bytes:
    escape = _escape_quotes if no_backslash_escapes else _escape_backslash
    if isinstance(arg, bool):
        return b"1" if arg else b"0"
    if isinstance(arg, int):
        return str(int(arg)).encode("ascii")
    if isinstance(arg, float):
        return _format_float(float(arg)).encode("ascii")
    if isinstance(arg, datetime):
        if _is_zero_time(arg):
            return b"'0000-00-00'"
        return b"'" + _format_datetime(arg, tz) + b"'"
    if isinstance(arg, RawJSON):
        return b"'" + escape(bytes(arg)) + b"'"
    if isinstance(arg, (bytes, bytearray, memoryview)):
        return b"_binary'" + escape(bytes(arg)) + b"'"
    if isinstance(arg, str):
        return b"'" + escape(arg.encode("utf-8")) + b"'"
    raise SkipInterpolation(f"cannot interpolate value of type {type(arg).__name__}")


def interpolate_params(
    query: str,
    args: Sequence[Any],
    no_backslash_escapes: bool = False,
    max_allowed_packet: int = MAX_PACKET_SIZE,
    tz: Optional[tzinfo] = None,
) -> str:
    """Replace each ``?`` in ``query`` with the matching literal from ``args``.

    Aware datetimes are shown in ``tz`` (UTC by default). Raises
    SkipInterpolation when the placeholders and arguments do not match, a
    value has an unsupported type, or the result would exceed
    ``max_allowed_packet``.
    """
    if query.count("?") != len(args):
        raise SkipInterpolation("placeholder count does not match arguments")
    zone = tz if tz is not None else timezone.utc

    pieces = query.split("?")
    buf = bytearray(pieces[0].encode("utf-8"))
    for arg, piece in zip(args, pieces[1:]):
        if arg is None:
            buf += b"NULL"
        else:
            buf += _encode_arg(arg, no_backslash_escapes, zone)
            if len(buf) + 4 > max_allowed_packet:
                raise SkipInterpolation("interpolated query exceeds max_allowed_packet")
        buf += piece.encode("utf-8")
    return buf.decode("utf-8", "surrogateescape")


def build_set_statement(params: Mapping[str, str]) -> str:
    """Return ``SET k = v, ...`` for session parameters, or "" when there are none."""
    if not params:
        return ""
    return "SET " + ", ".join(f"{key} = {value}" for key, value in params.items())


def transaction_statement(read_only: bool = False) -> str:
    """Return the statement that starts a transaction."""
    return "START TRANSACTION READ ONLY" if read_only else "START TRANSACTION"


__all__ = [
    "SkipInterpolation",
    "RawJSON",
    "interpolate_params",
    "build_set_statement",
    "transaction_statement",
    "timedelta",
]