"""Connection attributes sent to the server during the handshake."""

from __future__ import annotations

import os
from typing import Optional, Union

from .protocol import (
    CONN_ATTR_CLIENT_NAME,
    CONN_ATTR_CLIENT_NAME_VALUE,
    CONN_ATTR_OS,
    CONN_ATTR_OS_VALUE,
    CONN_ATTR_PID,
    CONN_ATTR_PLATFORM,
    CONN_ATTR_PLATFORM_VALUE,
    CONN_ATTR_SERVER_HOST,
)


def _length_encoded_int(n: int) -> bytes:
    if n < 0:
        raise ValueError(f"length must not be negative: {n}")
    if n < 251:
        return bytes([n])
    if n <= 0xFFFF:
        return b"\xfc" + n.to_bytes(2, "little")
    if n <= 0xFFFFFF:
        return b"\xfd" + n.to_bytes(3, "little")
    return b"\xfe" + n.to_bytes(8, "little")


def length_encoded_string(value: Union[str, bytes, bytearray]) -> bytes:
    """Encode ``value`` as a length-encoded string (UTF-8 for text)."""
    data = value.encode("utf-8") if isinstance(value, str) else bytes(value)
    return _length_encoded_int(len(data)) + data


def _split_host(addr: str) -> str:
    """Return the host of a ``host:port`` address, or "" if it has none."""
    if addr.startswith("["):
        end = addr.find("]")
        if end < 0 or addr[end + 1 : end + 2] != ":":
            return ""
        host = addr[1:end]
        rest = addr[end + 2 :]
        if "[" in rest or "]" in rest or ":" in rest:
            return ""
        return host
    if addr.count(":") != 1:
        return ""
    host = addr.split(":", 1)[0]
    if "[" in host or "]" in host:
        return ""
    return host


def encode_connection_attributes(
    addr: str, connection_attributes: str = "", pid: Optional[int] = None
) -> bytes:
    """Build the attribute block: defaults first, then ``key:value`` pairs.

    ``connection_attributes`` is a comma separated list of ``key:value``
    entries; entries without a colon are ignored.
    """
    if pid is None:
        pid = os.getpid()
    pairs = [
        (CONN_ATTR_CLIENT_NAME, CONN_ATTR_CLIENT_NAME_VALUE),
        (CONN_ATTR_OS, CONN_ATTR_OS_VALUE),
        (CONN_ATTR_PLATFORM, CONN_ATTR_PLATFORM_VALUE),
        (CONN_ATTR_PID, str(pid)),
    ]
    server_host = _split_host(addr)
    if server_host:
        pairs.append((CONN_ATTR_SERVER_HOST, server_host))

    for entry in connection_attributes.split(","):
        key, sep, value = entry.partition(":")
        if sep:
            pairs.append((key, value))

    return b"".join(
        length_encoded_string(key) + length_encoded_string(value) for key, value in pairs
    )