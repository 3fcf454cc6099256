"""Detecting idle connections that the server has already closed."""

from __future__ import annotations

import socket
from typing import Any

_MSG_DONTWAIT = getattr(socket, "MSG_DONTWAIT", None)


class UnexpectedReadError(ConnectionError):
    """An idle connection had data waiting to be read."""

    def __init__(self) -> None:
        super().__init__("unexpected read from socket")


def conn_check(sock: Any) -> None:
    """Check an idle socket without blocking.

    Raises EOFError when the peer has closed the connection and
    UnexpectedReadError when unread data is waiting; other socket errors
    propagate. Objects that are not sockets, and platforms without
    non-blocking reads per call, pass unchecked.
    """
    if _MSG_DONTWAIT is None or not isinstance(sock, socket.socket):
        return
    try:
        data = sock.recv(1, _MSG_DONTWAIT)
    except BlockingIOError:
        return
    if not data:
        raise EOFError("connection closed by peer")
    raise UnexpectedReadError()