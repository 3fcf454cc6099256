"""A read buffer shared between reading packets and building outgoing ones."""

from __future__ import annotations

from typing import Callable, Union

DEFAULT_BUF_SIZE = 4096
MAX_CACHED_BUF_SIZE = 256 * 1024

Reader = Callable[[memoryview], int]
BytesLike = Union[bytes, bytearray, memoryview]


class BusyBufferError(RuntimeError):
    """The buffer still holds unread data and cannot be lent out."""

    def __init__(self) -> None:
        super().__init__("busy buffer")


class UnexpectedEOFError(EOFError):
    """The stream ended before the requested number of bytes arrived."""

    def __init__(self) -> None:
        super().__init__("unexpected EOF")


class ReadBuffer:
    """Buffered reading plus a reusable scratch area for writing.

    Reading and writing never overlap on one connection, so both share the
    same cached storage.
    """

    def __init__(self) -> None:
        self._data = b""
        self._cached = bytearray(DEFAULT_BUF_SIZE)

    def __len__(self) -> int:
        return len(self._data)

    def busy(self) -> bool:
        """Tell whether unread data remains."""
        return bool(self._data)

    def fill(self, need: int, reader: Reader) -> None:
        """Read until at least ``need`` bytes are buffered.

        ``reader`` fills the memoryview it is given and returns the number of
        bytes written, 0 meaning end of stream (like ``socket.recv_into``).
        Raises UnexpectedEOFError when the stream ends too early; whatever was
        read stays buffered.
        """
        dest = self._cached
        size = max(need, len(self._data))
        if size > len(dest):
            dest = bytearray((size // DEFAULT_BUF_SIZE + 1) * DEFAULT_BUF_SIZE)
            if len(dest) <= MAX_CACHED_BUF_SIZE:
                self._cached = dest

        n = len(self._data)
        dest[:n] = self._data
        try:
            with memoryview(dest) as view:
                while True:
                    got = reader(view[n:])
                    if got == 0:
                        if n < need:
                            raise UnexpectedEOFError()
                        return
                    n += got
                    if n >= need:
                        return
        finally:
            self._data = bytes(dest[:n])

    def read_next(self, need: int) -> bytes:
        """Take the next ``need`` bytes out of the buffer."""
        if need > len(self._data):
            raise ValueError(
                f"requested {need} bytes but only {len(self._data)} are buffered"
            )
        data, self._data = self._data[:need], self._data[need:]
        return data

    def take_buffer(self, length: int) -> memoryview | bytearray:
        """Lend a writable area of ``length`` bytes, reusing storage if possible."""
        if self.busy():
            raise BusyBufferError()
        if length <= len(self._cached):
            return memoryview(self._cached)[:length]
        if length < MAX_CACHED_BUF_SIZE:
            self._cached = bytearray(length)
            return memoryview(self._cached)
        return bytearray(length)

    def take_small_buffer(self, length: int) -> memoryview:
        """Lend ``length`` bytes known to fit in the default buffer size."""
        if self.busy():
            raise BusyBufferError()
        return memoryview(self._cached)[:length]

    def take_complete_buffer(self) -> memoryview:
        """Lend the whole cached storage."""
        if self.busy():
            raise BusyBufferError()
        return memoryview(self._cached)

    def store(self, buf: BytesLike) -> None:
        """Keep ``buf`` as the cached storage if it is larger but not too large."""
        if len(self._cached) < len(buf) <= MAX_CACHED_BUF_SIZE:
            self._cached = buf if isinstance(buf, bytearray) else bytearray(buf)