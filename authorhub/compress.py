"""Compressed packet framing of the MySQL protocol."""

from __future__ import annotations

import zlib
from typing import Callable, Union

from .protocol import MAX_PACKET_SIZE

MIN_COMPRESS_LENGTH = 150
MAX_PAYLOAD_LEN = MAX_PACKET_SIZE - 4
COMPRESSION_LEVEL = 2
HEADER_SIZE = 7

BytesLike = Union[bytes, bytearray, memoryview]
ReadNext = Callable[[int], BytesLike]
Write = Callable[[bytes], object]


class CompressedPacketError(ValueError):
    """A compressed packet could not be decoded."""


def z_compress(data: BytesLike) -> bytes:
    """Compress ``data`` as a zlib stream."""
    return zlib.compress(bytes(data), COMPRESSION_LEVEL)


def z_decompress(data: BytesLike) -> bytes:
    """Decompress a zlib stream, checking its checksum."""
    try:
        return zlib.decompress(bytes(data))
    except zlib.error as exc:
        raise CompressedPacketError(f"invalid compressed data: {exc}") from exc


def _put_uint24(value: int) -> bytes:
    return value.to_bytes(3, "little")


def _get_uint24(data: BytesLike) -> int:
    return int.from_bytes(bytes(data), "little")


class CompressedIO:
    """Reads and writes packets wrapped in the compressed protocol.

    ``read_next(n)`` must return exactly ``n`` bytes from the underlying
    connection (raising if it cannot); ``write(data)`` must send all of
    ``data``. The compression sequence number is kept in
    ``compress_sequence``.
    """

    def __init__(self, read_next: ReadNext, write: Write) -> None:
        self._read_raw = read_next
        self._write = write
        self._buffer = bytearray()
        self.compress_sequence = 0

    def reset(self) -> None:
        """Drop any decompressed data not read yet."""
        self._buffer.clear()

    def read_next(self, need: int) -> bytes:
        """Return the next ``need`` bytes of decompressed data."""
        while len(self._buffer) < need:
            self._read_compressed_packet()
        data = bytes(self._buffer[:need])
        del self._buffer[:need]
        return data

    def _read_compressed_packet(self) -> None:
        header = bytes(self._read_raw(HEADER_SIZE))
        compressed_length = _get_uint24(header[0:3])
        sequence = header[3]
        uncompressed_length = _get_uint24(header[4:7])
        # The sequence is not verified: the server may answer with an error
        # packet before it has read everything the client sent.
        self.compress_sequence = (sequence + 1) & 0xFF

        payload = self._read_raw(compressed_length)

        # A zero uncompressed length means the payload was sent as is.
        if uncompressed_length == 0:
            self._buffer += payload
            return

        data = z_decompress(payload)
        if len(data) != uncompressed_length:
            raise CompressedPacketError(
                "invalid compressed packet: uncompressed length in header is "
                f"{uncompressed_length}, actual {len(data)}"
            )
        self._buffer += data

    def write_packets(self, packets: BytesLike) -> int:
        """Send ``packets`` in compressed frames; return the bytes consumed."""
        view = memoryview(bytes(packets))
        total = len(view)
        offset = 0
        while offset < total:
            payload = bytes(view[offset : offset + MAX_PAYLOAD_LEN])
            body, uncompressed_len = payload, 0
            if len(payload) >= MIN_COMPRESS_LENGTH:
                try:
                    compressed = z_compress(payload)
                except zlib.error:
                    compressed = None
                # Keep the data uncompressed unless compression actually pays,
                # counting the frame header against it.
                if compressed is not None and HEADER_SIZE + len(compressed) < len(payload):
                    body, uncompressed_len = compressed, len(payload)
            self._write_compressed_packet(body, uncompressed_len)
            offset += len(payload)
        return total

    def _write_compressed_packet(self, body: bytes, uncompressed_len: int) -> None:
        header = (
            _put_uint24(len(body))
            + bytes([self.compress_sequence])
            + _put_uint24(uncompressed_len)
        )
        self.compress_sequence = (self.compress_sequence + 1) & 0xFF
        self._write(header + body)