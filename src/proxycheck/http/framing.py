# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Delimiter framing over an unbounded byte stream.

`FrameReader` is socket-agnostic so the header/body split can be tested
chunk by chunk; `read_until` and `read_body` drive it from a TimedConnection.
"""

from __future__ import annotations

import logging

from ..errors import HeadersTooLarge, NetworkError, ProxyCheckError
from .connection import Deadline, TimedConnection

logger = logging.getLogger(__name__)

HEADER_DELIMITER = b"\r\n\r\n"
DEFAULT_MAX_HEADER_BYTES = 256 * 1024


class FrameReader:
    """Accumulate chunks until `delimiter` is seen, refusing to buffer more than `max_bytes`."""

    def __init__(self, delimiter: bytes = HEADER_DELIMITER, max_bytes: int = DEFAULT_MAX_HEADER_BYTES):
        if not delimiter:
            raise ValueError("delimiter must be non-empty")
        self.delimiter = delimiter
        self.max_bytes = max_bytes
        self._buffer = bytearray()
        self._done = False

    def feed(self, chunk: bytes) -> tuple[bytes, bytes] | None:
        """
        Add `chunk`; return `(head, tail)` once the delimiter is found, else None.

        `head` runs through the end of the delimiter; `tail` holds every byte
        received after it.
        """
        if self._done:
            raise RuntimeError("FrameReader already produced a frame")

        # Only the region that could hold a delimiter straddling the old boundary is rescanned.
        start = max(0, len(self._buffer) - len(self.delimiter) + 1)
        self._buffer.extend(chunk)
        index = self._buffer.find(self.delimiter, start)

        if index != -1:
            end = index + len(self.delimiter)
            if end > self.max_bytes:
                raise HeadersTooLarge(f"Headers too large (>{self.max_bytes} bytes)")
            self._done = True
            return bytes(self._buffer[:end]), bytes(self._buffer[end:])

        if len(self._buffer) > self.max_bytes:
            raise HeadersTooLarge(f"Headers too large (>{self.max_bytes} bytes)")
        return None


def read_until(conn: TimedConnection, reader: FrameReader, deadline: Deadline) -> tuple[bytes, bytes]:
    """Read from `conn` until `reader` yields a frame."""
    while True:
        chunk = conn.recv(deadline)
        if not chunk:
            conn.close()
            raise NetworkError("Socket ended before headers were complete")
        try:
            frame = reader.feed(chunk)
        except HeadersTooLarge:
            conn.close()
            raise
        if frame is not None:
            return frame


def read_body(conn: TimedConnection, initial: bytes, max_bytes: int, deadline: Deadline) -> bytes:
    """
    Best-effort body capture: read until the peer closes, the cap is reached,
    or the stream stalls. Stalls and socket errors end the body silently.
    """
    body = bytearray(initial[:max_bytes])
    while len(body) < max_bytes:
        try:
            chunk = conn.recv(deadline)
        except ProxyCheckError as exc:
            logger.debug("Body read stopped after %d bytes: %s", len(body), exc)
            break
        if not chunk:
            break
        body.extend(chunk[: max_bytes - len(body)])
    return bytes(body)


__all__ = ["DEFAULT_MAX_HEADER_BYTES", "FrameReader", "HEADER_DELIMITER", "read_body", "read_until"]
