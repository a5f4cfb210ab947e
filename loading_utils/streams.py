"""Helpers for draining streams returned by the locator."""

import io
from typing import BinaryIO

DEFAULT_ENCODING = "iso-8859-1"


def read_bytes(stream: BinaryIO, length: int | None = None) -> bytes:
    """Read the whole stream, or at most ``length`` bytes of it.

    The stream is left open.
    """
    if length is None:
        return stream.read()
    chunks = []
    remaining = length
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_text(stream: BinaryIO, length: int = -1, encoding: str = DEFAULT_ENCODING) -> str:
    """Decode the stream as text and close it.

    Args:
        stream: Binary stream to read
        length: Maximum number of characters to read, or -1 for everything
        encoding: Character encoding (ISO-8859-1 by default, which never fails)
    """
    with io.TextIOWrapper(stream, encoding=encoding) as reader:
        return reader.read(length)
