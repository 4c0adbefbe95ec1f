# chuk_oauth_token_retriever/streams.py
"""Byte stream copying with a single reusable buffer."""

from typing import BinaryIO

from .exceptions import RetryableIOError

BUFFER_SIZE = 4096


def copy(source: BinaryIO, destination: BinaryIO) -> None:
    """
    Copy every byte from ``source`` into ``destination``.

    Sources with ``readinto`` fill the buffer in place; sources that only
    offer ``read`` are read ``BUFFER_SIZE`` bytes at a time into the same
    buffer. Neither stream is closed.

    Args:
        source: Readable binary stream
        destination: Writable binary stream

    Raises:
        RetryableIOError: If reading or writing fails
    """
    buffer = bytearray(BUFFER_SIZE)
    view = memoryview(buffer)
    readinto = getattr(source, "readinto", None)

    try:
        while True:
            if readinto is not None:
                count = readinto(buffer)
            else:
                chunk = source.read(BUFFER_SIZE)
                count = len(chunk) if chunk else 0
                buffer[:count] = chunk or b""
            if not count:
                break
            destination.write(view[:count])
    except OSError as e:
        raise RetryableIOError(f"Error copying stream: {e}") from e
