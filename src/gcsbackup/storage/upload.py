"""Streaming a local file into a Cloud Storage object."""

import time
from typing import BinaryIO


class TransferTimeout(Exception):
    """Raised when a single file transfer runs past its deadline."""


class DeadlineReader:
    """File wrapper that refuses to read once ``deadline`` has passed.

    Everything but ``read`` is delegated to the wrapped file, so the storage
    client can still ``tell``/``seek`` it.
    """

    def __init__(self, source: BinaryIO, deadline: float, timeout: float, clock=time.monotonic):
        self._source = source
        self._deadline = deadline
        self._timeout = timeout
        self._clock = clock
        self.bytes_read = 0

    def read(self, size: int = -1) -> bytes:
        if self._clock() > self._deadline:
            raise TransferTimeout(f"transfer exceeded {self._timeout:g}s")
        data = self._source.read(size)
        self.bytes_read += len(data)
        return data

    def __getattr__(self, name):
        return getattr(self._source, name)


def stream_file(
    source: BinaryIO,
    bucket,
    object_key: str,
    timeout: float,
    clock=time.monotonic,
) -> int:
    """
    Copy the contents of ``source`` to a new object.

    The upload is a single ``upload_from_file`` call, so the object only
    exists once every byte has been sent; a failed or timed-out call leaves
    nothing behind in the bucket.

    Args:
        source: File object opened in binary mode
        bucket: Destination bucket handle
        object_key: Name of the object to create
        timeout: Seconds allowed for this file, also used as the HTTP timeout
        clock: Monotonic clock, replaceable in tests

    Returns:
        Number of bytes read from ``source``

    Raises:
        TransferTimeout: If the deadline passes while the file is being read
        Exception: Whatever the storage client raises while uploading
    """
    reader = DeadlineReader(source, clock() + timeout, timeout, clock)
    blob = bucket.blob(object_key)
    blob.upload_from_file(reader, timeout=timeout)
    return reader.bytes_read
