"""Backing stores for the record file.

A backing store is a byte container the record store reads whole and
overwrites whole:

    read_all()        -> bytes, the entire current content
    overwrite(data)   truncate, then write data as the new content
    close()

FileBackingStore wraps a file opened create + read/write + append. It can
optionally hold an exclusive fcntl.flock for its whole lifetime so that
cooperating invocations against the same file run one at a time. The lock
is advisory: processes that don't take it are not blocked.

MemoryBackingStore keeps content in a buffer, for tests and embedding.
"""

import fcntl
import io
import logging
import os
from pathlib import Path
from typing import Protocol

from .config import FILE_MODE

log = logging.getLogger(__name__)


class BackingStore(Protocol):
    def read_all(self) -> bytes: ...

    def overwrite(self, data: bytes) -> None: ...

    def close(self) -> None: ...


class FileBackingStore:
    """Record file opened for the duration of one invocation.

    Usage:
        with FileBackingStore(path, lock=True) as backing:
            content = backing.read_all()
            backing.overwrite(new_content)
        # lock released, handle closed
    """

    def __init__(self, path: str | Path, lock: bool = False):
        self.path = Path(path)
        self.locked = lock
        fd = os.open(str(self.path), os.O_CREAT | os.O_RDWR | os.O_APPEND, FILE_MODE)
        try:
            if lock:
                fcntl.flock(fd, fcntl.LOCK_EX)
            self._file = os.fdopen(fd, "a+b")
        except BaseException:
            os.close(fd)
            raise
        log.debug(f"Opened {self.path} (lock={lock})")

    def read_all(self) -> bytes:
        self._file.seek(0)
        return self._file.read()

    def overwrite(self, data: bytes) -> None:
        # O_APPEND puts the write at the new end, which is offset 0 after truncate
        self._file.truncate(0)
        self._file.write(data)
        self._file.flush()

    def close(self) -> None:
        if self._file.closed:
            return
        try:
            if self.locked:
                fcntl.flock(self._file.fileno(), fcntl.LOCK_UN)
        finally:
            self._file.close()
            log.debug(f"Closed {self.path}")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class MemoryBackingStore:
    """In-memory backing store. getvalue() returns the current content."""

    def __init__(self, initial: bytes = b""):
        self._buf = io.BytesIO(initial)

    def read_all(self) -> bytes:
        return self._buf.getvalue()

    def overwrite(self, data: bytes) -> None:
        self._buf.seek(0)
        self._buf.truncate(0)
        self._buf.write(data)

    def getvalue(self) -> bytes:
        return self._buf.getvalue()

    def close(self) -> None:
        self._buf.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
