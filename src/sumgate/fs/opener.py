# ABOUTME: File opening and reading that rides out transient OS errors.
# ABOUTME: Retries interrupted/timed-out opens and spurious read errors without backoff.

import errno
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import BinaryIO, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRANSIENT_OPEN_ERRNOS = frozenset({errno.EINTR, errno.ETIMEDOUT})

# Some filesystem drivers report these on a read that merely has nothing ready yet.
_SPURIOUS_READ_ERRNOS = frozenset({errno.EAGAIN, errno.EWOULDBLOCK, errno.ENODEV})


class FileOpenError(OSError):
    """Raised when a file cannot be opened for a non-transient reason."""

    def __init__(self, path: Path, cause: OSError) -> None:
        reason = cause.strerror or str(cause)
        super().__init__(f"Failed to open {path}: {reason}")
        self.errno = cause.errno
        self.reason = reason
        self.path = path


def is_transient_open_error(exc: BaseException) -> bool:
    """True if an open failure is worth retrying immediately."""
    if isinstance(exc, (TimeoutError, InterruptedError)):
        return True
    return isinstance(exc, OSError) and exc.errno in _TRANSIENT_OPEN_ERRNOS


def is_spurious_read_error(exc: BaseException) -> bool:
    """True if a read failure only means no bytes are available yet."""
    if isinstance(exc, (BlockingIOError, InterruptedError)):
        return True
    return isinstance(exc, OSError) and exc.errno in _SPURIOUS_READ_ERRNOS


def retry_while(
    fn: Callable[[], T],
    is_transient: Callable[[BaseException], bool],
    *,
    max_retries: int | None = None,
) -> T:
    """Call fn until it succeeds or fails with a non-transient error.

    Retries happen immediately, with no backoff. max_retries=None retries
    forever; otherwise the error from the last allowed attempt propagates.
    """
    attempt = 0
    while True:
        try:
            return fn()
        except Exception as exc:
            if not is_transient(exc):
                raise
            if max_retries is not None and attempt >= max_retries:
                raise
            attempt += 1
            logger.debug("Transient error (%s), retrying (attempt %d)", exc, attempt)


def open_with_retry(path: Path, *, max_retries: int | None = None) -> BinaryIO:
    """Open a file for binary reading, retrying transient failures.

    Raises:
        FileOpenError: On any non-transient failure, chained from the cause.
    """
    try:
        return retry_while(
            lambda: open(path, "rb"),
            is_transient_open_error,
            max_retries=max_retries,
        )
    except OSError as exc:
        raise FileOpenError(path, exc) from exc


def read_chunks(
    handle: BinaryIO, chunk_size: int, *, max_retries: int | None = None
) -> Iterator[bytes]:
    """Yield successive chunks from handle until EOF.

    Spurious read errors, and a None from a non-blocking stream, are
    treated as "nothing yet" and the read is retried, counting towards
    max_retries; any other error propagates.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
    while True:
        chunk = retry_while(
            lambda: _read_ready(handle, chunk_size),
            is_spurious_read_error,
            max_retries=max_retries,
        )
        if not chunk:
            return
        yield chunk


def _read_ready(handle: BinaryIO, chunk_size: int) -> bytes:
    chunk = handle.read(chunk_size)
    if chunk is None:
        # Non-blocking raw streams return None when no data is ready.
        raise BlockingIOError(errno.EAGAIN, "no data ready")
    return chunk
