# ABOUTME: Single-file checksum verification, the unit of concurrent work.
# ABOUTME: Streams a file through the hasher and compares against the recorded digest.

from pathlib import Path

from sumgate.fs.hashing import DEFAULT_ALGORITHM, DEFAULT_CHUNK_SIZE, compute_file_hash
from sumgate.fs.opener import FileOpenError


class VerificationIOError(OSError):
    """Raised when a file cannot be opened or read during verification."""

    def __init__(self, path: Path, cause: OSError) -> None:
        detail = cause.reason if isinstance(cause, FileOpenError) else cause
        super().__init__(f"failed reading {path}: {detail}")
        self.errno = cause.errno
        self.path = path


def verify_file(
    path: Path,
    expected_digest: str,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bool:
    """Check whether a file's content matches a recorded hex digest.

    The comparison is an exact, case-sensitive string match.

    Args:
        path: File to verify.
        expected_digest: Lowercase hex digest from the reference record.
        algorithm: hashlib algorithm name used to produce expected_digest.
        chunk_size: Bytes read per chunk.

    Returns:
        True on a match, False on a mismatch.

    Raises:
        VerificationIOError: If opening or reading the file fails.
    """
    try:
        actual = compute_file_hash(path, algorithm=algorithm, chunk_size=chunk_size)
    except OSError as exc:
        raise VerificationIOError(path, exc) from exc
    return actual == expected_digest
