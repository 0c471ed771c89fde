# ABOUTME: Streaming content hashing for checksum verification.
# ABOUTME: Feeds files through hashlib in chunks so large files never load whole.

import hashlib
from pathlib import Path
from typing import BinaryIO

from sumgate.fs.opener import open_with_retry, read_chunks

DEFAULT_ALGORITHM = "md5"
DEFAULT_CHUNK_SIZE = 512 * 1024  # 512 KB


def new_hasher(algorithm: str = DEFAULT_ALGORITHM) -> "hashlib._Hash":
    """Create a fresh hash state for the named algorithm.

    Raises:
        ValueError: If hashlib does not know the algorithm.
    """
    try:
        return hashlib.new(algorithm)
    except ValueError as exc:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}") from exc


def digest_width(algorithm: str = DEFAULT_ALGORITHM) -> int:
    """Number of hex characters in a digest produced by the algorithm."""
    return new_hasher(algorithm).digest_size * 2


def hash_stream(
    stream: BinaryIO,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Hash everything remaining in a binary stream.

    The digest does not depend on chunk_size; it only bounds how much is
    held in memory per read.

    Returns:
        Lowercase hex digest string.
    """
    hasher = new_hasher(algorithm)
    for chunk in read_chunks(stream, chunk_size):
        hasher.update(chunk)
    return hasher.hexdigest()


def compute_file_hash(
    path: Path,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Compute the hex digest of a file on disk.

    Args:
        path: Path to the file to hash.
        algorithm: Any name accepted by hashlib.new (default md5).
        chunk_size: Bytes read per chunk.

    Returns:
        Lowercase hex digest string.

    Raises:
        FileOpenError: If the file cannot be opened.
    """
    with open_with_retry(path) as handle:
        return hash_stream(handle, algorithm=algorithm, chunk_size=chunk_size)
