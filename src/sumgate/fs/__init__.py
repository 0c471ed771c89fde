# ABOUTME: Filesystem layer for sumgate: retrying file access and streaming digests.
# ABOUTME: Exports the opener helpers and the hashing functions used by the verifier.

from sumgate.fs.hashing import compute_file_hash, digest_width, hash_stream, new_hasher
from sumgate.fs.opener import FileOpenError, open_with_retry, read_chunks

__all__ = [
    "FileOpenError",
    "compute_file_hash",
    "digest_width",
    "hash_stream",
    "new_hasher",
    "open_with_retry",
    "read_chunks",
]
