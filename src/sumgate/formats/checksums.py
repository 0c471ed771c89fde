# ABOUTME: Reader for md5sum-style reference files ("<digest> <filename>" per line).
# ABOUTME: Resolves each filename against the directory holding the checksum file.

import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from sumgate.fs.hashing import DEFAULT_ALGORITHM, digest_width

DEFAULT_WIDTH = digest_width(DEFAULT_ALGORITHM)
_HEX_RE = re.compile(r"[0-9a-f]+")


class ChecksumFormatError(ValueError):
    """Raised when a line of a checksum file cannot be parsed."""


class ChecksumFileError(Exception):
    """Raised when a checksum file cannot be opened or read."""


@dataclass(frozen=True)
class ChecksumEntry:
    """A file path and the digest it is expected to hash to."""

    path: Path
    digest: str


def parse_checksum_line(line: str, width: int = DEFAULT_WIDTH) -> tuple[str, str]:
    """Split one reference line into (digest, filename).

    The first `width` characters are the digest; the rest, stripped and
    without a leading `*` binary-mode marker, is the filename.

    Raises:
        ChecksumFormatError: If the line is too short, the digest is not
            lowercase hex, or the filename is empty.
    """
    line = line.rstrip("\r\n")
    digest, rest = line[:width], line[width:]
    if len(digest) < width or not _HEX_RE.fullmatch(digest):
        raise ChecksumFormatError(f"Expected a {width}-character lowercase hex digest: {line!r}")
    if rest and not rest[0].isspace():
        raise ChecksumFormatError(f"Digest is not followed by whitespace: {line!r}")
    filename = rest.strip()
    if filename.startswith("*"):
        filename = filename[1:]
    if not filename:
        raise ChecksumFormatError(f"Missing filename: {line!r}")
    return digest, filename


def iter_checksum_file(
    checksum_path: Path, width: int = DEFAULT_WIDTH
) -> Iterator[ChecksumEntry]:
    """Yield the entries of a checksum file in file order.

    Blank lines are skipped. Filenames are taken relative to the checksum
    file's parent directory.

    Raises:
        ChecksumFileError: If the checksum file cannot be opened or read.
        ChecksumFormatError: On a malformed line, naming file and line number.
    """
    base = checksum_path.parent
    try:
        handle = checksum_path.open("r", encoding="utf-8")
    except OSError as exc:
        raise ChecksumFileError(f"failed to open '{checksum_path}': {exc}") from exc

    with handle:
        try:
            for lineno, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    digest, filename = parse_checksum_line(line, width)
                except ChecksumFormatError as exc:
                    raise ChecksumFormatError(f"{checksum_path}:{lineno}: {exc}") from exc
                yield ChecksumEntry(path=base / filename, digest=digest)
        except (OSError, UnicodeDecodeError) as exc:
            raise ChecksumFileError(f"failed reading '{checksum_path}': {exc}") from exc
