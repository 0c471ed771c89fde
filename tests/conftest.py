# ABOUTME: Shared pytest fixtures for sumgate tests.
# ABOUTME: Provides file factories and md5sum-style checksum trees on disk.

from collections.abc import Callable
from pathlib import Path

import pytest

from tests.fixtures.digests import flip_bit, md5_hex


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory that writes a file under tmp_path and returns its path."""

    def _make(name: str, content: bytes) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def checksum_tree(tmp_path: Path) -> Path:
    """Create a directory with data files and an md5sum file listing them.

    Layout:
        tree/
            md5sum
            alpha.bin        (correct digest)
            nested/beta.bin  (correct digest)
            gamma.bin        (wrong digest)
    """
    root = tmp_path / "tree"
    (root / "nested").mkdir(parents=True)
    files = {
        "alpha.bin": b"alpha content",
        "nested/beta.bin": b"beta content, a little longer",
        "gamma.bin": b"gamma content",
    }
    lines = []
    for name, content in files.items():
        (root / name).write_bytes(content)
        digest = md5_hex(content)
        if name == "gamma.bin":
            digest = flip_bit(digest)
        lines.append(f"{digest}  {name}\n")
    (root / "md5sum").write_text("".join(lines))
    return root


@pytest.fixture
def hook_script(tmp_path: Path) -> tuple[Path, Path]:
    """A Python script that appends its arguments to a log, one call per line.

    Returns:
        (script_path, log_path)
    """
    log = tmp_path / "hook.log"
    script = tmp_path / "hook.py"
    script.write_text(
        "import sys\n"
        f"with open({str(log)!r}, 'a') as fh:\n"
        "    fh.write(' '.join(sys.argv[1:]) + '\\n')\n"
    )
    return script, log
