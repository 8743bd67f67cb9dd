"""
Shared fixtures for duplicate detection tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict, List
import sys

# Add src/ to sys.path so 'dupfinder' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from dupfinder.core.hasher import HasherImpl
from dupfinder.core.models import File


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files:
    - 3 identical 1KB files (one of them in a subdirectory)
    - 1 different 1KB file (same size, other content)
    - 2 identical 2KB files
    - 2 files with unique sizes
    - 1 empty file (unique size 0)
    """
    files = {}

    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    files["diff_1kb"] = temp_dir / "diff_1kb.txt"
    files["diff_1kb"].write_bytes(b"Z" * 1024)

    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.bin"
    files["dup2_b"] = temp_dir / "dup2_b.bin"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = temp_dir / "unique2.txt"
    files["unique2"].write_bytes(b"D" * 2500)

    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    return files


class CountingHasher:
    """Wraps HasherImpl and records every path it is asked to hash."""

    def __init__(self, inner: HasherImpl = None):
        self.inner = inner or HasherImpl()
        self.calls: List[str] = []

    def compute_full_hash(self, file: File) -> bytes:
        self.calls.append(file.path)
        return self.inner.compute_full_hash(file)


@pytest.fixture
def counting_hasher() -> CountingHasher:
    return CountingHasher()
