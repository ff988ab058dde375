"""
Shared fixtures for deduplication tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for deduplication scenarios:
    - 2 identical 1KB files plus a third copy in a subdirectory
    - 2 identical 2KB files
    - 2 unique files (different sizes)
    - 2 same-size files with different content
    - 2 empty files (always ignored)
    """
    files = {}

    # Duplicate set #1 (1KB of 'A')
    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    # Duplicate pair #2 (2KB of 'B')
    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.txt"
    files["dup2_b"] = temp_dir / "dup2_b.txt"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    # Unique files
    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = temp_dir / "unique2.txt"
    files["unique2"].write_bytes(b"D" * 2500)

    # Same size, different content
    files["same_size_x"] = temp_dir / "same_size_x.bin"
    files["same_size_y"] = temp_dir / "same_size_y.bin"
    files["same_size_x"].write_bytes(b"X" * 3000)
    files["same_size_y"].write_bytes(b"Y" * 3000)

    # Empty files (never candidates)
    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")
    files["empty2"] = temp_dir / "empty2.txt"
    files["empty2"].write_bytes(b"")

    # Subdirectory with a third copy of set #1
    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    return files


@pytest.fixture
def hard_link(temp_dir):
    """
    Creates original.bin and a hard link to it.
    Skips the test when the filesystem does not support hard links.
    """
    original = temp_dir / "original.bin"
    original.write_bytes(b"linked content")
    link = temp_dir / "link.bin"
    try:
        os.link(original, link)
    except (OSError, NotImplementedError):
        pytest.skip("Hard links not supported")
    return original, link
