"""
Unit tests for HasherImpl with the SHA-512 and xxHash64 algorithms.
Verifies partial/full hashing returns hex digests over exactly the requested bytes.
"""
import hashlib
import pytest
import xxhash
from dupecull.core.hasher import (
    HasherImpl, Sha512AlgorithmImpl, XXHashAlgorithmImpl, get_algorithm
)
from dupecull.core.models import ScanType, HashAlgorithmName


class TestHasherImpl:
    """Test digest computation with chunk-based reading."""

    def test_full_hash_is_sha512_hex_by_default(self, tmp_path):
        content = b"test content " * 1000
        path = tmp_path / "file.bin"
        path.write_bytes(content)

        digest = HasherImpl().compute_full_hash(str(path))

        assert digest == hashlib.sha512(content).hexdigest()
        assert len(digest) == 128

    def test_full_hash_streams_in_blocks(self, tmp_path):
        """Block size smaller than the file must not change the digest."""
        content = bytes(range(256)) * 50
        path = tmp_path / "file.bin"
        path.write_bytes(content)

        digest = HasherImpl(block_size=1000).compute_full_hash(str(path))

        assert digest == hashlib.sha512(content).hexdigest()

    def test_xxhash_algorithm(self, tmp_path):
        content = b"xxhash content"
        path = tmp_path / "file.bin"
        path.write_bytes(content)

        digest = HasherImpl(XXHashAlgorithmImpl()).compute_full_hash(str(path))

        assert digest == xxhash.xxh64(content).hexdigest()
        assert len(digest) == 16

    def test_first_bytes_hash_covers_window_from_start(self, tmp_path):
        content = b"START_" + b"A" * 100 + b"_END"
        path = tmp_path / "file.bin"
        path.write_bytes(content)

        digest = HasherImpl().compute_partial_hash(str(path), len(content), ScanType.FIRST, 10)

        assert digest == hashlib.sha512(content[:10]).hexdigest()

    def test_last_bytes_hash_covers_window_at_end(self, tmp_path):
        content = b"START_" + b"A" * 100 + b"_END"
        path = tmp_path / "file.bin"
        path.write_bytes(content)

        digest = HasherImpl().compute_partial_hash(str(path), len(content), ScanType.LAST, 10)

        assert digest == hashlib.sha512(content[-10:]).hexdigest()

    def test_partial_hash_window_larger_than_block(self, tmp_path):
        content = bytes(range(256)) * 40
        path = tmp_path / "file.bin"
        path.write_bytes(content)

        hasher = HasherImpl(block_size=100)
        digest = hasher.compute_partial_hash(str(path), len(content), ScanType.FIRST, 5000)

        assert digest == hashlib.sha512(content[:5000]).hexdigest()

    def test_partial_hash_of_short_read_uses_bytes_actually_read(self, tmp_path):
        """If the file shrank, the digest covers only the bytes that were read."""
        path = tmp_path / "file.bin"
        path.write_bytes(b"abc")

        digest = HasherImpl().compute_partial_hash(str(path), 3, ScanType.FIRST, 10)

        assert digest == hashlib.sha512(b"abc").hexdigest()

    def test_partial_hashes_differ_between_ends(self, tmp_path):
        content = b"HEAD" + b"-" * 1000 + b"TAIL"
        path = tmp_path / "file.bin"
        path.write_bytes(content)
        hasher = HasherImpl()

        first = hasher.compute_partial_hash(str(path), len(content), ScanType.FIRST, 4)
        last = hasher.compute_partial_hash(str(path), len(content), ScanType.LAST, 4)

        assert first != last

    def test_zero_window_rejected(self, tmp_path):
        path = tmp_path / "file.bin"
        path.write_bytes(b"abc")

        with pytest.raises(ValueError):
            HasherImpl().compute_partial_hash(str(path), 3, ScanType.FIRST, 0)

    def test_deleted_file_raises_on_full_hash(self, tmp_path):
        """
        A file that vanished before hashing is an error, not an empty digest.
        """
        path = tmp_path / "deleted.txt"
        path.write_bytes(b"content")
        path.unlink()

        with pytest.raises(RuntimeError, match="Failed to read"):
            HasherImpl().compute_full_hash(str(path))

    def test_deleted_file_raises_on_partial_hash(self, tmp_path):
        path = tmp_path / "deleted.txt"
        path.write_bytes(b"content")
        path.unlink()

        with pytest.raises(RuntimeError, match="Error reading"):
            HasherImpl().compute_partial_hash(str(path), 7, ScanType.LAST, 3)

    def test_empty_read_raises(self, tmp_path):
        """A file truncated to zero after traversal cannot be attributed to a group."""
        path = tmp_path / "truncated.bin"
        path.write_bytes(b"")

        with pytest.raises(RuntimeError, match="Empty read"):
            HasherImpl().compute_partial_hash(str(path), 100, ScanType.FIRST, 10)


class TestGetAlgorithm:
    @pytest.mark.parametrize("name, expected", [
        (HashAlgorithmName.SHA512, Sha512AlgorithmImpl),
        (HashAlgorithmName.XXHASH, XXHashAlgorithmImpl),
    ])
    def test_returns_matching_algorithm(self, name, expected):
        assert isinstance(get_algorithm(name), expected)

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError):
            get_algorithm("md5")
