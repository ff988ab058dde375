"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Implements file hashing with pluggable hash algorithms.

- Partial hashes cover exactly `window` bytes at the start or the end of a file
- Full hashes stream the whole file in fixed-size blocks
- Read failures are raised, never turned into an "empty" digest
"""

import hashlib
import logging
import os

import xxhash

from dupecull.core.interfaces import Hasher, HashAlgorithm
from dupecull.core.models import ScanType, HashAlgorithmName

logger = logging.getLogger(__name__)

READ_BLOCK_SIZE = 1024 * 1024


# Use the same way to implement and use any other hashing algorithm
class Sha512AlgorithmImpl(HashAlgorithm):
    name = "sha512"

    @staticmethod
    def new():
        return hashlib.sha512()


class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxhash"

    @staticmethod
    def new():
        return xxhash.xxh64()


ALGORITHMS = {
    HashAlgorithmName.SHA512: Sha512AlgorithmImpl,
    HashAlgorithmName.XXHASH: XXHashAlgorithmImpl,
}


def get_algorithm(name: HashAlgorithmName) -> HashAlgorithm:
    try:
        return ALGORITHMS[name]()
    except KeyError:
        raise ValueError(f"Unknown hash algorithm: {name}")


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Returns hex-encoded digests.
    """

    def __init__(self, algorithm: HashAlgorithm = None, block_size: int = READ_BLOCK_SIZE):
        self.algorithm = algorithm or Sha512AlgorithmImpl()
        self.block_size = block_size

    def compute_partial_hash(self, path: str, size: int, scan_type: ScanType, window: int) -> str:
        """
        Hashes `window` bytes from offset 0 (FIRST) or `size - window` (LAST).

        Raises:
            ValueError: If window is not positive
            RuntimeError: If the file cannot be opened, positioned or read
        """
        if window <= 0:
            raise ValueError("Scan window must be positive")

        offset = 0 if scan_type is ScanType.FIRST else max(0, size - window)
        digest = self.algorithm.new()
        try:
            with open(path, 'rb') as f:
                f.seek(offset)
                remaining = window
                while remaining > 0:
                    chunk = f.read(min(remaining, self.block_size))
                    if not chunk:
                        break
                    digest.update(chunk)
                    remaining -= len(chunk)
        except OSError as e:
            raise RuntimeError(f"Error reading {path} at offset {offset}: {e}") from e

        if remaining == window:
            raise RuntimeError(f"Empty read from {path} at offset {offset}")
        return digest.hexdigest()

    def compute_full_hash(self, path: str) -> str:
        """
        Hashes every byte of the file.

        Raises:
            RuntimeError: If the file cannot be opened or read
        """
        digest = self.algorithm.new()
        try:
            with open(path, 'rb') as f:
                for chunk in iter(lambda: f.read(self.block_size), b''):
                    digest.update(chunk)
        except OSError as e:
            raise RuntimeError(f"Failed to read {path}: {e}") from e
        logger.debug(f"Full {self.algorithm.name} of {os.path.basename(path)} computed")
        return digest.hexdigest()
