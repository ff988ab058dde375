"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the deduplication system.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (SHA-512, xxHash, ...).
- Hasher: Interface for computing partial and full digests of files.
- FileScanner: Interface for walking root directories and returning candidate files.
- FileGrouper: Interface for grouping files by size or digest.
- Deduplicator: Interface for the engine coordinating all stages.
"""

from typing import Protocol, List, Iterator, Tuple, Optional, Any
from dupecull.core.models import (
    File,
    ScanType,
    SizeBuckets,
    HashGroups,
    DeduplicationParams,
    DeduplicationStats,
)


# ===== Interfaces =====

class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-512 or xxHash
    without affecting the rest of the deduplication logic.
    """
    name: str

    @staticmethod
    def new() -> Any:
        """Returns a fresh hash object exposing update() and hexdigest()."""
        ...


class Hasher(Protocol):
    """Interface for hashing different parts of a file."""
    def compute_partial_hash(self, path: str, size: int, scan_type: ScanType, window: int) -> str: ...
    def compute_full_hash(self, path: str) -> str: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.
    """
    def scan(self) -> List[File]:
        """
        Walk every configured root.

        Returns:
            Files passing all filters, in traversal order, each physical file at most once.
        """
        ...


class FileGrouper(Protocol):
    """
    Interface for grouping files based on size or content digests.
    Groups with fewer than `min_count` members are never returned.
    """
    def group_by_size(self, files: List[File], min_count: int = 2) -> SizeBuckets: ...

    def group_by_partial_hash(
        self,
        paths: List[str],
        size: int,
        scan_type: ScanType,
        window: int,
        min_count: int = 2
    ) -> HashGroups: ...

    def group_by_full_hash(self, paths: List[str], min_count: int = 2) -> HashGroups: ...


class Deduplicator(Protocol):
    """
    Interface for the main deduplication engine.

    Coordinates the stages (size → last bytes → first bytes → full hash).
    """
    def find_candidates(
        self,
        params: DeduplicationParams,
        stats: Optional[DeduplicationStats] = None
    ) -> SizeBuckets:
        """Run traversal and the cheap elimination stages, return surviving buckets."""
        ...

    def confirm_duplicates(
        self,
        candidates: SizeBuckets,
        params: Optional[DeduplicationParams] = None,
        stats: Optional[DeduplicationStats] = None
    ) -> Iterator[Tuple[int, HashGroups]]:
        """Yield (size, digest groups) for each bucket, one bucket at a time."""
        ...
