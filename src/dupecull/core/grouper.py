"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file grouping by size and by content digest using an injected Hasher.
"""

from typing import List, Dict, Any, Callable, TypeVar
from collections import defaultdict
from dupecull.core.interfaces import FileGrouper, Hasher
from dupecull.core.models import File, ScanType, SizeBuckets, HashGroups
from dupecull.core.hasher import HasherImpl

T = TypeVar("T")


class FileGrouperImpl(FileGrouper):
    """
    A concrete implementation of FileGrouper.
    Uses an injected Hasher instance for flexibility and testability.
    """

    def __init__(self, hasher: Hasher = None):
        self.hasher = hasher or HasherImpl()

    def group_by_size(self, files: List[File], min_count: int = 2) -> SizeBuckets:
        """Groups files by their size, keeping paths in input order."""
        groups = self._group_by(files, lambda f: f.size, min_count)
        return {size: [f.path for f in group] for size, group in groups.items()}

    def group_by_partial_hash(
        self,
        paths: List[str],
        size: int,
        scan_type: ScanType,
        window: int,
        min_count: int = 2
    ) -> HashGroups:
        """Groups same-size files by the digest of their first or last `window` bytes."""
        return self._group_by(
            paths,
            lambda p: self.hasher.compute_partial_hash(p, size, scan_type, window),
            min_count
        )

    def group_by_full_hash(self, paths: List[str], min_count: int = 2) -> HashGroups:
        """Groups files by full content digest."""
        return self._group_by(paths, self.hasher.compute_full_hash, min_count)

    @staticmethod
    def _group_by(items: List[T], key_func: Callable[[T], Any], min_count: int) -> Dict[Any, List[T]]:
        """
        Helper method to group items by any computed key.
        Errors raised by key_func propagate to the caller.
        Args:
            items: Items to group
            key_func: Function that computes a hashable key from an item
            min_count: Smallest group size kept
        Returns:
            Dict[key, List[item]], members in input order
        """
        groups = defaultdict(list)
        for item in items:
            groups[key_func(item)].append(item)

        return {key: group for key, group in groups.items() if len(group) >= min_count}
