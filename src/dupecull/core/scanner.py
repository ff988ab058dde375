"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements directory traversal for duplicate detection.
Features:
- Walks every root once, never following symbolic links
- Stays on the filesystem device of each root
- Applies size filters and drops zero-byte files
- Counts each physical file (device + inode) at most once
- Deterministic order: by inode, by name, or breadth-first by depth
"""

import os
import stat
import time
import logging
from collections import deque
from typing import List, Optional, Iterator, Set

from dupecull.core.models import File, FileIdentity, TraversalOrder
from dupecull.core.interfaces import FileScanner

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans root directories and collects regular files within the size limits.

    Attributes:
        roots: Directories to scan
        min_size: Minimum file size in bytes (inclusive)
        max_size: Maximum file size in bytes (inclusive), None for no limit
        order: Traversal order, decides which duplicate is met first
    """

    def __init__(
        self,
        roots: List[str],
        min_size: int = 1,
        max_size: Optional[int] = None,
        order: TraversalOrder = TraversalOrder.IDENTITY
    ):
        self.roots = list(roots)
        self.min_size = min_size
        self.max_size = max_size
        self.order = order

    def scan(self) -> List[File]:
        """
        Returns a filtered list of files found under all roots, in traversal order.

        Raises:
            RuntimeError: If a root is missing or any directory/entry cannot be read
        """
        logger.debug(f"Roots: {self.roots}")
        logger.debug(f"Filters: min_size={self.min_size}, max_size={self.max_size}, order={self.order.value}")

        found_files = []
        seen: Set[FileIdentity] = set()
        start_time = time.time()

        for root in self.roots:
            root_stat = self._stat(root)
            if not stat.S_ISDIR(root_stat.st_mode):
                error_msg = f"Not a directory: {root}"
                logger.error(error_msg)
                raise RuntimeError(error_msg)

            for entry_path in self._iter_files(root, root_stat.st_dev):
                file = self._process_file(entry_path, seen)
                if file:
                    found_files.append(file)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(found_files)} matching files.")
        return found_files

    def _iter_files(self, root: str, root_dev: int) -> Iterator[str]:
        """Yields non-directory entry paths below root in the configured order."""
        if self.order is TraversalOrder.DEPTH:
            pending = deque([root])
            while pending:
                for entry in self._list_dir(pending.popleft()):
                    if entry.is_dir(follow_symlinks=False):
                        if self._same_device(entry.path, root_dev):
                            pending.append(entry.path)
                    else:
                        yield entry.path
            return

        stack = [iter(self._list_dir(root))]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue
            if entry.is_dir(follow_symlinks=False):
                if self._same_device(entry.path, root_dev):
                    stack.append(iter(self._list_dir(entry.path)))
                continue
            yield entry.path

    def _list_dir(self, directory: str) -> List[os.DirEntry]:
        """Reads one directory and sorts its entries."""
        try:
            with os.scandir(directory) as it:
                entries = list(it)
            if self.order is TraversalOrder.IDENTITY:
                entries.sort(key=lambda e: (e.inode(), e.name))
            else:
                entries.sort(key=lambda e: e.name)
        except OSError as e:
            raise RuntimeError(f"Cannot read directory {directory}: {e}") from e
        return entries

    def _same_device(self, path: str, root_dev: int) -> bool:
        if self._stat(path).st_dev != root_dev:
            logger.debug(f"Skipping directory on another filesystem: {path}")
            return False
        return True

    @staticmethod
    def _stat(path: str) -> os.stat_result:
        try:
            return os.stat(path, follow_symlinks=False)
        except OSError as e:
            raise RuntimeError(f"Cannot read metadata of {path}: {e}") from e

    def _process_file(self, path: str, seen: Set[FileIdentity]) -> Optional[File]:
        """
        Process an individual entry and return a File if it passes all filters.
        Args:
            path: Entry path
            seen: Identities accepted so far, updated in place
        Returns:
            Optional[File]: File object if it passes filters, else None
        """
        stat_result = self._stat(path)

        if stat.S_ISLNK(stat_result.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return None

        if not stat.S_ISREG(stat_result.st_mode):
            logger.debug(f"Skipping non-regular entry: {path}")
            return None

        size = stat_result.st_size
        if size == 0:
            logger.debug(f"Skipping zero-byte file: {path}")
            return None

        if not self._size_passes(size):
            logger.debug(f"Skipping {path} (size {size} bytes outside range)")
            return None

        identity = FileIdentity.from_stat(stat_result)
        if identity in seen:
            logger.debug(f"Skipping {path} (same file already seen via another path)")
            return None
        seen.add(identity)

        return File(path=path, size=size, identity=identity)

    def _size_passes(self, size: int) -> bool:
        """
        Check if file size is within configured limits.
        Args:
            size: File size in bytes
        Returns:
            True if file meets size criteria
        """
        if self.min_size is not None and size < self.min_size:
            return False
        if self.max_size is not None and size > self.max_size:
            return False
        return True
