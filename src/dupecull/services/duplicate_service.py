"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/duplicate_service.py
Survivor selection and removal bookkeeping for confirmed duplicate groups.
"""
import logging
from typing import List, Optional, Callable, Any

from dupecull.core.models import DuplicateResult

logger = logging.getLogger(__name__)


class DuplicateService:
    @staticmethod
    def keep_first(
        checksum: str,
        size: int,
        files: List[str],
        sort_key: Optional[Callable[[str], Any]] = None
    ) -> DuplicateResult:
        """
        Keeps the first file of a confirmed group and marks the rest for removal.

        Args:
            checksum: Full content digest shared by the group
            size: Common file size in bytes
            files: Members in traversal order
            sort_key: Optional key reordering the members before the survivor is picked

        Returns:
            DuplicateResult with one survivor and every other member in `removed`
        """
        if not files:
            raise ValueError("Cannot resolve an empty duplicate group")

        ordered = sorted(files, key=sort_key) if sort_key else list(files)
        return DuplicateResult(checksum=checksum, size=size, survivor=ordered[0], removed=ordered[1:])


class RemovalLedger:
    """
    Accumulates freed files and bytes across groups and removes files when a remover is set.
    Without a remover the same bookkeeping happens and the filesystem is left untouched.
    """

    def __init__(self, remover: Optional[Callable[[str], None]] = None):
        self.remover = remover
        self.freed_files = 0
        self.freed_bytes = 0
        self.removed_paths: List[str] = []

    @property
    def dry_run(self) -> bool:
        return self.remover is None

    def apply(self, result: DuplicateResult) -> None:
        """
        Accounts for every file marked for removal in `result`.
        A failing removal raises and stops; files removed before it stay removed.
        """
        for path in result.removed:
            if self.remover is not None:
                self.remover(path)
                self.removed_paths.append(path)
            self.freed_files += 1
            self.freed_bytes += result.size
        logger.debug(
            f"Group {result.checksum[:16]}: kept {result.survivor}, "
            f"{len(result.removed)} marked ({'dry run' if self.dry_run else 'removed'})"
        )
