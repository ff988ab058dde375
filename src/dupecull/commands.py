"""
Unified command orchestrator for a deduplication run.
This is the SINGLE source of truth for business logic — the CLI only renders its events.
"""
import time
import logging
from typing import List, Optional, Callable, Tuple, Any

from dupecull.core.models import (
    DuplicateResult, DeduplicationStats, DeduplicationParams, BucketSummary
)
from dupecull.core.deduplicator import DeduplicatorImpl
from dupecull.core.stages import bucket_totals
from dupecull.services.duplicate_service import DuplicateService, RemovalLedger
from dupecull.services.file_service import FileService

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the entire workflow:
    1. Traverse roots and run size / last-bytes / first-bytes elimination
    2. Hash each remaining size bucket fully
    3. Keep one file per confirmed group, account for (and optionally remove) the rest

    Usage:
        params = DeduplicationParams(roots=[...], delete_files=False)
        command = DeduplicationCommand()
        results, stats = command.execute(
            params,
            group_callback=print_group,
            bucket_callback=print_running_totals
        )
    """

    def __init__(
        self,
        deduplicator: Optional[DeduplicatorImpl] = None,
        survivor_sort_key: Optional[Callable[[str], Any]] = None
    ):
        self._deduplicator = deduplicator or DeduplicatorImpl()
        self._survivor_sort_key = survivor_sort_key
        self.ledger: Optional[RemovalLedger] = None

    @staticmethod
    def _remover_for(params: DeduplicationParams) -> Optional[Callable[[str], None]]:
        if not params.delete_files:
            return None
        return FileService.move_to_trash if params.use_trash else FileService.delete_file

    def execute(
            self,
            params: DeduplicationParams,
            stage_listener: Optional[Callable[[str, dict], None]] = None,
            group_callback: Optional[Callable[[DuplicateResult], None]] = None,
            bucket_callback: Optional[Callable[[BucketSummary], None]] = None
    ) -> Tuple[List[DuplicateResult], DeduplicationStats]:
        """
        Execute a run with given parameters.

        Args:
            params: Validated deduplication parameters
            stage_listener: (stage_name, data) with data {"status": "started", ...} when a stage
                (or a full-hash bucket) begins, {"files", "bytes", "time"} when a stage ends
            group_callback: Called with each confirmed group, after its files were handled
            bucket_callback: Called with cumulative totals after each size bucket

        Returns:
            Tuple of (confirmed duplicate groups, statistics)

        Raises:
            RuntimeError: If traversal, reading or removal fails
        """
        stats = DeduplicationStats()
        if stage_listener:
            stats.add_listener(stage_listener)
        self.ledger = RemovalLedger(self._remover_for(params))
        total_start_time = time.time()

        candidates = self._deduplicator.find_candidates(params, stats)
        files_remaining, bytes_remaining = bucket_totals(candidates)

        results: List[DuplicateResult] = []
        for size, hash_groups in self._deduplicator.confirm_duplicates(candidates, params, stats):
            files_remaining -= len(candidates[size])
            bytes_remaining -= size * len(candidates[size])

            for checksum, files in hash_groups.items():
                if len(files) < params.min_count:
                    logger.debug(f"Too few files with same checksum ({len(files)}) for {checksum[:16]}")
                    continue

                result = DuplicateService.keep_first(checksum, size, files, self._survivor_sort_key)
                try:
                    self.ledger.apply(result)
                finally:
                    stats.freed_files = self.ledger.freed_files
                    stats.freed_bytes = self.ledger.freed_bytes
                results.append(result)
                if group_callback:
                    group_callback(result)

            if bucket_callback:
                bucket_callback(BucketSummary(
                    size=size,
                    freed_files=self.ledger.freed_files,
                    freed_bytes=self.ledger.freed_bytes,
                    files_remaining=files_remaining,
                    bytes_remaining=bytes_remaining,
                ))

        stats.total_time = time.time() - total_start_time
        return results, stats
