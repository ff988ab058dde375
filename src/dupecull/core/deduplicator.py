"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/deduplicator.py
Implements the staged elimination pipeline:
    traversal → size → last bytes → first bytes → full hash (per size bucket)
"""
import time
import logging
from typing import Iterator, Tuple, Optional, Callable

from dupecull.core.models import (
    DeduplicationParams, DeduplicationStats, ScanType, SizeBuckets, HashGroups, Stage
)
from dupecull.core.grouper import FileGrouperImpl
from dupecull.core.hasher import HasherImpl, get_algorithm
from dupecull.core.interfaces import Deduplicator, FileScanner
from dupecull.core.scanner import FileScannerImpl
from dupecull.core.stages import SizeStageImpl, PartialHashStage, FullHashStage, bucket_totals

logger = logging.getLogger(__name__)


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Runs the elimination stages strictly in sequence.
    Each stage receives the whole mapping produced by the previous one.
    """
    def __init__(
        self,
        grouper: Optional[FileGrouperImpl] = None,
        scanner_factory: Callable[[DeduplicationParams], FileScanner] = None
    ):
        self.grouper = grouper
        self.scanner_factory = scanner_factory or DeduplicatorImpl._default_scanner

    @staticmethod
    def _default_scanner(params: DeduplicationParams) -> FileScanner:
        return FileScannerImpl(
            roots=params.roots,
            min_size=params.min_size_bytes,
            max_size=params.max_size_limit,
            order=params.order
        )

    def _grouper_for(self, params: DeduplicationParams) -> FileGrouperImpl:
        if self.grouper is not None:
            return self.grouper
        return FileGrouperImpl(HasherImpl(get_algorithm(params.algorithm)))

    def find_candidates(
        self,
        params: DeduplicationParams,
        stats: Optional[DeduplicationStats] = None
    ) -> SizeBuckets:
        """
        Traverse the roots and run the cheap elimination stages.
        Args:
            params: Validated run parameters
            stats: Receives (files, bytes, time) after every stage
        Returns:
            Size buckets that still hold at least `params.min_count` candidates
        """
        grouper = self._grouper_for(params)

        if stats is not None:
            stats.notify_stage_start(Stage.SIZE.value)
        start_time = time.time()
        files = self.scanner_factory(params).scan()
        buckets = SizeStageImpl(grouper).process(files, params.min_count)
        DeduplicatorImpl._update_stats(stats, Stage.SIZE.value, buckets, time.time() - start_time)

        # Both passes always run, last bytes first
        for scan_type in (ScanType.LAST, ScanType.FIRST):
            if not buckets:
                break
            stage = PartialHashStage(grouper, scan_type)
            if stats is not None:
                stats.notify_stage_start(stage.get_stage_name())
            start_time = time.time()
            buckets = stage.process(buckets, params.scan_size_bytes, params.min_count)
            DeduplicatorImpl._update_stats(stats, stage.get_stage_name(), buckets, time.time() - start_time)

        return buckets

    def confirm_duplicates(
        self,
        candidates: SizeBuckets,
        params: Optional[DeduplicationParams] = None,
        stats: Optional[DeduplicationStats] = None
    ) -> Iterator[Tuple[int, HashGroups]]:
        """
        Hash every byte of every candidate, one size bucket at a time.
        Larger buckets are processed first. The caller resolves each bucket
        before the next one is read.
        """
        grouper = self._grouper_for(params) if params else (self.grouper or FileGrouperImpl())
        stage = FullHashStage(grouper)
        for size in sorted(candidates, reverse=True):
            files = candidates[size]
            logger.debug(f"{stage.get_stage_name()}: hashing {len(files)} files of {size} bytes")
            if stats is not None:
                stats.notify_stage_start(stage.get_stage_name(), size=size, files=len(files))
            yield size, stage.process(files)

    @staticmethod
    def _update_stats(
        stats: Optional[DeduplicationStats],
        stage: str,
        buckets: SizeBuckets,
        duration: float
    ):
        """
        Helper to update DeduplicationStats object.
        """
        file_count, total_size = bucket_totals(buckets)
        logger.debug(f"{stage}: {file_count} candidates, {total_size} bytes")
        if stats is not None:
            stats.update_stage(
                stage_name=stage,
                files=file_count,
                total_bytes=total_size,
                duration=duration
            )
