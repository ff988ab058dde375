"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages for dupecull's multi-stage duplicate detection engine.

STAGES
------
SizeStageImpl     : Groups traversed files by exact size
PartialHashStage  : Re-groups each size bucket by the digest of its first or last N bytes
FullHashStage     : Groups one size bucket by full content digest

STAGE CONTRACTS
---------------
Each stage is a pure transformation:
  • Accepts the full mapping produced by the previous stage
  • Returns a new mapping, the input is never mutated
  • Never compares files of different sizes
  • Every bucket / group in the output has at least `min_count` members
  • Member order within a bucket is preserved, so the first file stays first
"""

import logging
from typing import List, Tuple

from dupecull.core.models import File, ScanType, SizeBuckets, HashGroups, Stage
from dupecull.core.grouper import FileGrouperImpl

logger = logging.getLogger(__name__)


def bucket_totals(buckets: SizeBuckets) -> Tuple[int, int]:
    """Returns (file count, total bytes) for a size-bucket mapping."""
    file_count = 0
    total_size = 0
    for size, files in buckets.items():
        file_count += len(files)
        total_size += size * len(files)
    return file_count, total_size


class SizeStageImpl:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    @staticmethod
    def get_stage_name() -> str:
        return Stage.SIZE.value

    def process(self, files: List[File], min_count: int = 2) -> SizeBuckets:
        """
        Group by file size.
        Returns buckets holding at least `min_count` files of the same size.
        """
        buckets = self.grouper.group_by_size(files, min_count)
        logger.debug(f"{self.get_stage_name()}: {len(files)} files -> {len(buckets)} buckets")
        return buckets


class PartialHashStage:
    """
    Eliminates candidates by hashing a fixed window at the start or end of each file.
    Buckets whose files fit entirely inside the window pass through unchanged.
    """

    def __init__(self, grouper: FileGrouperImpl, scan_type: ScanType):
        self.grouper = grouper
        self.scan_type = scan_type

    def get_stage_name(self) -> str:
        return Stage.FIRST.value if self.scan_type is ScanType.FIRST else Stage.LAST.value

    def process(self, buckets: SizeBuckets, window: int, min_count: int = 2) -> SizeBuckets:
        if window <= 0:
            raise ValueError("Scan window must be positive")

        refined: SizeBuckets = {}
        for size, files in buckets.items():
            if size <= window:
                refined[size] = list(files)
                continue

            hash_groups = self.grouper.group_by_partial_hash(
                files, size, self.scan_type, window, min_count
            )
            survivors = {path for group in hash_groups.values() for path in group}
            kept = [path for path in files if path in survivors]
            if kept:
                refined[size] = kept

        logger.debug(f"{self.get_stage_name()}: {len(buckets)} buckets -> {len(refined)} buckets")
        return refined


class FullHashStage:
    """
    Final identity check for a single size bucket.
    Groups of fewer than two files are dropped regardless of the configured count.
    """

    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    @staticmethod
    def get_stage_name() -> str:
        return Stage.FULL.value

    def process(self, files: List[str]) -> HashGroups:
        return self.grouper.group_by_full_hash(files, min_count=2)
