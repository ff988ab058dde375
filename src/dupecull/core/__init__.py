"""
Core deduplication engine — scanner, hasher, grouper, stages and pipeline driver.

This package contains the performance-critical foundation of dupecull:
- FileScannerImpl: deterministic traversal with size filters and hard-link suppression
- HasherImpl + Sha512AlgorithmImpl / XXHashAlgorithmImpl: partial and full content digests
- FileGrouperImpl: size and digest grouping with threshold filtering
- DeduplicatorImpl: staged pipeline (size → last bytes → first bytes → full hash)
- Models: File, FileIdentity, DuplicateResult and configuration objects

No console or filesystem-mutating code lives here.
"""

from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, Sha512AlgorithmImpl, XXHashAlgorithmImpl, get_algorithm
from .deduplicator import DeduplicatorImpl
from .stages import SizeStageImpl, PartialHashStage, FullHashStage, bucket_totals
from .models import (
    File, FileIdentity, DuplicateResult, BucketSummary, DeduplicationParams, DeduplicationStats,
    ScanType, TraversalOrder, HashAlgorithmName, Stage, SizeBuckets, HashGroups)

__all__ = [
    "FileScannerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "Sha512AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "get_algorithm",
    "DeduplicatorImpl",
    "SizeStageImpl",
    "PartialHashStage",
    "FullHashStage",
    "bucket_totals",
    "File",
    "FileIdentity",
    "DuplicateResult",
    "BucketSummary",
    "DeduplicationParams",
    "DeduplicationStats",
    "ScanType",
    "TraversalOrder",
    "HashAlgorithmName",
    "Stage",
    "SizeBuckets",
    "HashGroups",
]
