"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and configuration objects for duplicate detection.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union, Callable
from pathlib import Path
from enum import Enum
import os


# size -> ordered candidate paths
SizeBuckets = Dict[int, List[str]]
# hex digest -> member paths (always within one size bucket)
HashGroups = Dict[str, List[str]]

DEFAULT_SCAN_SIZE = 1024 * 1024
DEFAULT_MIN_COUNT = 2


# =============================
# Enums
# =============================

class ScanType(Enum):
    """Which end of a file a partial hash is taken from."""
    FIRST = "first"
    LAST = "last"


class TraversalOrder(Enum):
    """
    Order in which files are discovered.
    The first file of a confirmed group (in this order) is the one that is kept.
    """
    IDENTITY = "identity"
    NAME = "name"
    DEPTH = "depth"

    def __repr__(self) -> str:
        return self.value


class HashAlgorithmName(Enum):
    SHA512 = "sha512"
    XXHASH = "xxhash"

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    SIZE = "Size grouping"
    LAST = "Last-bytes Hash"
    FIRST = "First-bytes Hash"
    FULL = "Full Hash"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True, order=True)
class FileIdentity:
    """Device and inode of the underlying file, independent of the path used to reach it."""
    device: int
    inode: int

    @staticmethod
    def from_stat(stat_result: os.stat_result) -> 'FileIdentity':
        return FileIdentity(device=stat_result.st_dev, inode=stat_result.st_ino)


@dataclass
class File:
    """
    A regular file found during traversal.
    """
    path: str
    size: int  # in bytes
    identity: Optional[FileIdentity] = None
    name: Optional[str] = None

    def __post_init__(self):
        if self.name is None:
            self.name = os.path.basename(self.path)

    def __repr__(self):
        return f"<File path={self.path}, size={self.size}>"


@dataclass
class DuplicateResult:
    """
    A confirmed group of byte-identical files.
    Exactly one survivor is kept, every other member is marked for removal.
    """
    checksum: str
    size: int
    survivor: str
    removed: List[str] = field(default_factory=list)

    @property
    def files(self) -> List[str]:
        return [self.survivor] + self.removed

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.removed) + 1

    @property
    def freed_bytes(self) -> int:
        return self.size * len(self.removed)

    def __repr__(self):
        return f"<DuplicateResult size={self.size}, count={self.duplicate_count}>"


@dataclass
class BucketSummary:
    """Cumulative counters published after each size bucket is resolved."""
    size: int
    freed_files: int
    freed_bytes: int
    files_remaining: int
    bytes_remaining: int


class DeduplicationStats:
    """
    Statistics collected during the deduplication process.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.freed_files: int = 0
        self.freed_bytes: int = 0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self._listeners: List[Callable[[str, Dict], None]] = []

    def add_listener(self, listener: Callable[[str, Dict], None]):
        """Adds a listener to receive updates when stats are updated."""
        self._listeners.append(listener)

    def update_stage(
            self,
            stage_name: str,
            files: int,
            total_bytes: int,
            duration: float
    ) -> None:
        self.stage_stats[stage_name] = {
            "files": files,
            "bytes": total_bytes,
            "time": duration
        }

        for listener in self._listeners:
            listener(stage_name, self.stage_stats[stage_name])

    def notify_stage_start(self, stage_name: str, **details):
        """Notifies listeners that a new stage (or a bucket of the full hash stage) has started."""
        for listener in self._listeners:
            listener(stage_name, {"status": "started", **details})

    def print_summary(self) -> str:
        lines = [
            "Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: FILES / BYTES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            lines.append(f"{stage}: {data['files']} / {ConvertUtils.bytes_to_human(data['bytes'])} / {data['time']:.3f}s")

        lines.append(f"Removed: {self.freed_files} files / {ConvertUtils.bytes_to_human(self.freed_bytes)}")
        return "\n".join(lines)


"""
DTO for deduplication parameters with built-in validation.
"""
from dupecull.utils.convert_utils import ConvertUtils


@dataclass
class DeduplicationParams:
    """Parameters for a deduplication run with validation."""
    roots: List[str]
    min_size_bytes: int = 1
    max_size_bytes: int = 0  # 0 = no limit
    min_count: int = DEFAULT_MIN_COUNT
    scan_size_bytes: int = DEFAULT_SCAN_SIZE
    delete_files: bool = False
    use_trash: bool = False
    order: TraversalOrder = TraversalOrder.IDENTITY
    algorithm: HashAlgorithmName = HashAlgorithmName.SHA512

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.roots:
            raise ValueError("At least one directory is required")

        if self.min_size_bytes < 1:
            raise ValueError("Minimum size must be at least 1 byte")

        if self.max_size_bytes < 0:
            raise ValueError("Maximum size cannot be negative")

        if self.max_size_bytes and self.max_size_bytes < self.min_size_bytes:
            raise ValueError("Maximum size cannot be less than minimum size")

        if self.min_count < 2:
            raise ValueError("Duplicate count must be at least 2")

        if self.scan_size_bytes < 1:
            raise ValueError("Scan size must be at least 1 byte")

        if self.use_trash and not self.delete_files:
            raise ValueError("Moving to trash requires deletion to be enabled")

        self.roots = self._canonical_roots(self.roots)

    @property
    def max_size_limit(self) -> Optional[int]:
        """Upper size bound, or None when unbounded."""
        return self.max_size_bytes or None

    @staticmethod
    def _canonical_roots(roots: List[str]) -> List[str]:
        """Resolve roots to absolute paths and collapse repeats, keeping first-seen order."""
        canonical = []
        for root in roots:
            path = Path(root).expanduser().resolve()
            if not path.exists():
                raise ValueError(f"Directory does not exist: {root}")
            if not path.is_dir():
                raise ValueError(f"Not a directory: {root}")
            if str(path) not in canonical:
                canonical.append(str(path))
        return canonical

    @staticmethod
    def from_human_readable(
            roots: List[str],
            min_size_str: str = "1",
            max_size_str: str = "0",
            min_count: int = DEFAULT_MIN_COUNT,
            scan_size_str: str = "1M",
            delete_files: bool = False,
            use_trash: bool = False,
            order: TraversalOrder = TraversalOrder.IDENTITY,
            algorithm: HashAlgorithmName = HashAlgorithmName.SHA512,
    ) -> 'DeduplicationParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        return DeduplicationParams(
            roots=list(roots),
            min_size_bytes=ConvertUtils.human_to_bytes(min_size_str),
            max_size_bytes=ConvertUtils.human_to_bytes(max_size_str),
            min_count=min_count,
            scan_size_bytes=ConvertUtils.human_to_bytes(scan_size_str),
            delete_files=delete_files,
            use_trash=use_trash,
            order=order,
            algorithm=algorithm,
        )
