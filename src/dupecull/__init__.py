"""
dupecull — finds byte-identical files and keeps only one of each.

Core features:
- Staged elimination: size → last bytes → first bytes → full content hash
- Hard links and symbolic links are never reported as duplicates
- Deterministic survivor: the first file in traversal order is kept
- Dry run by default; permanent deletion or system trash (via send2trash) on request
- CLI interface for headless/server usage
"""

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("dupecull")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from dupecull.commands import DeduplicationCommand
from dupecull.core import (
    DeduplicationParams, DeduplicationStats, TraversalOrder, HashAlgorithmName, ScanType,
    File, FileIdentity, DuplicateResult)
from dupecull.utils.convert_utils import ConvertUtils
from dupecull.services import DuplicateService, RemovalLedger, FileService

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "DeduplicationStats",
    "TraversalOrder",
    "HashAlgorithmName",
    "ScanType",
    "File",
    "FileIdentity",
    "DuplicateResult",
    "ConvertUtils",
    "DuplicateService",
    "RemovalLedger",
    "FileService",
    "__version__",
]
