from .duplicate_service import DuplicateService, RemovalLedger
from .file_service import FileService

__all__ = ["DuplicateService", "RemovalLedger", "FileService"]
