"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File removal operations: permanent deletion or move to the system trash.
"""
import os
import logging
from pathlib import Path
from send2trash import send2trash

logger = logging.getLogger(__name__)


class FileService:
    """
    Filesystem-mutating operations used when deletion is enabled.
    Every failure is raised as RuntimeError naming the file.
    """

    @staticmethod
    def delete_file(file_path: str):
        """Permanently removes a file."""
        try:
            os.remove(file_path)
        except FileNotFoundError as e:
            raise RuntimeError(f"File not found: {file_path}") from e
        except OSError as e:
            raise RuntimeError(f"Failed to delete {file_path}: {e}") from e
        logger.debug(f"Deleted {file_path}")

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path)

        if not path.exists():
            raise RuntimeError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e
        logger.debug(f"Moved to trash {file_path}")
