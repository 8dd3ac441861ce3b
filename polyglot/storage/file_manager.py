"""File management module for exported session snapshots."""

import logging
from pathlib import Path


logger = logging.getLogger(__name__)


class ExportFileManager:
    """Writes export artifacts into a single export directory."""

    def __init__(self, export_dir: str = "./exports"):
        """Initialize file manager with export directory.

        Args:
            export_dir: Directory receiving exported documents. Created on
                        first write, not at construction.
        """
        self.export_dir = Path(export_dir)
        logger.info(f"ExportFileManager initialized with export_dir: {self.export_dir}")

    def _ensure_directory(self) -> None:
        self.export_dir.mkdir(parents=True, exist_ok=True)

    def unique_path(self, filename: str) -> Path:
        """Return a path for ``filename`` that does not overwrite an earlier export."""
        candidate = self.export_dir / filename
        stem, suffix = candidate.stem, candidate.suffix
        counter = 1
        while candidate.exists():
            candidate = self.export_dir / f"{stem}_{counter}{suffix}"
            counter += 1
        return candidate

    def save_export(self, content: str, filename: str) -> str:
        """Write serialized export content.

        Args:
            content: Serialized document
            filename: Preferred file name

        Returns:
            Full path of the written file

        Raises:
            OSError: the file could not be written
        """
        self._ensure_directory()
        path = self.unique_path(filename)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        logger.info(f"Export saved: {path} ({len(content)} chars)")
        return str(path)
