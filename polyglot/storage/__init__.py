"""Storage module for Polyglot exports."""

from .file_manager import ExportFileManager

__all__ = ["ExportFileManager"]
