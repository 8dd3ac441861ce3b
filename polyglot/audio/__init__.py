"""Audio capture and buffering module."""

from .capture import AudioCapture
from .buffer import ChunkBuffer, peak_level

__all__ = [
    'AudioCapture',
    'ChunkBuffer',
    'peak_level',
]
