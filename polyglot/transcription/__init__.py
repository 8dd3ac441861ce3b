"""Transcription module for Polyglot."""

from .base import AbstractTranscriptionBackend
from .placeholder_backend import PlaceholderBackend, PLACEHOLDER_TEXT
from .publisher import TranscriptPublisher, BATCH_TOPIC
from .sources import (
    TranscriptionSource,
    LiveTranscriptionSource,
    FallbackTranscriptionSource,
    FALLBACK_SCRIPT,
)

__all__ = [
    "AbstractTranscriptionBackend",
    "PlaceholderBackend",
    "PLACEHOLDER_TEXT",
    "TranscriptPublisher",
    "BATCH_TOPIC",
    "TranscriptionSource",
    "LiveTranscriptionSource",
    "FallbackTranscriptionSource",
    "FALLBACK_SCRIPT",
]
