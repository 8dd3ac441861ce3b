"""Abstract base classes for transcription backends."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List
import logging

from ..models.transcript import TranscriptSegment

logger = logging.getLogger(__name__)


class AbstractTranscriptionBackend(ABC):
    """Abstract base class for transcription backends."""

    def __init__(self, language: str = "en-US", default_speaker: str = "Speaker 1"):
        """Initialize backend with language preference."""
        self.language = language
        self.default_speaker = default_speaker

    @abstractmethod
    def transcribe_chunk(self, chunk_id: str, audio_chunk: bytes,
                         captured_at: datetime) -> List[TranscriptSegment]:
        """Transcribe a buffer of raw audio into zero or more segments.

        Args:
            chunk_id: Identifier of the flushed buffer, for logging
            audio_chunk: Raw 16-bit PCM audio
            captured_at: Wall-clock time used to stamp produced segments

        Returns:
            Segments in spoken order; empty when no speech was found
        """
        pass

    @abstractmethod
    def initialize(self) -> bool:
        """Initialize backend resources and verify configuration.

        Returns:
            True if initialization successful, False otherwise
        """
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Clean up backend resources."""
        pass

    @staticmethod
    def format_timestamp(moment: datetime) -> str:
        return moment.strftime("%H:%M:%S")
