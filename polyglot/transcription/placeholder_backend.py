"""Offline backend that marks audible buffers without recognizing words."""

import logging
from datetime import datetime
from typing import List

from .base import AbstractTranscriptionBackend
from ..audio.buffer import peak_level
from ..models.transcript import TranscriptSegment

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "Meeting in progress..."


class PlaceholderBackend(AbstractTranscriptionBackend):
    """Emits one placeholder segment for every buffer louder than the silence threshold."""

    def __init__(self, silence_threshold: float = 0.01, default_speaker: str = "Speaker 1"):
        super().__init__(default_speaker=default_speaker)
        self.silence_threshold = silence_threshold

    def initialize(self) -> bool:
        return True

    def transcribe_chunk(self, chunk_id: str, audio_chunk: bytes,
                         captured_at: datetime) -> List[TranscriptSegment]:
        level = peak_level(audio_chunk)
        if level < self.silence_threshold:
            logger.debug(f"{chunk_id}: silent buffer (peak {level:.3f})")
            return []

        return [TranscriptSegment(
            speaker=self.default_speaker,
            timestamp=self.format_timestamp(captured_at),
            text=PLACEHOLDER_TEXT,
        )]

    def cleanup(self) -> None:
        pass
