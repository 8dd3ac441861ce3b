"""Accumulating audio buffer for flush-based transcription."""

import logging
from typing import List, Tuple

import numpy as np

from ..models.events import AudioEvent

logger = logging.getLogger(__name__)


def peak_level(audio_data: bytes) -> float:
    """Return the peak amplitude of 16-bit PCM audio in the range 0.0-1.0."""
    if len(audio_data) < 2:
        return 0.0
    usable = len(audio_data) - (len(audio_data) % 2)
    samples = np.frombuffer(audio_data[:usable], dtype=np.int16)
    return float(np.max(np.abs(samples.astype(np.int32)))) / 32768.0


class ChunkBuffer:
    """Collects raw audio chunks between flush boundaries."""

    def __init__(self):
        self.events: List[AudioEvent] = []

    def __len__(self) -> int:
        return len(self.events)

    def add_event(self, event: AudioEvent) -> None:
        """Append a captured chunk."""
        if not event.audio_data:
            return
        self.events.append(event)

    def drain(self) -> Tuple[List[AudioEvent], bytes]:
        """Return the buffered events and their joined audio, leaving the buffer empty."""
        events = self.events
        audio = b''.join(event.audio_data for event in events)
        self.clear()
        logger.debug(f"Drained {len(events)} chunks ({len(audio)} bytes)")
        return events, audio

    def clear(self) -> None:
        self.events = []
