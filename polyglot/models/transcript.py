"""Transcript-related data models."""

from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class TranscriptSegment:
    """One attributed, timestamped unit of transcribed speech."""
    speaker: str
    timestamp: str  # Wall-clock time as HH:MM:SS
    text: str

    def with_text(self, text: str) -> "TranscriptSegment":
        """Return a copy of this segment carrying different text."""
        return TranscriptSegment(speaker=self.speaker, timestamp=self.timestamp, text=text)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TranscriptSummary:
    """Summary statistics derived from the original transcript."""
    word_count: int = 0
    speaker_count: int = 0
    avg_words: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wordCount": self.word_count,
            "speakerCount": self.speaker_count,
            "avgWords": self.avg_words,
        }
