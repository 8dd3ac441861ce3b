"""Data models for the Polyglot application."""

from .transcript import TranscriptSegment, TranscriptSummary
from .session import Session, RecordingState, EMPTY_DURATION
from .events import AudioEvent
from .ui import SessionView

__all__ = [
    "TranscriptSegment",
    "TranscriptSummary",
    "Session",
    "RecordingState",
    "EMPTY_DURATION",
    "AudioEvent",
    "SessionView",
]
