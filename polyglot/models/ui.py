"""UI-related data models."""

from dataclasses import dataclass, field
from typing import Tuple

from .session import EMPTY_DURATION, RecordingState
from .transcript import TranscriptSegment, TranscriptSummary


@dataclass(frozen=True)
class SessionView:
    """Read-only snapshot of everything the presentation layer renders."""
    state: RecordingState = RecordingState.IDLE
    is_recording: bool = False
    is_processing: bool = False
    original: Tuple[TranscriptSegment, ...] = ()
    translated: Tuple[TranscriptSegment, ...] = ()
    duration_display: str = EMPTY_DURATION
    summary: TranscriptSummary = field(default_factory=TranscriptSummary)
    target_language: str = "spanish"
    settings_open: bool = False
