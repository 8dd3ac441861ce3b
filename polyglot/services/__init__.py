"""Services layer for Polyglot session logic."""

from .transcript_store import TranscriptStore, compute_summary
from .session_clock import SessionClock, format_duration
from .export_serializer import ExportSerializer
from .recording_service import RecordingController
from .meeting_session import MeetingSession

__all__ = [
    "TranscriptStore",
    "compute_summary",
    "SessionClock",
    "format_duration",
    "ExportSerializer",
    "RecordingController",
    "MeetingSession",
]
