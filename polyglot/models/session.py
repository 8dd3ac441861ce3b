"""Session-related data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

EMPTY_DURATION = "00:00"


class RecordingState(Enum):
    """Lifecycle states of the capture pipeline."""
    IDLE = "idle"
    ACQUIRING = "acquiring"
    RECORDING = "recording"
    STOPPING = "stopping"
    FALLBACK = "fallback"


@dataclass
class Session:
    """Timing information for the current recording session."""
    start_epoch: Optional[float] = None  # Unix timestamp of first acquisition
    duration_display: str = EMPTY_DURATION
