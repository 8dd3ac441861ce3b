"""Snapshot document construction for session export."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from ..models.session import Session
from ..models.transcript import TranscriptSegment, TranscriptSummary

logger = logging.getLogger(__name__)

EXPORT_PREFIX = "meeting-transcript"


class ExportSerializer:
    """Builds the canonical JSON snapshot of a session."""

    def build_snapshot(self,
                       original: Sequence[TranscriptSegment],
                       translated: Sequence[TranscriptSegment],
                       session: Session,
                       summary: TranscriptSummary,
                       exported_at: Optional[datetime] = None) -> Dict[str, Any]:
        """Build the export document.

        Args:
            original: Original transcript stream
            translated: Translated transcript stream
            session: Session timing state
            summary: Summary statistics of the original stream
            exported_at: Export time, defaults to now (UTC)

        Returns:
            JSON-serializable document
        """
        exported_at = exported_at or datetime.now(timezone.utc)
        return {
            "session": {
                "duration": session.duration_display,
                "timestamp": self.format_timestamp(exported_at),
                "summary": summary.to_dict(),
            },
            "original": [segment.to_dict() for segment in original],
            "translated": [segment.to_dict() for segment in translated],
        }

    @staticmethod
    def format_timestamp(moment: datetime) -> str:
        """ISO-8601 in UTC with millisecond precision and a Z suffix."""
        if moment.tzinfo is None:
            moment = moment.astimezone()
        utc = moment.astimezone(timezone.utc)
        return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    @staticmethod
    def export_filename(moment: Optional[datetime] = None) -> str:
        moment = moment or datetime.now(timezone.utc)
        if moment.tzinfo is not None:
            moment = moment.astimezone(timezone.utc)
        return f"{EXPORT_PREFIX}-{moment.strftime('%Y-%m-%d')}.json"

    @staticmethod
    def to_json(document: Dict[str, Any]) -> str:
        return json.dumps(document, indent=2, ensure_ascii=False)
