"""Meeting session: wires recording, transcript, clock and export together."""

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from pubsub import pub

from ..audio.capture import AudioCapture
from ..config import PolyglotConfig
from ..models.session import RecordingState
from ..models.transcript import TranscriptSegment
from ..models.ui import SessionView
from ..storage.file_manager import ExportFileManager
from ..transcription.base import AbstractTranscriptionBackend
from ..transcription.factory import create_backend
from ..transcription.publisher import BATCH_TOPIC, TranscriptPublisher
from ..transcription.sources import FallbackTranscriptionSource, LiveTranscriptionSource
from ..translation.service import LANGUAGES, TranslationService
from .export_serializer import ExportSerializer
from .recording_service import RecordingController
from .session_clock import SessionClock
from .transcript_store import TranscriptStore

logger = logging.getLogger(__name__)


class MeetingSession:
    """Application state behind the presentation layer.

    Exposes the user operations (toggle, reset, export, language and settings
    changes) and a ``view()`` snapshot of everything there is to render.
    """

    def __init__(self,
                 config: PolyglotConfig,
                 capture: Optional[AudioCapture] = None,
                 backend: Optional[AbstractTranscriptionBackend] = None,
                 translator: Optional[TranslationService] = None,
                 file_manager: Optional[ExportFileManager] = None,
                 clock: Callable[[], float] = time.time):
        """Initialize meeting session.

        Args:
            config: Application configuration
            capture: Capture device, built from ``audio.*`` settings if omitted
            backend: Transcription backend, built from ``transcription.backend`` if omitted
            translator: Translation service, built from ``translation.phrasebook_path`` if omitted
            file_manager: Export writer, built from ``storage.export_directory`` if omitted
            clock: Time source for the session clock
        """
        self.config = config
        self.session_id = uuid.uuid4().hex[:12]
        self.topic = f"{BATCH_TOPIC}_{self.session_id}"

        self.translator = translator or TranslationService.from_file(
            config.get('translation.phrasebook_path')
        )
        self.store = TranscriptStore(self.translator)
        self.clock = SessionClock(clock=clock,
                                  tick_interval=config.get('session.tick_interval_seconds', 1.0))
        self.serializer = ExportSerializer()
        self.file_manager = file_manager or ExportFileManager(config.get_export_directory())

        self.target_language = config.get('translation.target_language', 'spanish')
        self.settings_open = False

        self.backend = backend or create_backend(config)
        self.publisher = TranscriptPublisher(self.topic)
        capture = capture or AudioCapture(
            sample_rate=config.get('audio.sample_rate', 16000),
            chunk_size=config.get('audio.chunk_size', 1024),
            channels=config.get('audio.channels', 1),
            device_index=config.get('audio.device_index'),
        )
        self.recorder = RecordingController(
            capture=capture,
            live_source=LiveTranscriptionSource(
                backend=self.backend,
                batch_callback=self.publisher.get_callback(),
                flush_chunks=config.get('transcription.flush_chunks', 80),
            ),
            fallback_source=FallbackTranscriptionSource(
                batch_callback=self.publisher.get_callback(),
                delay_seconds=config.get('transcription.fallback_delay_seconds', 1.0),
            ),
            on_recording_started=self._on_recording_started,
        )

        pub.subscribe(self._on_batch, self.topic)
        logger.info(f"MeetingSession {self.session_id} ready (target language: {self.target_language})")

    def _on_batch(self, batch: List[TranscriptSegment]) -> None:
        self.store.append(batch, self.target_language)

    def _on_recording_started(self) -> None:
        self.clock.start()

    async def start(self) -> None:
        """Begin periodic clock ticks on the running loop."""
        self.clock.start_ticker()

    async def toggle_recording(self) -> RecordingState:
        return await self.recorder.toggle_recording()

    def reset(self) -> None:
        """Clear both transcripts and the session clock."""
        self.store.reset()
        self.clock.reset()
        logger.info("Session reset")

    def set_target_language(self, code: str) -> None:
        """Change the language used for segments appended from now on."""
        if code not in LANGUAGES:
            logger.warning(f"Unknown language code '{code}', segments will pass through untranslated")
        self.target_language = code
        logger.info(f"Target language set to: {code}")

    def open_settings(self) -> None:
        self.settings_open = True

    def close_settings(self) -> None:
        self.settings_open = False

    def build_snapshot(self, exported_at: Optional[datetime] = None) -> Dict[str, Any]:
        return self.serializer.build_snapshot(
            original=self.store.original,
            translated=self.store.translated,
            session=self.clock.session,
            summary=self.store.summary(),
            exported_at=exported_at,
        )

    def export_session(self) -> Dict[str, Any]:
        """Build the snapshot and write it to the export directory.

        A failed write is reported in the result and not retried.

        Returns:
            Result dictionary with success status, path and document
        """
        exported_at = datetime.now(timezone.utc)
        document = self.build_snapshot(exported_at)
        filename = self.serializer.export_filename(exported_at)
        try:
            path = self.file_manager.save_export(self.serializer.to_json(document), filename)
        except Exception as e:
            logger.error(f"Error exporting session: {e}")
            return {
                "success": False,
                "error": str(e),
                "document": document,
            }

        return {
            "success": True,
            "path": path,
            "document": document,
        }

    def view(self) -> SessionView:
        return SessionView(
            state=self.recorder.state,
            is_recording=self.recorder.is_recording,
            is_processing=self.recorder.is_processing,
            original=self.store.original,
            translated=self.store.translated,
            duration_display=self.clock.duration_display,
            summary=self.store.summary(),
            target_language=self.target_language,
            settings_open=self.settings_open,
        )

    async def shutdown(self) -> None:
        """Stop recording, cancel the clock and release every resource."""
        try:
            await self.recorder.shutdown()
        finally:
            await self.clock.stop_ticker()
            pub.unsubscribe(self._on_batch, self.topic)
            self.backend.cleanup()
            logger.info(f"MeetingSession {self.session_id} shut down")
