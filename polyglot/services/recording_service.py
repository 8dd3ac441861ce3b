"""Recording controller that owns the capture device and its lifecycle."""

import asyncio
import logging
from typing import Callable, Optional

from ..audio.capture import AudioCapture
from ..models.events import AudioEvent
from ..models.session import RecordingState
from ..transcription.sources import (
    FallbackTranscriptionSource,
    LiveTranscriptionSource,
    TranscriptionSource,
)

logger = logging.getLogger(__name__)


class RecordingController:
    """State machine driving capture acquisition and transcription sources.

    States move ``IDLE -> ACQUIRING -> RECORDING -> STOPPING -> IDLE``, with
    ``ACQUIRING -> FALLBACK -> RECORDING`` when the device cannot be opened.
    Toggles that arrive while a transition is in flight are ignored.
    The capture handle belongs to this controller alone.
    """

    def __init__(self,
                 capture: AudioCapture,
                 live_source: LiveTranscriptionSource,
                 fallback_source: FallbackTranscriptionSource,
                 on_recording_started: Optional[Callable[[], None]] = None):
        """Initialize recording controller.

        Args:
            capture: Capture device handle, exclusively owned from here on
            live_source: Source fed by the capture device
            fallback_source: Scripted source used when capture is unavailable
            on_recording_started: Called on every entry into RECORDING
        """
        self.capture = capture
        self.live_source = live_source
        self.fallback_source = fallback_source
        self.on_recording_started = on_recording_started

        self.state = RecordingState.IDLE
        self.active_source: Optional[TranscriptionSource] = None

    @property
    def is_recording(self) -> bool:
        return self.state is RecordingState.RECORDING

    @property
    def is_processing(self) -> bool:
        return self.active_source is not None and self.active_source.is_processing

    @property
    def using_fallback(self) -> bool:
        return self.active_source is self.fallback_source

    def _set_state(self, state: RecordingState) -> None:
        if state is not self.state:
            logger.info(f"Recording state: {self.state.value} -> {state.value}")
            self.state = state

    async def toggle_recording(self) -> RecordingState:
        """Start recording when idle, stop when recording, otherwise do nothing.

        Returns:
            The state after the toggle settled
        """
        if self.state is RecordingState.IDLE:
            await self._start()
        elif self.state is RecordingState.RECORDING:
            await self._stop()
        else:
            logger.debug(f"Toggle ignored while {self.state.value}")
        return self.state

    async def _start(self) -> None:
        self._set_state(RecordingState.ACQUIRING)
        loop = asyncio.get_running_loop()

        try:
            # Live source accepts chunks before the first one can arrive
            await self.live_source.start()
            self.active_source = self.live_source
            try:
                await loop.run_in_executor(None, self.capture.open, self._on_audio_event, loop)
            except Exception as e:
                logger.warning(f"Audio capture unavailable, switching to fallback source: {e}")
                self._release_capture()
                await self.live_source.stop()
                self._set_state(RecordingState.FALLBACK)
                self.active_source = self.fallback_source
                await self.fallback_source.start()
        except BaseException:
            self._release_capture()
            self.active_source = None
            self._set_state(RecordingState.IDLE)
            raise

        self._set_state(RecordingState.RECORDING)
        if self.on_recording_started:
            self.on_recording_started()

    async def _stop(self) -> None:
        self._set_state(RecordingState.STOPPING)
        source = self.active_source
        try:
            if self.capture.is_open:
                self.capture.stop_stream()
                # Let chunks already handed to the loop reach the source
                await asyncio.sleep(0)
            if source is not None:
                # Pending audio is flushed and its batch applied before IDLE
                await source.stop()
        finally:
            self._release_capture()
            self.active_source = None
            self._set_state(RecordingState.IDLE)

    def _on_audio_event(self, event: AudioEvent) -> None:
        if self.active_source is self.live_source:
            self.live_source.feed(event)

    def _release_capture(self) -> None:
        try:
            self.capture.close()
        except Exception as e:
            logger.error(f"Error releasing audio capture: {e}")

    async def shutdown(self) -> None:
        """Stop any active recording and release the device."""
        if self.state is RecordingState.RECORDING:
            await self._stop()
        self._release_capture()
        logger.info("RecordingController shut down")
