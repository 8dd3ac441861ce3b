"""Audio capture device wrapper delivering chunks to the event loop."""

import asyncio
import importlib
import time
import logging
from typing import Optional, Callable

from ..models.events import AudioEvent


logger = logging.getLogger(__name__)


class AudioCapture:
    """Microphone capture handle backed by a PyAudio callback stream.

    PyAudio is imported lazily so that a missing module surfaces as an
    acquisition failure instead of an import error at startup.
    """

    def __init__(
        self,
        sample_rate: int = 16000,
        chunk_size: int = 1024,
        channels: int = 1,
        device_index: Optional[int] = None,
    ):
        """Initialize audio capture with specified parameters.

        Args:
            sample_rate: Audio sample rate in Hz
            chunk_size: Size of each audio chunk in samples
            channels: Number of audio channels (1 for mono)
            device_index: Input device index, None for the system default
        """
        self.sample_rate = sample_rate
        self.chunk_size = chunk_size
        self.channels = channels
        self.device_index = device_index

        self.pyaudio_instance = None
        self.stream = None
        self.total_chunks = 0

        self._callback: Optional[Callable[[AudioEvent], None]] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def is_open(self) -> bool:
        return self.stream is not None

    def open(self, callback: Callable[[AudioEvent], None], loop: asyncio.AbstractEventLoop) -> None:
        """Acquire the input device and start streaming chunks.

        Chunks are handed to ``callback`` on ``loop``; the PortAudio thread
        never touches caller state directly.

        Raises:
            ImportError: PyAudio is not installed
            OSError: the device is absent or access was denied
        """
        if self.is_open:
            logger.warning("Audio capture already open")
            return

        pyaudio = importlib.import_module("pyaudio")
        self._callback = callback
        self._loop = loop
        self.total_chunks = 0

        self.pyaudio_instance = pyaudio.PyAudio()
        try:
            self.stream = self.pyaudio_instance.open(
                format=pyaudio.paInt16,
                channels=self.channels,
                rate=self.sample_rate,
                input=True,
                input_device_index=self.device_index,
                frames_per_buffer=self.chunk_size,
                stream_callback=self._stream_callback,
            )
        except Exception:
            self.pyaudio_instance.terminate()
            self.pyaudio_instance = None
            raise

        logger.info(f"Audio stream opened: {self.sample_rate}Hz, "
                    f"{self.chunk_size} samples/chunk")

    def _stream_callback(self, in_data, frame_count, time_info, status):
        """PortAudio thread callback: forward the chunk to the event loop."""
        pyaudio = importlib.import_module("pyaudio")
        self.total_chunks += 1
        event = AudioEvent(
            chunk_id=f"chunk_{self.total_chunks}",
            audio_data=in_data,
            timestamp=time.time(),
            sequence_number=self.total_chunks,
        )
        if self._loop is not None and self._callback is not None:
            try:
                self._loop.call_soon_threadsafe(self._callback, event)
            except RuntimeError:
                # Loop already closed
                return (None, pyaudio.paComplete)
        return (None, pyaudio.paContinue)

    def stop_stream(self) -> None:
        """Stop delivering chunks without releasing the device."""
        if self.stream is not None and self.stream.is_active():
            self.stream.stop_stream()
            logger.debug("Audio stream stopped")

    def close(self) -> None:
        """Release the device. Safe to call any number of times."""
        stream, self.stream = self.stream, None
        instance, self.pyaudio_instance = self.pyaudio_instance, None
        self._callback = None
        self._loop = None

        if stream is None and instance is None:
            return

        try:
            if stream is not None:
                if stream.is_active():
                    stream.stop_stream()
                stream.close()
        finally:
            if instance is not None:
                instance.terminate()
        logger.info(f"Audio capture released. Total chunks: {self.total_chunks}")
