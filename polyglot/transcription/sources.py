"""Transcription sources: producers of ordered transcript segment batches."""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, List, NamedTuple, Optional, Sequence

from ..audio.buffer import ChunkBuffer
from ..models.events import AudioEvent
from ..models.transcript import TranscriptSegment
from .base import AbstractTranscriptionBackend

logger = logging.getLogger(__name__)

BatchCallback = Callable[[List[TranscriptSegment]], None]

FALLBACK_SCRIPT = (
    TranscriptSegment(speaker="Speaker 1", timestamp="09:00:12",
                      text="Welcome to our quarterly review meeting."),
    TranscriptSegment(speaker="Speaker 2", timestamp="09:00:45",
                      text="Thank you for joining us today."),
    TranscriptSegment(speaker="Speaker 3", timestamp="09:01:22",
                      text="The results look very promising."),
)


class TranscriptionSource(ABC):
    """Asynchronous producer of non-empty segment batches.

    A source is started once per recording session and stopped when the
    session ends. ``stop`` returns only after every batch the source still
    owed has been handed to the callback.
    """

    name = "source"

    def __init__(self, batch_callback: BatchCallback):
        self.batch_callback = batch_callback
        self.is_processing = False

    @abstractmethod
    async def start(self) -> None:
        pass

    @abstractmethod
    async def stop(self) -> None:
        pass

    def feed(self, event: AudioEvent) -> None:
        """Accept a captured chunk. Sources without live input ignore it."""

    def _emit(self, batch: Sequence[TranscriptSegment]) -> None:
        if not batch:
            return
        logger.info(f"{self.name} source emitting {len(batch)} segment(s)")
        self.batch_callback(list(batch))


class FlushTask(NamedTuple):
    """A drained buffer waiting for the backend."""
    chunk_id: str
    audio: bytes
    captured_at: datetime


class LiveTranscriptionSource(TranscriptionSource):
    """Accumulates captured chunks and transcribes them at flush boundaries.

    Flushed buffers are queued and handled by a single worker task, so batches
    leave the source in the order their audio was captured.
    """

    name = "live"

    def __init__(self,
                 backend: AbstractTranscriptionBackend,
                 batch_callback: BatchCallback,
                 flush_chunks: int = 80):
        super().__init__(batch_callback)
        self.backend = backend
        self.flush_chunks = max(1, flush_chunks)

        self.buffer = ChunkBuffer()
        self.accepting = False
        self.flush_counter = 0

        self._queue: Optional[asyncio.Queue] = None
        self._worker: Optional[asyncio.Task] = None
        self._pending = 0

    async def start(self) -> None:
        if self._worker is not None:
            logger.warning("Live source already started")
            return
        self.buffer.clear()
        self.flush_counter = 0
        self._pending = 0
        self._queue = asyncio.Queue()
        self._worker = asyncio.create_task(self._worker_loop(), name="live-transcription-worker")
        self.accepting = True
        logger.info(f"Live source started (flush every {self.flush_chunks} chunks)")

    def feed(self, event: AudioEvent) -> None:
        if not self.accepting:
            return
        self.buffer.add_event(event)
        if len(self.buffer) >= self.flush_chunks:
            self.flush()

    def flush(self) -> bool:
        """Drain the buffer into the processing queue.

        The buffer is emptied whether or not it held audio.

        Returns:
            True if a non-empty buffer was queued
        """
        events, audio = self.buffer.drain()
        if not audio or self._queue is None:
            return False

        self.flush_counter += 1
        chunk_id = f"flush_{self.flush_counter}.{events[0].chunk_id}-{events[-1].chunk_id}"
        self._pending += 1
        self.is_processing = True
        self._queue.put_nowait(FlushTask(chunk_id=chunk_id, audio=audio, captured_at=datetime.now()))
        logger.debug(f"Queued {chunk_id}: {len(audio)} bytes")
        return True

    async def _worker_loop(self) -> None:
        loop = asyncio.get_running_loop()
        while True:
            task = await self._queue.get()
            if task is None:
                break
            try:
                batch = await loop.run_in_executor(
                    None, self.backend.transcribe_chunk, task.chunk_id, task.audio, task.captured_at
                )
            except Exception as e:
                logger.error(f"Transcription failed for {task.chunk_id}: {e}", exc_info=True)
                batch = []

            try:
                self._emit(batch)
            except Exception as e:
                logger.error(f"Batch delivery failed for {task.chunk_id}: {e}", exc_info=True)
            finally:
                self._pending -= 1
                self.is_processing = self._pending > 0

    async def stop(self) -> None:
        """Flush remaining audio and wait until every queued batch is applied."""
        if self._worker is None:
            return
        self.accepting = False
        self.flush()
        self._queue.put_nowait(None)
        worker, self._worker = self._worker, None
        await worker
        self._queue = None
        self.is_processing = False
        logger.info(f"Live source stopped after {self.flush_counter} flush(es)")


class FallbackTranscriptionSource(TranscriptionSource):
    """Emits a fixed scripted batch after a simulated processing delay."""

    name = "fallback"

    def __init__(self,
                 batch_callback: BatchCallback,
                 delay_seconds: float = 1.0,
                 script: Sequence[TranscriptSegment] = FALLBACK_SCRIPT):
        super().__init__(batch_callback)
        self.delay_seconds = delay_seconds
        self.script = tuple(script)
        self._task: Optional[asyncio.Task] = None

    async def start(self) -> None:
        if self._task is not None and not self._task.done():
            logger.warning("Fallback source already running")
            return
        self.is_processing = True
        self._task = asyncio.create_task(self._run(), name="fallback-transcription")
        logger.info(f"Fallback source started ({self.delay_seconds}s delay)")

    async def _run(self) -> None:
        try:
            await asyncio.sleep(self.delay_seconds)
            self._emit(self.script)
        finally:
            self.is_processing = False

    async def stop(self) -> None:
        """Wait for the scripted batch if it has not been emitted yet."""
        task, self._task = self._task, None
        if task is not None:
            await task
