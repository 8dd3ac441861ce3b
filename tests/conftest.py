"""Pytest configuration and fixtures for Polyglot tests."""

import pytest
import tempfile
import time
import logging
from typing import List, Optional
from unittest.mock import Mock

import numpy as np

from polyglot.config import PolyglotConfig
from polyglot.models.events import AudioEvent
from polyglot.models.transcript import TranscriptSegment
from polyglot.transcription.base import AbstractTranscriptionBackend
from polyglot.translation.service import TranslationService


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "integration: tests wiring several components")
    config.addinivalue_line("markers", "hardware: tests that need a real microphone")


class FakeCapture:
    """Capture device stand-in that records acquisitions and releases."""

    def __init__(self, fail_with: Optional[Exception] = None, open_delay: float = 0.0):
        self.fail_with = fail_with
        self.open_delay = open_delay
        self.open_calls = 0
        self.close_calls = 0
        self.releases = 0
        self.stopped = False
        self.stream = None
        self.callback = None
        self.loop = None
        self.sequence = 0

    @property
    def is_open(self) -> bool:
        return self.stream is not None

    def open(self, callback, loop) -> None:
        self.open_calls += 1
        if self.open_delay:
            time.sleep(self.open_delay)
        if self.fail_with is not None:
            raise self.fail_with
        self.callback = callback
        self.loop = loop
        self.stream = object()
        self.stopped = False

    def emit(self, audio_data: bytes) -> None:
        """Deliver one chunk as the device callback would (on the loop thread)."""
        self.sequence += 1
        self.callback(AudioEvent(
            chunk_id=f"chunk_{self.sequence}",
            audio_data=audio_data,
            timestamp=time.time(),
            sequence_number=self.sequence,
        ))

    def stop_stream(self) -> None:
        self.stopped = True

    def close(self) -> None:
        self.close_calls += 1
        if self.stream is not None:
            self.releases += 1
        self.stream = None
        self.callback = None


class ScriptedBackend(AbstractTranscriptionBackend):
    """Backend returning one numbered segment per buffer, optionally failing."""

    def __init__(self, fail_on: Optional[List[int]] = None, empty: bool = False, delay: float = 0.0):
        super().__init__()
        self.fail_on = set(fail_on or [])
        self.empty = empty
        self.delay = delay
        self.calls: List[bytes] = []

    def initialize(self) -> bool:
        return True

    def transcribe_chunk(self, chunk_id, audio_chunk, captured_at):
        self.calls.append(audio_chunk)
        call_number = len(self.calls)
        if self.delay:
            time.sleep(self.delay)
        if call_number in self.fail_on:
            raise RuntimeError(f"backend failure on call {call_number}")
        if self.empty:
            return []
        return [TranscriptSegment(
            speaker=self.default_speaker,
            timestamp=self.format_timestamp(captured_at),
            text=f"segment {call_number}",
        )]

    def cleanup(self) -> None:
        pass


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def sample_audio_chunk():
    """Generate a sample audio chunk for testing."""
    # Generate 1024 samples of 16-bit audio (sine wave)
    sample_rate = 16000
    duration = 1024 / sample_rate
    t = np.linspace(0, duration, 1024, False)
    wave_data = np.sin(2 * np.pi * 440 * t)
    audio_data = (wave_data * 32767 * 0.5).astype(np.int16)
    return audio_data.tobytes()


@pytest.fixture
def silent_audio_chunk():
    return np.zeros(1024, dtype=np.int16).tobytes()


@pytest.fixture
def test_config(temp_data_dir):
    """Default configuration with fast timings and a temporary export directory."""
    config = PolyglotConfig()
    config.set('storage.export_directory', f"{temp_data_dir}/exports")
    config.set('transcription.fallback_delay_seconds', 0.01)
    config.set('transcription.flush_chunks', 3)
    config.set('session.tick_interval_seconds', 0.01)
    return config


@pytest.fixture
def translator():
    return TranslationService()


@pytest.fixture
def fake_capture():
    return FakeCapture()


@pytest.fixture
def failing_capture():
    return FakeCapture(fail_with=OSError("Permission denied"))


@pytest.fixture
def scripted_backend():
    return ScriptedBackend()


@pytest.fixture
def make_segment():
    def _make(speaker="Speaker 1", timestamp="09:00:00", text="hello there"):
        return TranscriptSegment(speaker=speaker, timestamp=timestamp, text=text)
    return _make


@pytest.fixture
def batch_collector():
    """A Mock usable as a source batch callback."""
    return Mock()


@pytest.fixture
def backend_factory():
    """Build ScriptedBackend instances with custom failure behaviour."""
    return ScriptedBackend


@pytest.fixture
def capture_factory():
    """Build FakeCapture instances with custom failure or latency."""
    return FakeCapture
