"""Unit tests for the RecordingController state machine."""

import asyncio
import time

import pytest
from unittest.mock import Mock, patch

from polyglot.models.events import AudioEvent
from polyglot.models.session import RecordingState
from polyglot.services.recording_service import RecordingController
from polyglot.transcription.sources import FallbackTranscriptionSource, LiveTranscriptionSource


def build_controller(capture, backend, collector, fallback_delay=0.01, flush_chunks=3):
    started = Mock()
    controller = RecordingController(
        capture=capture,
        live_source=LiveTranscriptionSource(backend, collector, flush_chunks=flush_chunks),
        fallback_source=FallbackTranscriptionSource(collector, delay_seconds=fallback_delay),
        on_recording_started=started,
    )
    return controller, started


@pytest.mark.unit
class TestRecordingController:
    """Test cases for RecordingController."""

    def test_initial_state(self, fake_capture, scripted_backend, batch_collector):
        controller, _ = build_controller(fake_capture, scripted_backend, batch_collector)

        assert controller.state is RecordingState.IDLE
        assert controller.is_recording is False
        assert controller.is_processing is False
        assert controller.active_source is None

    @pytest.mark.asyncio
    async def test_toggle_starts_and_stops_live_recording(self, fake_capture, scripted_backend, batch_collector):
        controller, started = build_controller(fake_capture, scripted_backend, batch_collector)

        assert await controller.toggle_recording() is RecordingState.RECORDING
        assert controller.is_recording is True
        assert controller.using_fallback is False
        assert fake_capture.is_open is True
        started.assert_called_once()

        assert await controller.toggle_recording() is RecordingState.IDLE
        assert fake_capture.stopped is True
        assert fake_capture.is_open is False
        assert fake_capture.releases == 1
        assert controller.active_source is None

    @pytest.mark.asyncio
    async def test_state_sequence_for_live_session(self, fake_capture, scripted_backend, batch_collector):
        controller, _ = build_controller(fake_capture, scripted_backend, batch_collector)

        with patch.object(controller, '_set_state', wraps=controller._set_state) as set_state:
            await controller.toggle_recording()
            await controller.toggle_recording()

        assert [c.args[0] for c in set_state.call_args_list] == [
            RecordingState.ACQUIRING,
            RecordingState.RECORDING,
            RecordingState.STOPPING,
            RecordingState.IDLE,
        ]

    @pytest.mark.asyncio
    async def test_concurrent_toggles_acquire_once(self, capture_factory, scripted_backend, batch_collector):
        capture = capture_factory(open_delay=0.05)
        controller, _ = build_controller(capture, scripted_backend, batch_collector)

        results = await asyncio.gather(controller.toggle_recording(), controller.toggle_recording())

        assert capture.open_calls == 1
        assert RecordingState.ACQUIRING in results
        assert controller.state is RecordingState.RECORDING
        await controller.shutdown()

    @pytest.mark.asyncio
    async def test_toggle_ignored_while_stopping(self, fake_capture, scripted_backend, batch_collector):
        controller, _ = build_controller(fake_capture, scripted_backend, batch_collector)
        await controller.toggle_recording()
        controller.state = RecordingState.STOPPING

        assert await controller.toggle_recording() is RecordingState.STOPPING
        assert fake_capture.open_calls == 1

        controller.state = RecordingState.RECORDING
        await controller.toggle_recording()

    @pytest.mark.asyncio
    async def test_captured_audio_reaches_callback(self, fake_capture, scripted_backend,
                                                   batch_collector, sample_audio_chunk):
        controller, _ = build_controller(fake_capture, scripted_backend, batch_collector, flush_chunks=3)
        await controller.toggle_recording()

        for _ in range(4):
            fake_capture.emit(sample_audio_chunk)
        assert controller.is_processing is True

        await controller.toggle_recording()

        assert len(scripted_backend.calls) == 2
        assert [c.args[0][0].text for c in batch_collector.call_args_list] == ["segment 1", "segment 2"]
        assert controller.is_processing is False

    @pytest.mark.asyncio
    async def test_capture_failure_switches_to_fallback(self, failing_capture, scripted_backend, batch_collector):
        controller, started = build_controller(failing_capture, scripted_backend, batch_collector,
                                               fallback_delay=0.02)

        with patch.object(controller, '_set_state', wraps=controller._set_state) as set_state:
            state = await controller.toggle_recording()

        assert state is RecordingState.RECORDING
        assert [c.args[0] for c in set_state.call_args_list] == [
            RecordingState.ACQUIRING,
            RecordingState.FALLBACK,
            RecordingState.RECORDING,
        ]
        assert controller.using_fallback is True
        assert controller.is_processing is True
        assert failing_capture.close_calls >= 1
        started.assert_called_once()

        await asyncio.sleep(0.1)

        batch_collector.assert_called_once()
        batch = batch_collector.call_args.args[0]
        assert len(batch) == 3
        assert [s.speaker for s in batch] == ["Speaker 1", "Speaker 2", "Speaker 3"]
        assert scripted_backend.calls == []

        await controller.toggle_recording()
        assert controller.state is RecordingState.IDLE
        batch_collector.assert_called_once()

    @pytest.mark.asyncio
    async def test_stop_during_fallback_delay_still_delivers(self, failing_capture, scripted_backend,
                                                             batch_collector):
        controller, _ = build_controller(failing_capture, scripted_backend, batch_collector,
                                         fallback_delay=0.05)
        await controller.toggle_recording()

        await controller.toggle_recording()

        assert controller.state is RecordingState.IDLE
        batch_collector.assert_called_once()

    @pytest.mark.asyncio
    async def test_start_error_releases_and_returns_to_idle(self, fake_capture, scripted_backend, batch_collector):
        controller, started = build_controller(fake_capture, scripted_backend, batch_collector)

        with patch.object(controller.live_source, 'start', side_effect=RuntimeError("no loop")):
            with pytest.raises(RuntimeError):
                await controller.toggle_recording()

        assert controller.state is RecordingState.IDLE
        assert controller.active_source is None
        assert fake_capture.close_calls == 1
        started.assert_not_called()

    @pytest.mark.asyncio
    async def test_stop_error_still_releases(self, fake_capture, scripted_backend, batch_collector):
        controller, _ = build_controller(fake_capture, scripted_backend, batch_collector)
        await controller.toggle_recording()

        with patch.object(controller.live_source, 'stop', side_effect=RuntimeError("worker died")):
            with pytest.raises(RuntimeError):
                await controller.toggle_recording()

        assert controller.state is RecordingState.IDLE
        assert fake_capture.releases == 1
        assert controller.active_source is None
        await controller.live_source.stop()

    @pytest.mark.asyncio
    async def test_release_error_is_logged(self, fake_capture, scripted_backend, batch_collector):
        controller, _ = build_controller(fake_capture, scripted_backend, batch_collector)
        await controller.toggle_recording()

        with patch.object(fake_capture, 'close', side_effect=OSError("device gone")):
            await controller.toggle_recording()

        assert controller.state is RecordingState.IDLE

    @pytest.mark.asyncio
    async def test_shutdown_while_recording(self, fake_capture, scripted_backend, batch_collector):
        controller, _ = build_controller(fake_capture, scripted_backend, batch_collector)
        await controller.toggle_recording()

        await controller.shutdown()

        assert controller.state is RecordingState.IDLE
        assert fake_capture.releases == 1

    @pytest.mark.asyncio
    async def test_recording_can_restart(self, fake_capture, scripted_backend, batch_collector):
        controller, started = build_controller(fake_capture, scripted_backend, batch_collector)

        for _ in range(2):
            await controller.toggle_recording()
            await controller.toggle_recording()

        assert fake_capture.open_calls == 2
        assert fake_capture.releases == 2
        assert started.call_count == 2

    @pytest.mark.asyncio
    async def test_chunk_handed_off_before_stop_is_transcribed(self, fake_capture, scripted_backend,
                                                               batch_collector, sample_audio_chunk):
        controller, _ = build_controller(fake_capture, scripted_backend, batch_collector, flush_chunks=80)
        await controller.toggle_recording()
        loop = asyncio.get_running_loop()

        loop.call_soon_threadsafe(fake_capture.callback, AudioEvent(
            chunk_id="chunk_last", audio_data=sample_audio_chunk, timestamp=time.time(), sequence_number=1,
        ))
        await controller.toggle_recording()

        assert scripted_backend.calls == [sample_audio_chunk]
        batch_collector.assert_called_once()
