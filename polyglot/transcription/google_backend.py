"""Google Speech-to-Text transcription backend."""

import time
import logging
from datetime import datetime
from itertools import groupby
from typing import Optional, List

from .base import AbstractTranscriptionBackend
from ..models.transcript import TranscriptSegment

from google.cloud import speech
from google.api_core import exceptions as gax_exceptions
from google.oauth2 import service_account

logger = logging.getLogger(__name__)


class GoogleSpeechBackend(AbstractTranscriptionBackend):
    """Google Speech-to-Text API backend with optional speaker diarization."""

    def __init__(self,
                 credentials_path: Optional[str] = None,
                 sample_rate: int = 16000,
                 language: str = "en-US",
                 use_enhanced: bool = True,
                 enable_automatic_punctuation: bool = True,
                 max_speakers: int = 6,
                 default_speaker: str = "Speaker 1"):
        """Initialize Google Speech backend.

        Args:
            credentials_path: Path to Google Cloud service account JSON file
            sample_rate: Sample rate of submitted audio in Hz
            language: Language code (e.g., 'en-US', 'es-ES')
            use_enhanced: Whether to use enhanced model
            enable_automatic_punctuation: Enable automatic punctuation
            max_speakers: Upper bound for diarization; 1 disables it
            default_speaker: Speaker label used when diarization is off
        """
        super().__init__(language, default_speaker)
        self.credentials_path = credentials_path
        if not self.credentials_path:
            raise ValueError("Google credentials path is required - cannot initialize without credentials")
        self.use_enhanced = use_enhanced
        self.enable_automatic_punctuation = enable_automatic_punctuation
        self.diarize = max_speakers > 1
        self.client = None
        self.project_id = None
        self.service_name = "Google Speech-to-Text"

        diarization_config = None
        if self.diarize:
            diarization_config = speech.SpeakerDiarizationConfig(
                enable_speaker_diarization=True,
                min_speaker_count=1,
                max_speaker_count=max_speakers,
            )
        self.config = speech.RecognitionConfig(
            encoding=speech.RecognitionConfig.AudioEncoding.LINEAR16,
            sample_rate_hertz=sample_rate,
            language_code=self.language,
            use_enhanced=self.use_enhanced,
            enable_automatic_punctuation=self.enable_automatic_punctuation,
            diarization_config=diarization_config,
        )

    def initialize(self) -> bool:
        """Initialize Google Speech client and verify credentials."""
        logger.info(f"Loading Google credentials from: {self.credentials_path}")
        credentials = service_account.Credentials.from_service_account_file(self.credentials_path)

        self.client = speech.SpeechClient(credentials=credentials)
        self.project_id = credentials.project_id
        logger.info(f"Using Google Cloud project: {self.project_id}")
        return True

    def transcribe_chunk(self, chunk_id: str, audio_chunk: bytes,
                         captured_at: datetime) -> List[TranscriptSegment]:
        """Transcribe audio chunk using Google Speech-to-Text."""
        start_time = time.time()
        logger.debug(f"Chunk ID: {chunk_id}; Audio chunk size: {len(audio_chunk)} bytes; Language: {self.language}")

        audio = speech.RecognitionAudio(content=audio_chunk)
        try:
            response = self.client.recognize(config=self.config, audio=audio, timeout=10.0)
        except gax_exceptions.DeadlineExceeded as e:
            raise RuntimeError(f"Google Speech recognize timeout (chunk={chunk_id}): {e}") from e
        except gax_exceptions.GoogleAPICallError as e:
            raise RuntimeError(f"Google Speech API error (chunk={chunk_id}): {e}") from e

        logger.debug(f"{chunk_id}: recognized in {time.time() - start_time:.3f}s")
        if not response.results:
            logger.debug(f"{chunk_id}: no speech detected")
            return []

        timestamp = self.format_timestamp(captured_at)
        if self.diarize:
            segments = self._segments_by_speaker(response, timestamp)
            if segments:
                return segments

        return [
            TranscriptSegment(speaker=self.default_speaker, timestamp=timestamp,
                              text=result.alternatives[0].transcript.strip())
            for result in response.results
            if result.alternatives and result.alternatives[0].transcript.strip()
        ]

    def _segments_by_speaker(self, response, timestamp: str) -> List[TranscriptSegment]:
        """Split the diarized word list into one segment per speaker turn."""
        # With diarization the last result carries every word with its speaker tag
        last = response.results[-1]
        if not last.alternatives:
            return []
        words = [w for w in last.alternatives[0].words if w.speaker_tag]

        segments = []
        for tag, turn in groupby(words, key=lambda w: w.speaker_tag):
            text = " ".join(w.word for w in turn)
            segments.append(TranscriptSegment(speaker=f"Speaker {tag}", timestamp=timestamp, text=text))
        return segments

    def cleanup(self) -> None:
        """Clean up Google Speech client resources."""
        self.client = None
