"""Backend factory: builds the configured transcription backend."""

import logging

from .base import AbstractTranscriptionBackend
from .placeholder_backend import PlaceholderBackend
from ..config import PolyglotConfig

logger = logging.getLogger(__name__)


def create_backend(config: PolyglotConfig) -> AbstractTranscriptionBackend:
    """Create and initialize the backend named by ``transcription.backend``.

    Raises:
        ValueError: unknown backend name
        RuntimeError: the backend failed to initialize
    """
    name = config.get('transcription.backend', 'placeholder')
    default_speaker = config.get('transcription.default_speaker', 'Speaker 1')

    if name == "placeholder":
        backend = PlaceholderBackend(
            silence_threshold=config.get('transcription.silence_threshold', 0.01),
            default_speaker=default_speaker,
        )
    elif name == "google":
        # Optional dependency, only imported when selected
        from .google_backend import GoogleSpeechBackend

        backend = GoogleSpeechBackend(
            credentials_path=config.get_google_credentials_path(),
            sample_rate=config.get('audio.sample_rate', 16000),
            language=config.get('google_cloud.language', 'en-US'),
            use_enhanced=config.get('google_cloud.use_enhanced_model', True),
            enable_automatic_punctuation=config.get('google_cloud.enable_automatic_punctuation', True),
            max_speakers=config.get('google_cloud.max_speakers', 6),
            default_speaker=default_speaker,
        )
    else:
        raise ValueError(f"Unknown transcription backend: {name}")

    if not backend.initialize():
        raise RuntimeError(f"Transcription backend '{name}' failed to initialize")

    logger.info(f"Transcription backend ready: {name}")
    return backend
