"""Dual-stream transcript log kept index-aligned across languages."""

import logging
from typing import Iterable, Sequence, Tuple

from ..models.transcript import TranscriptSegment, TranscriptSummary
from ..translation.service import TranslationService

logger = logging.getLogger(__name__)


def compute_summary(segments: Sequence[TranscriptSegment]) -> TranscriptSummary:
    """Derive word and speaker statistics from a transcript."""
    word_count = sum(len(segment.text.split()) for segment in segments)
    speaker_count = len({segment.speaker for segment in segments})
    avg_words = word_count / speaker_count if speaker_count > 0 else 0
    return TranscriptSummary(word_count=word_count, speaker_count=speaker_count, avg_words=avg_words)


class TranscriptStore:
    """Append-only original and translated transcripts of equal length.

    ``translated[i]`` always has the speaker and timestamp of ``original[i]``
    and the translation of its text. Both streams are replaced together in a
    single assignment, so readers never observe one without the other.
    """

    def __init__(self, translator: TranslationService):
        self.translator = translator
        self._original: Tuple[TranscriptSegment, ...] = ()
        self._translated: Tuple[TranscriptSegment, ...] = ()

    @property
    def original(self) -> Tuple[TranscriptSegment, ...]:
        return self._original

    @property
    def translated(self) -> Tuple[TranscriptSegment, ...]:
        return self._translated

    def __len__(self) -> int:
        return len(self._original)

    def append(self, batch: Iterable[TranscriptSegment], target_language: str) -> int:
        """Append a batch to both streams.

        Args:
            batch: Segments in emission order
            target_language: Language code used for the translated stream

        Returns:
            Number of segments appended
        """
        originals = tuple(batch)
        translations = tuple(
            segment.with_text(self.translator.translate(segment.text, target_language))
            for segment in originals
        )
        self._original, self._translated = self._original + originals, self._translated + translations
        logger.debug(f"Appended {len(originals)} segment(s) ({target_language}), total {len(self._original)}")
        return len(originals)

    def reset(self) -> None:
        """Clear both streams."""
        self._original, self._translated = (), ()
        logger.info("Transcript cleared")

    def summary(self) -> TranscriptSummary:
        return compute_summary(self._original)
