"""Transcript publisher module for pub/sub event publishing."""

import logging
from typing import Callable, List
from pubsub import pub
from ..models.transcript import TranscriptSegment

logger = logging.getLogger(__name__)

BATCH_TOPIC = "transcript_batch"


class TranscriptPublisher:
    """Publishes transcript batches using pubsub.pub."""

    def __init__(self, topic: str = BATCH_TOPIC):
        """Initialize transcript publisher.

        Args:
            topic: Pub/sub topic name for transcript batches
        """
        self.topic = topic
        logger.info(f"TranscriptPublisher initialized with topic: {topic}")

    def publish_batch(self, batch: List[TranscriptSegment]) -> None:
        """Publish a batch of segments to the pub/sub topic.

        Args:
            batch: Segments in emission order
        """
        pub.sendMessage(self.topic, batch=batch)
        logger.debug(f"Published batch of {len(batch)} segment(s) on {self.topic}")

    def get_callback(self) -> Callable[[List[TranscriptSegment]], None]:
        """Get callback function for a TranscriptionSource to use."""
        return self.publish_batch
