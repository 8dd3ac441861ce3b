"""Session timing and elapsed-time display."""

import asyncio
import logging
import time
from typing import Callable, Optional

from ..models.session import EMPTY_DURATION, Session

logger = logging.getLogger(__name__)


def format_duration(seconds: float) -> str:
    """Format elapsed seconds as zero-padded mm:ss.

    Minutes are not wrapped at 99; a session of 100 minutes reads "100:00".
    """
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


class SessionClock:
    """Tracks when the session started and what its duration display reads."""

    def __init__(self,
                 clock: Callable[[], float] = time.time,
                 tick_interval: float = 1.0):
        self.clock = clock
        self.tick_interval = tick_interval
        self.session = Session()
        self._ticker: Optional[asyncio.Task] = None

    @property
    def duration_display(self) -> str:
        return self.session.duration_display

    def start(self) -> bool:
        """Record the session start unless one is already recorded.

        Returns:
            True if this call set the start time
        """
        if self.session.start_epoch is not None:
            return False
        self.session.start_epoch = self.clock()
        self.tick()
        logger.info("Session clock started")
        return True

    def tick(self) -> str:
        if self.session.start_epoch is not None:
            self.session.duration_display = format_duration(self.clock() - self.session.start_epoch)
        else:
            self.session.duration_display = EMPTY_DURATION
        return self.session.duration_display

    def reset(self) -> None:
        self.session.start_epoch = None
        self.session.duration_display = EMPTY_DURATION

    async def _run(self) -> None:
        while True:
            self.tick()
            await asyncio.sleep(self.tick_interval)

    def start_ticker(self) -> asyncio.Task:
        """Schedule the periodic tick on the running loop."""
        if self._ticker is None or self._ticker.done():
            self._ticker = asyncio.create_task(self._run(), name="session-clock")
        return self._ticker

    async def stop_ticker(self) -> None:
        ticker, self._ticker = self._ticker, None
        if ticker is None:
            return
        ticker.cancel()
        try:
            await ticker
        except asyncio.CancelledError:
            pass
