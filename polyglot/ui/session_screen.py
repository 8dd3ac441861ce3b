"""Terminal session screen rendering the dual transcript with rich."""

import asyncio
import logging
from datetime import datetime
from typing import Optional, Sequence

from rich.align import Align
from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.session import RecordingState
from ..models.transcript import TranscriptSegment
from ..models.ui import SessionView
from ..services.meeting_session import MeetingSession
from ..translation.service import LANGUAGES
from .keyboard_input import KeyboardInputHandler

logger = logging.getLogger(__name__)

STATE_LABELS = {
    RecordingState.IDLE: ("STOPPED", "bold yellow"),
    RecordingState.ACQUIRING: ("STARTING", "bold cyan"),
    RecordingState.RECORDING: ("RECORDING", "bold red"),
    RecordingState.STOPPING: ("STOPPING", "bold cyan"),
    RecordingState.FALLBACK: ("SIMULATED", "bold magenta"),
}


def render_header(view: SessionView, now: datetime, status: str = "") -> Panel:
    label, style = STATE_LABELS[view.state]
    header_text = Text.assemble(
        ("Polyglot Meeting Whisperer", "bold blue"), "  |  ",
        (label, style), "  |  ",
        now.strftime("%H:%M:%S"),
    )
    if status:
        header_text.append(f"  |  {status}", style="dim")
    return Panel(Align.center(header_text), style="bright_blue")


def render_dashboard(view: SessionView) -> Panel:
    table = Table(show_header=True, header_style="bold magenta", expand=True)
    for column in ("Words", "Speakers", "Avg words", "Duration", "Translate to"):
        table.add_column(column, justify="center")
    table.add_row(
        str(view.summary.word_count),
        str(view.summary.speaker_count),
        f"{view.summary.avg_words:.1f}",
        view.duration_display,
        LANGUAGES.get(view.target_language, view.target_language),
    )
    return Panel(table, border_style="green")


def render_transcript(title: str, segments: Sequence[TranscriptSegment],
                      is_processing: bool, empty_message: str) -> Panel:
    if not segments and not is_processing:
        body = Text(empty_message, style="dim white italic")
    else:
        body = Table.grid(padding=(0, 1))
        body.add_column(style="cyan", no_wrap=True)
        body.add_column(style="dim", no_wrap=True)
        body.add_column()
        for segment in segments:
            body.add_row(segment.speaker, segment.timestamp, segment.text)
        if is_processing:
            body.add_row("", "", Text("Processing audio...", style="yellow italic"))
    return Panel(body, title=title, border_style="blue")


def render_footer(view: SessionView) -> Panel:
    if view.settings_open:
        choices = "  ".join(f"[{i}] {name}" for i, name in enumerate(LANGUAGES.values(), 1))
        return Panel(Align.center(Text(f"Target language: {choices}   (S) close")),
                     title="Settings", style="bright_black")

    controls = Text.assemble(
        ("SPACE", "bold green"), " Start/Stop  ",
        ("R", "bold blue"), " Reset  ",
        ("E", "bold yellow"), " Export  ",
        ("L", "bold cyan"), " Next language  ",
        ("S", "bold magenta"), " Settings  ",
        ("Q", "bold red"), " Quit",
    )
    return Panel(Align.center(controls), style="bright_black")


def render(view: SessionView, now: Optional[datetime] = None, status: str = "") -> Layout:
    """Build the full screen layout for a session view."""
    layout = Layout()
    layout.split_column(
        Layout(render_header(view, now or datetime.now(), status), name="header", size=3),
        Layout(render_dashboard(view), name="dashboard", size=7),
        Layout(name="main", ratio=1),
        Layout(render_footer(view), name="footer", size=3),
    )
    layout["main"].split_row(
        Layout(render_transcript("Original Transcript", view.original, view.is_processing,
                                 "No transcript yet. Start recording to begin transcription!")),
        Layout(render_transcript(f"Translated ({view.target_language})", view.translated,
                                 view.is_processing,
                                 "No translated transcript yet. Start recording to begin translation!")),
    )
    return layout


class SessionScreen:
    """Interactive terminal front end for a MeetingSession."""

    def __init__(self, session: MeetingSession, refresh_seconds: float = 0.25):
        self.session = session
        self.refresh_seconds = refresh_seconds
        self.console = Console()
        self.status = ""
        self.keys: Optional[asyncio.Queue] = None
        self.toggle_task: Optional[asyncio.Task] = None
        self.input_handler: Optional[KeyboardInputHandler] = None

    def _make_key_callback(self, loop: asyncio.AbstractEventLoop):
        def on_key(key: str) -> bool:
            loop.call_soon_threadsafe(self.keys.put_nowait, key)
            return key not in ("q", "\x03")
        return on_key

    def start_toggle(self) -> Optional[asyncio.Task]:
        """Run a recording toggle in the background so the screen keeps rendering.

        A key press while the previous toggle is still in flight is dropped.
        """
        if self.toggle_task is not None and not self.toggle_task.done():
            logger.debug("Toggle ignored, previous toggle still running")
            return None
        self.toggle_task = asyncio.create_task(self.session.toggle_recording(), name="toggle-recording")
        self.toggle_task.add_done_callback(self._on_toggle_done)
        return self.toggle_task

    def _on_toggle_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Recording toggle failed: {error}", exc_info=error)
            self.status = f"Recording error: {error}"

    async def wait_for_toggle(self) -> None:
        """Wait for an in-flight toggle; its error was already reported."""
        task = self.toggle_task
        if task is not None and not task.done():
            await asyncio.wait([task])

    async def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns False when the user asked to quit."""
        session = self.session
        if key in ("q", "\x03"):
            return False

        if session.settings_open:
            if key == "s":
                session.close_settings()
            elif key.isdigit() and 1 <= int(key) <= len(LANGUAGES):
                session.set_target_language(list(LANGUAGES)[int(key) - 1])
                session.close_settings()
            return True

        if key in (" ", "\r", "\n"):
            self.start_toggle()
        elif key == "r":
            session.reset()
            self.status = "Session reset"
        elif key == "e":
            result = session.export_session()
            self.status = f"Exported to {result['path']}" if result["success"] else f"Export failed: {result['error']}"
        elif key == "l":
            codes = list(LANGUAGES)
            current = codes.index(session.target_language) if session.target_language in codes else -1
            session.set_target_language(codes[(current + 1) % len(codes)])
        elif key == "s":
            session.open_settings()
        return True

    async def run(self) -> None:
        """Render until the user quits."""
        loop = asyncio.get_running_loop()
        self.keys = asyncio.Queue()
        self.input_handler = KeyboardInputHandler(self._make_key_callback(loop))
        self.input_handler.start()

        try:
            with Live(render(self.session.view()), console=self.console, screen=True,
                      refresh_per_second=max(1, int(1 / self.refresh_seconds))) as live:
                running = True
                while running:
                    try:
                        key = await asyncio.wait_for(self.keys.get(), timeout=self.refresh_seconds)
                    except asyncio.TimeoutError:
                        key = None
                    if key is not None:
                        running = await self.handle_key(key)
                    live.update(render(self.session.view(), status=self.status))
        finally:
            self.input_handler.stop()
            await self.wait_for_toggle()
