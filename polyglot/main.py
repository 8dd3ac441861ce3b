"""Main application entry point for Polyglot."""

import sys
import asyncio
import argparse
import logging
from pathlib import Path
from typing import Optional, Dict, Any

from .config import PolyglotConfig
from .services.meeting_session import MeetingSession

logger = logging.getLogger(__name__)


def setup_logging(config: PolyglotConfig, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get('logging.file_path', 'logs/polyglot.log')
    console_output = config.get('logging.console_output', True)

    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    handlers = []

    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    ))
    handlers.append(file_handler)

    # Console handler - only warnings, the terminal belongs to the UI
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info("=" * 50)
    logger.info("Polyglot application starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("=" * 50)


class App:
    """Owns the configuration and the meeting session for one process run."""

    def __init__(self, config_path: Optional[str] = None, log_level: Optional[str] = None,
                 target_language: Optional[str] = None):
        self.config = PolyglotConfig(config_path)
        if target_language:
            self.config.set('translation.target_language', target_language)
        setup_logging(self.config, log_level or self.config.get('logging.level', 'INFO'))
        self.session: Optional[MeetingSession] = None

    async def run_interactive(self) -> None:
        from .ui.session_screen import SessionScreen

        self.session = MeetingSession(self.config)
        await self.session.start()
        try:
            await SessionScreen(self.session).run()
        finally:
            await self.session.shutdown()

    async def run_auto(self, duration: float) -> Dict[str, Any]:
        """Record for ``duration`` seconds, stop, export, and return the export result."""
        self.session = MeetingSession(self.config)
        await self.session.start()
        try:
            await self.session.toggle_recording()
            logger.info(f"Auto mode recording for {duration}s "
                        f"({'fallback' if self.session.recorder.using_fallback else 'live'} source)")
            await asyncio.sleep(duration)
            await self.session.toggle_recording()
            return self.session.export_session()
        finally:
            await self.session.shutdown()


def main() -> None:
    """Main entry point for Polyglot application."""
    parser = argparse.ArgumentParser(
        description="Polyglot - live meeting transcription with a translated mirror",
        epilog="Keys: SPACE=Start/stop recording, r=Reset, e=Export, l=Next language, s=Settings, q=Quit"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: built-in settings)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: from config, INFO)"
    )

    parser.add_argument(
        "--language",
        type=str,
        help="Target language for the translated transcript (e.g. spanish, french)"
    )

    parser.add_argument(
        "--auto",
        action="store_true",
        help="Run in automatic mode: record for the given duration, export, then exit"
    )

    parser.add_argument(
        "--duration",
        type=float,
        default=10,
        help="Duration in seconds for auto mode recording (default: 10)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Polyglot v0.1.0"
    )

    args = parser.parse_args()

    try:
        app = App(args.config, args.log_level, args.language)
        if args.auto:
            result = asyncio.run(app.run_auto(args.duration))
            if not result["success"]:
                print(f"❌ Export failed: {result['error']}")
                sys.exit(1)
            summary = result["document"]["session"]["summary"]
            print(f"✅ Exported {summary['wordCount']} words from "
                  f"{summary['speakerCount']} speaker(s) to {result['path']}")
        else:
            asyncio.run(app.run_interactive())
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
    except Exception as e:
        print(f"❌ Error: {e}")
        logging.error(f"Application error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
