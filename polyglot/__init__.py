"""Polyglot Meeting Whisperer - live bilingual meeting transcription."""

__version__ = "0.1.0"
