"""Terminal user interface for Polyglot."""

from .session_screen import SessionScreen, render
from .keyboard_input import KeyboardInputHandler

__all__ = [
    "SessionScreen",
    "render",
    "KeyboardInputHandler",
]
