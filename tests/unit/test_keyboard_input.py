"""Unit tests for KeyboardInputHandler."""

from unittest.mock import Mock, patch

import pytest

from polyglot.ui.keyboard_input import KeyboardInputHandler


@pytest.mark.unit
class TestKeyboardInputHandler:

    def test_keys_reach_callback_until_quit(self):
        callback = Mock(side_effect=lambda key: key != "q")
        handler = KeyboardInputHandler(callback)

        with patch.object(handler, '_get_key', side_effect=[" ", None, "r", "q"]):
            handler.start()
            handler.thread.join(timeout=2.0)

        assert [c.args[0] for c in callback.call_args_list] == [" ", "r", "q"]
        assert handler.running is False

    def test_non_tty_stdin_yields_no_key(self):
        handler = KeyboardInputHandler(Mock())

        with patch('polyglot.ui.keyboard_input.sys') as mock_sys:
            mock_sys.platform = "linux"
            mock_sys.stdin.isatty.return_value = False
            assert handler._get_key() is None

    def test_stop_without_start(self):
        handler = KeyboardInputHandler(Mock())

        handler.stop()

        assert handler.running is False
