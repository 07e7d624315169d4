"""Tests for key-to-command mapping and command dispatch."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from feed_fakes import RecordingFeed
from fdnav.input import (
    ClearQuery,
    Complete,
    Confirm,
    Erase,
    InsertText,
    Interrupt,
    apply_command,
    command_for_key,
)
from fdnav.session import Navigator


class CommandForKeyTests(unittest.TestCase):
    def test_maps_editing_and_navigation_keys(self) -> None:
        self.assertEqual(command_for_key("a"), InsertText("a"))
        self.assertEqual(command_for_key("日"), InsertText("日"))
        self.assertEqual(command_for_key(" "), InsertText(" "))
        self.assertEqual(command_for_key("BACKSPACE"), Erase())
        self.assertEqual(command_for_key("ENTER"), Confirm())
        self.assertEqual(command_for_key("CTRL_U"), ClearQuery())
        self.assertEqual(command_for_key("TAB"), Complete())
        for key in ("CTRL_C", "CTRL_D"):
            self.assertEqual(command_for_key(key), Interrupt())

    def test_escape_does_not_quit(self) -> None:
        # Alt+key and slow arrow sequences decode to ESC too.
        self.assertIsNone(command_for_key("ESC"))

    def test_no_input_and_unbound_keys_are_ignored(self) -> None:
        for key in ("", "UP", "DOWN", "CTRL_A", "UNKNOWN", "DELETE"):
            self.assertIsNone(command_for_key(key))


class ApplyCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "src").mkdir()
        self.feed = RecordingFeed()
        self.navigator = Navigator(self.root, self.feed)
        self.navigator.start()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_typing_then_confirm_descends_into_query(self) -> None:
        for key in "src":
            apply_command(self.navigator, command_for_key(key))
        self.assertEqual(self.navigator.state.query, "src")

        self.assertTrue(apply_command(self.navigator, Confirm()))

        self.assertEqual(self.navigator.state.current_directory, self.root / "src")
        self.assertEqual(self.navigator.state.query, "")

    def test_confirm_with_empty_query_stays_put(self) -> None:
        self.assertFalse(apply_command(self.navigator, Confirm()))

        self.assertEqual(self.navigator.state.current_directory, self.root)
        self.assertEqual(self.navigator.generation, 1)

    def test_erase_on_empty_query_ascends(self) -> None:
        apply_command(self.navigator, Erase())

        self.assertEqual(self.navigator.state.current_directory, self.root.parent)

    def test_clear_query(self) -> None:
        self.assertFalse(apply_command(self.navigator, ClearQuery()))
        self.navigator.edit_query("abc")

        self.assertTrue(apply_command(self.navigator, ClearQuery()))
        self.assertEqual(self.navigator.state.query, "")

    def test_interrupt_quits(self) -> None:
        apply_command(self.navigator, Interrupt())

        self.assertTrue(self.navigator.state.quit_requested)
        self.assertEqual(self.feed.cancel_calls, 1)


if __name__ == "__main__":
    unittest.main()
