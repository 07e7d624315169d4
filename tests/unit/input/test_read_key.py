"""Regression tests for raw-key decoding.

Covers ESC timing, arrow sequences, UTF-8 assembly, and control-key tokens.
"""

import os
import time
import unittest

from fdnav import input as input_mod


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_no_input_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=10)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "")
        self.assertLess(elapsed, 0.5)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        self.assertEqual(self._read_all(b"\x1b", 1), ["ESC"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1ba", 2), ["ESC", "a"])

    def test_arrow_sequences(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[A\x1b[D\x1bOB", 3), ["UP", "LEFT", "DOWN"])

    def test_delete_sequence(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[3~", 1), ["DELETE"])

    def test_control_keys(self) -> None:
        self.assertEqual(
            self._read_all(b"\x03\x04\x15\t\x7f\x08\r\n\x01", 9),
            ["CTRL_C", "CTRL_D", "CTRL_U", "TAB", "BACKSPACE", "BACKSPACE", "ENTER", "ENTER", "CTRL_A"],
        )

    def test_utf8_characters_are_assembled(self) -> None:
        self.assertEqual(self._read_all("é日x".encode("utf-8"), 3), ["é", "日", "x"])


if __name__ == "__main__":
    unittest.main()
