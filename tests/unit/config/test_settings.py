"""Tests for defensive config loading and CLI override merging."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fdnav import config


class SettingsTests(unittest.TestCase):
    def _load_with(self, payload: str | None) -> config.Settings:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            if payload is not None:
                path.write_text(payload, encoding="utf-8")
            with mock.patch.object(config, "CONFIG_PATH", path):
                return config.load_settings()

    def test_missing_or_malformed_config_uses_defaults(self) -> None:
        self.assertEqual(self._load_with(None), config.Settings())
        self.assertEqual(self._load_with("{not json"), config.Settings())
        self.assertEqual(self._load_with("[1, 2]"), config.Settings())

    def test_reads_typed_values(self) -> None:
        payload = json.dumps(
            {
                "show_hidden": True,
                "max_depth": 3,
                "follow_links": True,
                "enumerator": " fd --type d ",
                "theme": "ocean",
                "tick_ms": 40,
            }
        )

        settings = self._load_with(payload)

        self.assertEqual(
            settings,
            config.Settings(
                show_hidden=True,
                max_depth=3,
                follow_links=True,
                enumerator="fd --type d",
                theme="ocean",
                tick_ms=40,
            ),
        )

    def test_wrong_types_fall_back(self) -> None:
        payload = json.dumps(
            {"show_hidden": "yes", "max_depth": True, "enumerator": "  ", "theme": 3, "tick_ms": -5}
        )

        self.assertEqual(self._load_with(payload), config.Settings())

    def test_merge_overrides_skips_none(self) -> None:
        base = config.Settings(show_hidden=True, theme="ocean")

        merged = config.merge_overrides(base, show_hidden=None, theme="default", max_depth=2)

        self.assertTrue(merged.show_hidden)
        self.assertEqual(merged.theme, "default")
        self.assertEqual(merged.max_depth, 2)


if __name__ == "__main__":
    unittest.main()
