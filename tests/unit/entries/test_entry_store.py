"""Tests for entry ranking, rescoring stability, and the no-match policy."""

from __future__ import annotations

import unittest

from fdnav.entries import EntryStore


def _texts(entries) -> list[str]:
    return [entry.text for entry in entries]


class EntryStoreTests(unittest.TestCase):
    def test_empty_query_keeps_arrival_order(self) -> None:
        store = EntryStore()
        store.extend(["b.txt", "a.txt", "c.txt"])

        self.assertEqual(_texts(store.snapshot_visible(10)), ["b.txt", "a.txt", "c.txt"])
        for _ in range(3):
            store.rescore_all("")
            self.assertEqual(_texts(store.snapshot_visible(10)), ["b.txt", "a.txt", "c.txt"])

    def test_rescore_ranks_better_matches_first(self) -> None:
        store = EntryStore()
        store.extend(["x_a_x_b_x", "zzz", "ab"])

        store.rescore_all("ab")

        self.assertEqual(_texts(store.snapshot_visible(10)), ["ab", "x_a_x_b_x"])
        self.assertEqual(store.matched_count, 2)
        self.assertEqual(len(store), 3)

    def test_equal_scores_keep_arrival_order_across_rescoring(self) -> None:
        store = EntryStore()
        store.extend(["a3", "a1", "a2"])

        store.rescore_all("a")
        self.assertEqual(_texts(store.snapshot_visible(10)), ["a3", "a1", "a2"])

        store.rescore_all("1")
        self.assertEqual(_texts(store.snapshot_visible(10)), ["a1"])

        store.rescore_all("a")
        self.assertEqual(_texts(store.snapshot_visible(10)), ["a3", "a1", "a2"])

    def test_unmatched_entries_drop_stale_scores(self) -> None:
        store = EntryStore()
        store.extend(["apple.txt", "banana.txt"])
        store.rescore_all("ap")

        entries = {entry.text: entry for entry in store.entries()}

        self.assertFalse(entries["banana.txt"].matched)
        self.assertEqual(entries["banana.txt"].score, 0)
        self.assertEqual(entries["banana.txt"].positions, ())
        self.assertTrue(entries["apple.txt"].matched)
        self.assertEqual(entries["apple.txt"].positions, (0, 1))
        self.assertEqual(_texts(store.entries()), ["apple.txt", "banana.txt"])

    def test_append_scores_against_current_query(self) -> None:
        store = EntryStore()
        store.rescore_all("ap")

        store.append("zzz")
        store.append("grape.txt")
        store.append("apple.txt")

        self.assertEqual(store.query, "ap")
        self.assertEqual(_texts(store.snapshot_visible(10)), ["apple.txt", "grape.txt"])

    def test_snapshot_limits_rows(self) -> None:
        store = EntryStore()
        store.extend(f"file{idx}" for idx in range(20))

        self.assertEqual(len(store.snapshot_visible(5)), 5)
        self.assertEqual(store.snapshot_visible(0), ())
        self.assertEqual(store.snapshot_visible(-1), ())

    def test_clear_resets_entries_and_query(self) -> None:
        store = EntryStore()
        store.extend(["a", "b"])
        store.rescore_all("a")

        store.clear()

        self.assertEqual(len(store), 0)
        self.assertEqual(store.matched_count, 0)
        self.assertEqual(store.query, "")
        store.append("c")
        self.assertEqual(store.entries()[0].seq, 0)


if __name__ == "__main__":
    unittest.main()
