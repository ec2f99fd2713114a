"""Navigation transitions: all-or-nothing directory changes and derived views."""

from __future__ import annotations

import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from tuiexplorer.errors import ListingError, NavigationError
from tuiexplorer.filesystem import DirectoryEntry, SortKey, filesystem_root
from tuiexplorer.navigation import NavigationState, filter_visible_entries


def _entry(name: str, *, is_dir: bool = False, size: int = 0) -> DirectoryEntry:
    return DirectoryEntry(
        name=name,
        path=Path("/virtual") / name,
        is_dir=is_dir,
        size=size,
        modified_at=datetime(2024, 1, 1),
        mode=0o100644,
    )


class NavigationOnDiskTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "project").mkdir()
        (self.root / "project" / ".git").mkdir()
        (self.root / "project" / "a.txt").write_text("a", encoding="utf-8")
        (self.root / "project" / "b.txt").write_text("bb", encoding="utf-8")
        (self.root / "other").mkdir()
        self.state = NavigationState.start(self.root / "project")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _visible_names(self) -> list[str]:
        return [entry.name for entry in self.state.visible_entries]

    def test_start_lists_directory_and_parent(self) -> None:
        self.assertEqual(self.state.current_path, self.root / "project")
        self.assertEqual(self._visible_names(), ["a.txt", "b.txt"])
        self.assertEqual(
            [entry.name for entry in self.state.visible_parent_entries],
            ["other", "project"],
        )
        self.assertEqual(self.state.selected_index, 0)

    def test_enter_nonexistent_path_changes_nothing(self) -> None:
        self.state.move_selection(1)
        before = (self.state.current_path, list(self.state.current_entries), self.state.selected_index)

        with self.assertRaises(NavigationError):
            self.state.enter(self.root / "missing")

        after = (self.state.current_path, self.state.current_entries, self.state.selected_index)
        self.assertEqual(before, after)

    def test_enter_file_fails_without_state_change(self) -> None:
        with self.assertRaises(NavigationError):
            self.state.enter(self.root / "project" / "a.txt")
        self.assertEqual(self.state.current_path, self.root / "project")

    def test_enter_resets_selection_and_search(self) -> None:
        self.state.apply_search("b")
        self.state.enter(self.root / "other")
        self.assertEqual(self.state.current_path, self.root / "other")
        self.assertIsNone(self.state.search_query)
        self.assertEqual(self.state.selected_index, 0)
        self.assertEqual(self.state.current_entries, [])

    def test_toggle_hidden_shows_dot_entries_and_resets_selection(self) -> None:
        self.state.move_selection(1)
        self.assertEqual(self._visible_names(), ["a.txt", "b.txt"])

        self.state.toggle_hidden()

        self.assertEqual(self._visible_names(), [".git", "a.txt", "b.txt"])
        self.assertEqual(self.state.selected_index, 0)

    def test_enter_selected_directory_and_file(self) -> None:
        self.state.enter(self.root)
        opened = self.state.enter_selected()
        self.assertIsNone(opened)
        self.assertEqual(self.state.current_path, self.root / "other")

        self.state.enter(self.root / "project")
        opened = self.state.enter_selected()
        self.assertIsNotNone(opened)
        assert opened is not None
        self.assertEqual(opened.name, "a.txt")
        self.assertEqual(self.state.current_path, self.root / "project")

    def test_enter_selected_with_nothing_visible_is_noop(self) -> None:
        self.state.enter(self.root / "other")
        self.assertIsNone(self.state.enter_selected())
        self.assertEqual(self.state.current_path, self.root / "other")

    def test_go_to_parent(self) -> None:
        self.state.go_to_parent()
        self.assertEqual(self.state.current_path, self.root)
        self.assertEqual(self.state.selected_index, 0)

    def test_refresh_picks_up_new_entries_and_keeps_filters(self) -> None:
        self.state.apply_search("txt")
        self.state.move_selection(1)
        (self.root / "project" / "c.txt").write_text("c", encoding="utf-8")

        self.state.refresh()

        self.assertEqual(self._visible_names(), ["a.txt", "b.txt", "c.txt"])
        self.assertEqual(self.state.search_query, "txt")
        self.assertEqual(self.state.selected_index, 1)

    def test_refresh_clamps_selection_after_removal(self) -> None:
        self.state.jump_to_bottom()
        (self.root / "project" / "b.txt").unlink()
        self.state.refresh()
        self.assertEqual(self.state.selected_index, 0)

    def test_start_falls_back_when_directory_missing(self) -> None:
        state = NavigationState.start(self.root / "missing")
        self.assertNotEqual(state.current_path, self.root / "missing")
        self.assertTrue(state.current_path.is_absolute())

    def test_start_raises_root_error_when_nothing_can_be_listed(self) -> None:
        attempted: list[Path] = []

        def lister(path: Path, sort_key: SortKey) -> list[DirectoryEntry]:
            attempted.append(path)
            raise ListingError(path, "Permission denied")

        with self.assertLogs("tuiexplorer.navigation", level="WARNING"):
            with self.assertRaises(NavigationError) as ctx:
                NavigationState.start(self.root / "project", lister=lister)
        self.assertEqual(ctx.exception.path, filesystem_root())
        self.assertEqual(ctx.exception.reason, "Permission denied")
        self.assertEqual(attempted[0], self.root / "project")
        self.assertEqual(attempted[-1], filesystem_root())


class NavigationWithFakeListerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.listings: dict[Path, list[DirectoryEntry]] = {
            Path("/"): [_entry("work", is_dir=True)],
            Path("/work"): [_entry("alpha"), _entry("beta"), _entry("gamma")],
        }
        self.calls: list[tuple[Path, SortKey]] = []

        def lister(path: Path, sort_key: SortKey) -> list[DirectoryEntry]:
            self.calls.append((path, sort_key))
            if path not in self.listings:
                raise ListingError(path, "No such file or directory")
            return list(self.listings[path])

        self.state = NavigationState(Path("/"), lister=lister)
        self.state.enter("/work")

    def _visible_names(self) -> list[str]:
        return [entry.name for entry in self.state.visible_entries]

    def test_search_filters_by_substring(self) -> None:
        self.state.apply_search("b")
        self.assertEqual(self._visible_names(), ["beta"])
        self.assertEqual(self.state.selected_index, 0)

    def test_search_is_case_insensitive(self) -> None:
        self.state.apply_search("GAM")
        self.assertEqual(self._visible_names(), ["gamma"])

    def test_empty_search_and_clear_restore_full_set(self) -> None:
        self.state.apply_search("b")
        self.state.apply_search("")
        self.assertIsNone(self.state.search_query)
        self.assertEqual(self._visible_names(), ["alpha", "beta", "gamma"])

        self.state.apply_search("b")
        self.state.clear_search()
        self.assertEqual(self._visible_names(), ["alpha", "beta", "gamma"])

    def test_move_selection_clamps_without_wraparound(self) -> None:
        self.state.jump_to_bottom()
        self.assertEqual(self.state.selected_index, 2)
        self.state.move_selection(1)
        self.assertEqual(self.state.selected_index, 2)
        self.state.move_selection(-10)
        self.assertEqual(self.state.selected_index, 0)
        self.state.jump_to_bottom()
        self.state.jump_to_top()
        self.assertEqual(self.state.selected_index, 0)

    def test_selection_stays_in_range_when_nothing_visible(self) -> None:
        self.state.apply_search("zzz")
        self.state.move_selection(1)
        self.assertEqual(self.state.selected_index, 0)
        self.assertIsNone(self.state.selected_entry)

    def test_go_to_parent_at_root_is_noop(self) -> None:
        self.state.enter("/")
        calls_before = len(self.calls)
        entries_before = list(self.state.current_entries)

        self.state.go_to_parent()

        self.assertEqual(self.state.current_path, Path("/"))
        self.assertEqual(self.state.current_entries, entries_before)
        self.assertEqual(len(self.calls), calls_before)
        self.assertEqual(self.state.parent_entries, [])

    def test_unreadable_parent_degrades_to_empty_column(self) -> None:
        self.listings[Path("/orphan/inner")] = [_entry("x")]
        self.state.enter("/orphan/inner")
        self.assertEqual(self.state.parent_entries, [])
        self.assertEqual([entry.name for entry in self.state.current_entries], ["x"])

    def test_failed_enter_leaves_filters_untouched(self) -> None:
        self.state.apply_search("a")
        with self.assertRaises(NavigationError) as ctx:
            self.state.enter("/missing")
        self.assertEqual(ctx.exception.path, Path("/missing"))
        self.assertEqual(self.state.search_query, "a")
        self.assertEqual(self.state.current_path, Path("/work"))

    def test_set_sort_key_is_used_for_later_listings(self) -> None:
        self.state.move_selection(2)
        self.state.set_sort_key(SortKey.BY_SIZE)
        self.assertEqual(self.state.selected_index, 0)
        self.state.refresh()
        self.assertEqual(self.calls[-2], (Path("/work"), SortKey.BY_SIZE))


class FilterVisibleEntriesTests(unittest.TestCase):
    def test_hidden_filter_then_search(self) -> None:
        entries = [_entry(".env"), _entry("env.py"), _entry("main.py")]
        self.assertEqual(
            [entry.name for entry in filter_visible_entries(entries, False, "env")],
            ["env.py"],
        )
        self.assertEqual(
            [entry.name for entry in filter_visible_entries(entries, True, "env")],
            [".env", "env.py"],
        )
        self.assertEqual(len(filter_visible_entries(entries, True)), 3)


if __name__ == "__main__":
    unittest.main()
