import errno
import os
import unittest
from unittest import mock

from tests._support import ScratchDirectory, import_with_fake_curses
from tinycommander.core.actions import ActionResult, ActionType, AppAction
from tinycommander.core.errors import DestinationUnwritable, DirectoryUnreadable
from tinycommander.core.panel import Panel
from tinycommander.core.sorting import SortKey


def _names(panel):
    return [entry.name for entry in panel.entries]


class DispatcherTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.curses, (cls.dispatcher_mod, cls.config_mod), cls._restore = import_with_fake_curses(
            "tinycommander.core.dispatcher",
            "tinycommander.core.config",
        )

    @classmethod
    def tearDownClass(cls):
        cls._restore()

    def setUp(self):
        self.tmp = ScratchDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.left_dir = self.tmp.mkdir("left")
        self.right_dir = self.tmp.mkdir("right")
        self.tmp.write("left/a.txt", b"alpha")
        self.tmp.write("left/b.txt", b"bravo" * 10)
        self.tmp.mkdir("left/sub")

        left = Panel(str(self.left_dir))
        right = Panel(str(self.right_dir))
        self.panels = self.dispatcher_mod.PanelPair(left, right)
        self.run_external = mock.Mock(return_value=0)
        self.clipboard = mock.Mock(return_value=True)
        self.config = self.config_mod.AppConfig(pager="less", editor="vi -n", shell="/bin/sh")
        self.dispatcher = self.dispatcher_mod.CommandDispatcher(
            self.panels,
            config=self.config,
            run_external=self.run_external,
            clipboard=self.clipboard,
        )
        self.dispatcher.refresh_all()

    @property
    def left(self):
        return self.panels.left

    @property
    def right(self):
        return self.panels.right

    def select(self, name):
        self.assertTrue(self.panels.active_panel.select_name(name))

    def dispatch(self, action, payload=None):
        return self.dispatcher.dispatch(action, payload)

    # --- Navigation ---

    def test_switch_panel_toggles_active_side(self):
        self.assertIs(self.panels.active_panel, self.left)

        self.dispatch(AppAction.SWITCH_PANEL)
        self.assertIs(self.panels.active_panel, self.right)
        self.assertIs(self.panels.inactive_panel, self.left)

        self.dispatch(AppAction.SWITCH_PANEL)
        self.assertIs(self.panels.active_panel, self.left)

    def test_cursor_actions_only_affect_active_panel(self):
        self.dispatch(AppAction.MOVE_DOWN)
        self.dispatch(AppAction.MOVE_DOWN)
        self.assertEqual(self.left.selected_index, 2)
        self.dispatch(AppAction.MOVE_UP)
        self.assertEqual(self.left.selected_index, 1)
        self.dispatch(AppAction.END)
        self.assertEqual(self.left.selected_entry.name, "b.txt")
        self.dispatch(AppAction.HOME)
        self.assertEqual(self.left.selected_index, 0)
        self.assertEqual(self.right.selected_index, 0)

    def test_page_actions_use_viewport_height(self):
        for index in range(10):
            self.tmp.write(f"left/f{index}.txt")
        self.dispatch(AppAction.REFRESH)
        self.dispatcher.viewport_height = 4

        self.dispatch(AppAction.PAGE_DOWN)
        self.assertEqual(self.left.selected_index, 3)
        self.dispatch(AppAction.PAGE_UP)
        self.assertEqual(self.left.selected_index, 0)

    def test_open_directory_navigates(self):
        self.select("sub")

        result = self.dispatch(AppAction.OPEN)

        self.assertEqual(result.type, ActionType.REFRESH)
        self.assertEqual(self.left.current_path, os.path.join(str(self.left_dir), "sub"))
        self.assertEqual(self.left.selected_index, 0)

    def test_open_parent_entry_and_parent_action(self):
        self.dispatch(AppAction.OPEN)
        self.assertEqual(self.left.current_path, self.tmp.name)

        self.select("left")
        self.dispatch(AppAction.OPEN)
        self.dispatch(AppAction.PARENT)
        self.assertEqual(self.left.current_path, self.tmp.name)

    def test_open_vanished_directory_reports_error_and_keeps_state(self):
        self.select("sub")
        os.rmdir(os.path.join(str(self.left_dir), "sub"))

        result = self.dispatch(AppAction.OPEN)

        self.assertEqual(result.type, ActionType.ERROR)
        self.assertIn("sub", result.payload)
        self.assertEqual(self.left.current_path, str(self.left_dir))
        self.assertEqual(self.left.selected_entry.name, "sub")

    def test_open_file_views_it(self):
        self.select("a.txt")

        result = self.dispatch(AppAction.OPEN)

        self.assertEqual(result.type, ActionType.REFRESH)
        self.run_external.assert_called_once_with(
            ["less", os.path.join(str(self.left_dir), "a.txt")],
            cwd=str(self.left_dir),
        )

    def test_sort_actions_apply_to_active_panel(self):
        self.dispatch(AppAction.CYCLE_SORT)
        self.dispatch(AppAction.INVERT_SORT)

        self.assertIs(self.left.sort_key, SortKey.SIZE)
        self.assertTrue(self.left.sort_descending)
        self.assertEqual(_names(self.left), ["..", "sub", "b.txt", "a.txt"])
        self.assertIs(self.right.sort_key, SortKey.NAME)
        self.assertFalse(self.right.sort_descending)

    def test_refresh_rereads_both_panels(self):
        self.tmp.write("left/new.txt")
        self.tmp.write("right/other.txt")

        result = self.dispatch(AppAction.REFRESH)

        self.assertEqual(result.type, ActionType.REFRESH)
        self.assertIn("new.txt", _names(self.left))
        self.assertIn("other.txt", _names(self.right))

    # --- External programs ---

    def test_view_ignores_directories_and_parent(self):
        self.assertIsNone(self.dispatch(AppAction.VIEW))
        self.select("sub")
        self.assertIsNone(self.dispatch(AppAction.VIEW))
        self.assertIsNone(self.dispatch(AppAction.EDIT))
        self.run_external.assert_not_called()

    def test_view_start_failure_is_reported(self):
        self.run_external.return_value = None
        self.select("a.txt")

        result = self.dispatch(AppAction.VIEW)

        self.assertEqual(result.type, ActionType.ERROR)
        self.assertIn("less", result.payload)

    def test_edit_splits_editor_command_and_refreshes_active_panel(self):
        self.select("a.txt")

        def editor(argv, cwd=None):
            self.tmp.write("left/a.txt~", b"backup")
            return 0

        self.run_external.side_effect = editor

        result = self.dispatch(AppAction.EDIT)

        self.assertEqual(result.type, ActionType.REFRESH)
        self.run_external.assert_called_once_with(
            ["vi", "-n", os.path.join(str(self.left_dir), "a.txt")],
            cwd=str(self.left_dir),
        )
        self.assertIn("a.txt~", _names(self.left))

    def test_non_zero_exit_is_not_an_error(self):
        self.run_external.return_value = 2
        self.select("a.txt")

        self.assertEqual(self.dispatch(AppAction.VIEW).type, ActionType.REFRESH)

    def test_shell_runs_in_active_directory_and_refreshes_both(self):
        self.dispatch(AppAction.SWITCH_PANEL)

        def shell(argv, cwd=None, wait_for_enter=False, banner=None):
            self.tmp.write("left/from-shell.txt")
            self.tmp.write("right/from-shell.txt")
            return 0

        self.run_external.side_effect = shell

        result = self.dispatch(AppAction.SHELL)

        self.assertEqual(result.type, ActionType.REFRESH)
        self.run_external.assert_called_once_with(
            ["/bin/sh"],
            cwd=str(self.right_dir),
            wait_for_enter=True,
            banner=self.dispatcher_mod.SHELL_BANNER,
        )
        self.assertIn("from-shell.txt", _names(self.left))
        self.assertIn("from-shell.txt", _names(self.right))

    def test_shell_start_failure_is_reported(self):
        self.run_external.return_value = None

        result = self.dispatch(AppAction.SHELL)

        self.assertEqual(result.type, ActionType.ERROR)
        self.assertIn("/bin/sh", result.payload)

    # --- Copy / move / delete / mkdir ---

    def test_copy_file_to_inactive_panel(self):
        self.select("b.txt")

        result = self.dispatch(AppAction.COPY)

        self.assertEqual(result, ActionResult(ActionType.REFRESH, "Copied b.txt"))
        with open(os.path.join(str(self.right_dir), "b.txt"), "rb") as handle:
            self.assertEqual(handle.read(), b"bravo" * 10)
        self.assertIn("b.txt", _names(self.right))
        self.assertIn("b.txt", _names(self.left))

    def test_copy_rejects_parent_directory_and_same_file(self):
        result = self.dispatch(AppAction.COPY)
        self.assertEqual(result.type, ActionType.ERROR)

        self.select("sub")
        result = self.dispatch(AppAction.COPY)
        self.assertEqual(result.type, ActionType.ERROR)
        self.assertFalse(os.path.exists(os.path.join(str(self.right_dir), "sub")))

        self.right.navigate(str(self.left_dir))
        self.select("a.txt")
        result = self.dispatch(AppAction.COPY)
        self.assertEqual(result.type, ActionType.ERROR)
        with open(os.path.join(str(self.left_dir), "a.txt"), "rb") as handle:
            self.assertEqual(handle.read(), b"alpha")

    def test_copy_refuses_existing_destination(self):
        self.tmp.write("right/a.txt", b"keep")
        self.select("a.txt")

        result = self.dispatch(AppAction.COPY)

        self.assertEqual(result.type, ActionType.ERROR)
        self.assertIn("exists", result.payload)
        with open(os.path.join(str(self.right_dir), "a.txt"), "rb") as handle:
            self.assertEqual(handle.read(), b"keep")

    def test_copy_failure_still_refreshes_inactive_panel(self):
        self.tmp.write("right/late.txt")
        self.select("a.txt")
        error = DestinationUnwritable(os.path.join(str(self.right_dir), "a.txt"), "No space left on device")

        with mock.patch.object(self.dispatcher_mod, "copy_file", side_effect=error):
            result = self.dispatch(AppAction.COPY)

        self.assertEqual(result.type, ActionType.ERROR)
        self.assertIn("No space left on device", result.payload)
        self.assertIn("late.txt", _names(self.right))

    def test_move_file_refreshes_both_panels(self):
        self.select("a.txt")

        result = self.dispatch(AppAction.MOVE)

        self.assertEqual(result, ActionResult(ActionType.REFRESH, "Moved a.txt"))
        self.assertNotIn("a.txt", _names(self.left))
        self.assertIn("a.txt", _names(self.right))
        self.assertFalse(os.path.exists(os.path.join(str(self.left_dir), "a.txt")))

    def test_move_directory_by_rename(self):
        self.select("sub")

        result = self.dispatch(AppAction.MOVE)

        self.assertEqual(result.type, ActionType.REFRESH)
        self.assertTrue(os.path.isdir(os.path.join(str(self.right_dir), "sub")))

    def test_move_directory_into_itself_is_rejected(self):
        self.right.navigate(os.path.join(str(self.left_dir), "sub"))
        self.select("sub")

        result = self.dispatch(AppAction.MOVE)

        self.assertEqual(result.type, ActionType.ERROR)
        self.assertTrue(os.path.isdir(os.path.join(str(self.left_dir), "sub")))

    def test_move_with_leftover_source_is_a_warning(self):
        self.select("a.txt")
        exdev = OSError(errno.EXDEV, "Invalid cross-device link")

        with mock.patch("os.rename", side_effect=exdev), \
                mock.patch("os.unlink", side_effect=PermissionError(errno.EACCES, "Permission denied")):
            result = self.dispatch(AppAction.MOVE)

        self.assertEqual(result.type, ActionType.WARNING)
        self.assertIn("a.txt", result.payload)
        self.assertIn("a.txt", _names(self.left))
        self.assertIn("a.txt", _names(self.right))

    def test_leftover_source_warning_survives_refresh_failure(self):
        self.select("a.txt")
        exdev = OSError(errno.EXDEV, "Invalid cross-device link")
        unreadable = DirectoryUnreadable(str(self.left_dir), "Permission denied")

        with mock.patch("os.rename", side_effect=exdev), \
                mock.patch("os.unlink", side_effect=PermissionError(errno.EACCES, "Permission denied")), \
                mock.patch.object(self.left, "refresh", side_effect=unreadable):
            result = self.dispatch(AppAction.MOVE)

        self.assertEqual(result.type, ActionType.WARNING)
        self.assertIn("source could not be removed", result.payload)
        self.assertIn(str(unreadable), result.payload)
        self.assertIn("a.txt", _names(self.right))

    def test_refresh_failure_after_success_keeps_message(self):
        self.select("a.txt")
        unreadable = DirectoryUnreadable(str(self.right_dir), "Permission denied")

        with mock.patch.object(self.right, "refresh", side_effect=unreadable):
            result = self.dispatch(AppAction.COPY)

        self.assertEqual(result.type, ActionType.ERROR)
        self.assertEqual(result.payload, f"Copied a.txt\n{unreadable}")

    def test_move_rejects_parent_entry(self):
        result = self.dispatch(AppAction.MOVE)

        self.assertEqual(result.type, ActionType.ERROR)

    def test_delete_file_and_refresh(self):
        self.select("a.txt")

        result = self.dispatch(AppAction.DELETE)

        self.assertEqual(result.type, ActionType.REFRESH)
        self.assertNotIn("a.txt", _names(self.left))
        self.assertEqual(self.left.selected_entry.name, "b.txt")

    def test_delete_non_empty_directory_reports_error(self):
        self.tmp.write("left/sub/keep.txt")
        self.select("sub")

        result = self.dispatch(AppAction.DELETE)

        self.assertEqual(result.type, ActionType.ERROR)
        self.assertIn("Directory is not empty", result.payload)
        self.assertIn("sub", _names(self.left))

    def test_delete_rejects_parent_entry(self):
        result = self.dispatch(AppAction.DELETE)

        self.assertEqual(result.type, ActionType.ERROR)
        self.assertTrue(os.path.isdir(str(self.left_dir)))

    def test_mkdir_requests_name_then_creates_and_selects(self):
        self.assertEqual(self.dispatch(AppAction.MKDIR).type, ActionType.REQUEST_MKDIR)

        result = self.dispatch(AppAction.MKDIR, "fresh")

        self.assertEqual(result.type, ActionType.REFRESH)
        self.assertTrue(os.path.isdir(os.path.join(str(self.left_dir), "fresh")))
        self.assertEqual(self.left.selected_entry.name, "fresh")

    def test_mkdir_invalid_name_reports_error(self):
        result = self.dispatch(AppAction.MKDIR, "a/b")

        self.assertEqual(result.type, ActionType.ERROR)

    # --- Misc ---

    def test_copy_path_uses_clipboard(self):
        self.select("a.txt")

        result = self.dispatch(AppAction.COPY_PATH)

        self.clipboard.assert_called_once_with(os.path.join(str(self.left_dir), "a.txt"))
        self.assertEqual(result.type, ActionType.REFRESH)

    def test_copy_path_on_parent_copies_current_directory(self):
        self.dispatch(AppAction.COPY_PATH)

        self.clipboard.assert_called_once_with(str(self.left_dir))

    def test_copy_path_without_clipboard_reports_error(self):
        self.clipboard.return_value = False

        result = self.dispatch(AppAction.COPY_PATH)

        self.assertEqual(result.type, ActionType.ERROR)

    def test_help_and_quit(self):
        self.assertEqual(self.dispatch(AppAction.HELP), ActionResult(ActionType.SHOW_HELP))
        self.assertEqual(self.dispatch(AppAction.QUIT), ActionResult(ActionType.EXIT))

    def test_unknown_action_is_ignored(self):
        self.assertIsNone(self.dispatch("not-an-action"))


if __name__ == "__main__":
    unittest.main()
