from __future__ import annotations

from pathlib import Path
from tempfile import TemporaryDirectory
import unittest

from deskboard.board import HELP_TEXT, Board


def _seed(root: Path) -> None:
    (root / "alpha.md").write_text(
        "# Alpha\nStatus: Paused\nCategory: work\n\n## Description\nShip the alpha.\n\n- [ ] plan\n- [x] build\n",
        encoding="utf-8",
    )
    (root / "beta.md").write_text("# Beta\nStatus: Active\n\n- [ ] start\n", encoding="utf-8")


class TestBoard(unittest.TestCase):
    def test_refresh_selects_first_project(self) -> None:
        with TemporaryDirectory() as tmp:
            root = Path(tmp)
            _seed(root)
            board = Board(root)
            projects = board.refresh()
            self.assertEqual(["beta", "alpha"], [p.id for p in projects])
            self.assertEqual("beta", board.selected_id)

    def test_numeric_command_toggles_selected_project(self) -> None:
        with TemporaryDirectory() as tmp:
            root = Path(tmp)
            _seed(root)
            board = Board(root)
            board.refresh()

            message = board.handle_command("0")

            self.assertEqual("task 0 in beta is now done", message)
            self.assertEqual("- [x] start", (root / "beta.md").read_text(encoding="utf-8").splitlines()[-1])
            project = board.selected_project
            assert project is not None
            self.assertEqual(1, project.tasks_done)

    def test_open_and_toggle_commands(self) -> None:
        with TemporaryDirectory() as tmp:
            root = Path(tmp)
            _seed(root)
            board = Board(root)
            board.refresh()

            self.assertEqual("opened alpha", board.handle_command("open alpha"))
            self.assertEqual("task 1 in alpha is now open", board.handle_command("toggle 1"))
            self.assertEqual("alpha has no task 7", board.handle_command("t 7"))
            self.assertEqual("usage: toggle <task number>", board.handle_command("toggle x"))
            self.assertEqual("unknown project: gamma", board.handle_command("open gamma"))

    def test_next_prev_wrap_around(self) -> None:
        with TemporaryDirectory() as tmp:
            root = Path(tmp)
            _seed(root)
            board = Board(root)
            board.refresh()
            board.handle_command("next")
            self.assertEqual("alpha", board.selected_id)
            board.handle_command("next")
            self.assertEqual("beta", board.selected_id)
            board.handle_command("prev")
            self.assertEqual("alpha", board.selected_id)

    def test_toggle_failure_is_reported_not_raised(self) -> None:
        with TemporaryDirectory() as tmp:
            root = Path(tmp)
            _seed(root)
            board = Board(root)
            board.refresh()
            (root / "beta.md").unlink()
            message = board.handle_command("0")
            self.assertTrue(message.startswith("Failed to read project file"))

    def test_selection_moves_when_project_disappears(self) -> None:
        with TemporaryDirectory() as tmp:
            root = Path(tmp)
            _seed(root)
            board = Board(root)
            board.refresh()
            (root / "beta.md").unlink()
            board.refresh()
            self.assertEqual("alpha", board.selected_id)

    def test_render_panels(self) -> None:
        with TemporaryDirectory() as tmp:
            root = Path(tmp)
            _seed(root)
            board = Board(root)
            board.refresh()
            board.handle_command("open alpha")

            projects_panel = board.render_projects_panel()
            self.assertIn("> Alpha [Paused] 1/2", projects_panel)
            self.assertIn("  Beta [Active] 0/1", projects_panel)

            tasks_panel = board.render_tasks_panel()
            self.assertIn("Alpha (work)", tasks_panel)
            self.assertIn("Ship the alpha.", tasks_panel)
            self.assertIn("  0 [ ] plan", tasks_panel)
            self.assertIn("  1 [x] build", tasks_panel)

            status = board.status_line()
            self.assertIn("projects=2 active=1 tasks=1/3", status)
            self.assertIn("opened alpha", status)

    def test_empty_directory(self) -> None:
        with TemporaryDirectory() as tmp:
            board = Board(Path(tmp))
            board.refresh()
            self.assertIsNone(board.selected_project)
            self.assertEqual("no project selected", board.handle_command("0"))
            self.assertIn("no projects", board.render_projects_panel())
            self.assertIn("select a project", board.render_tasks_panel())
            self.assertEqual(HELP_TEXT, board.handle_command("help"))
            self.assertEqual("", board.handle_command("   "))
            self.assertEqual("unknown command: dance", board.handle_command("dance"))

    def test_non_decimal_digits_are_not_task_numbers(self) -> None:
        with TemporaryDirectory() as tmp:
            root = Path(tmp)
            _seed(root)
            board = Board(root)
            board.refresh()
            self.assertEqual("unknown command: \u00b2", board.handle_command("\u00b2"))
            self.assertEqual("usage: toggle <task number>", board.handle_command("toggle \u00b2"))
            self.assertEqual("usage: toggle <task number>", board.handle_command("t \u2460"))
            self.assertEqual("- [ ] start", (root / "beta.md").read_text(encoding="utf-8").splitlines()[-1])


if __name__ == "__main__":
    unittest.main()
