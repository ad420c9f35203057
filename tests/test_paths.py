from __future__ import annotations

import os
from pathlib import Path
from tempfile import TemporaryDirectory
import unittest
from unittest.mock import patch

from deskboard.paths import (
    PROJECTS_DIR_ENV,
    config_path,
    default_projects_dir,
    ensure_runtime_dirs,
    resolve_projects_dir,
    runtime_paths,
)


class TestPaths(unittest.TestCase):
    def test_default_layout_under_home(self) -> None:
        with patch.dict(os.environ, {"HOME": "/home/ada"}, clear=False):
            os.environ.pop(PROJECTS_DIR_ENV, None)
            self.assertEqual(Path("/home/ada/.openclaw/workspace/projects"), default_projects_dir())
            self.assertEqual(Path("/home/ada/.openclaw/deskboard.toml"), config_path())
            self.assertEqual(Path("/home/ada/.openclaw/workspace/projects"), resolve_projects_dir(""))

    def test_configured_dir_is_relative_to_openclaw_root(self) -> None:
        with patch.dict(os.environ, {"HOME": "/home/ada"}, clear=False):
            os.environ.pop(PROJECTS_DIR_ENV, None)
            self.assertEqual(Path("/home/ada/.openclaw/boards"), resolve_projects_dir("boards"))
            self.assertEqual(Path("/srv/projects"), resolve_projects_dir("/srv/projects"))

    def test_env_override_wins(self) -> None:
        with patch.dict(os.environ, {"HOME": "/home/ada", PROJECTS_DIR_ENV: "/env/projects"}, clear=False):
            self.assertEqual(Path("/env/projects"), resolve_projects_dir("/srv/projects"))

    def test_ensure_runtime_dirs_creates_logs(self) -> None:
        with TemporaryDirectory() as tmp:
            with patch.dict(os.environ, {"HOME": tmp}, clear=False):
                paths = ensure_runtime_dirs(runtime_paths())
                self.assertTrue(paths.logs_dir.is_dir())
                self.assertEqual(Path(tmp) / ".openclaw" / "deskboard" / "logs" / "events.jsonl", paths.events_log)


if __name__ == "__main__":
    unittest.main()
