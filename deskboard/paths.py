from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path


PROJECTS_DIR_ENV = "DESKBOARD_PROJECTS_DIR"
CONFIG_FILENAME = "deskboard.toml"


def home_root() -> Path:
    home = os.environ.get("HOME", "").strip()
    if home:
        return Path(home)
    return Path.home()


def openclaw_root() -> Path:
    return home_root() / ".openclaw"


def workspace_root() -> Path:
    return openclaw_root() / "workspace"


def default_projects_dir() -> Path:
    return workspace_root() / "projects"


def config_path() -> Path:
    return openclaw_root() / CONFIG_FILENAME


def resolve_projects_dir(configured: str = "") -> Path:
    """Pick the projects directory.

    Precedence: DESKBOARD_PROJECTS_DIR, then the configured value, then
    ~/.openclaw/workspace/projects. Relative configured paths are taken
    relative to the openclaw root.
    """

    override = os.environ.get(PROJECTS_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    cleaned = (configured or "").strip()
    if cleaned:
        candidate = Path(cleaned).expanduser()
        if not candidate.is_absolute():
            candidate = openclaw_root() / candidate
        return candidate
    return default_projects_dir()


def runtime_root() -> Path:
    return openclaw_root() / "deskboard"


@dataclass(frozen=True)
class RuntimePaths:
    root: Path
    logs_dir: Path
    events_log: Path


def runtime_paths() -> RuntimePaths:
    root = runtime_root()
    logs_dir = root / "logs"
    return RuntimePaths(
        root=root,
        logs_dir=logs_dir,
        events_log=logs_dir / "events.jsonl",
    )


def ensure_runtime_dirs(paths: RuntimePaths | None = None) -> RuntimePaths:
    paths = paths or runtime_paths()
    paths.root.mkdir(parents=True, exist_ok=True)
    paths.logs_dir.mkdir(parents=True, exist_ok=True)
    return paths
