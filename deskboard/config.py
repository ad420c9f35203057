from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import tomllib


MIN_REFRESH_SECONDS = 1.0


def _as_float(value, *, default: float) -> float:
    try:
        return float(value)
    except Exception:  # noqa: BLE001
        return float(default)


def _as_bool(value, *, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "y", "on"}:
            return True
        if lowered in {"0", "false", "no", "n", "off"}:
            return False
    return bool(default)


@dataclass(frozen=True)
class ProjectsConfig:
    dir: str = ""


@dataclass(frozen=True)
class UiConfig:
    refresh_seconds: float = 30.0


@dataclass(frozen=True)
class LoggingConfig:
    events: bool = True


@dataclass(frozen=True)
class DeskboardConfig:
    projects: ProjectsConfig = field(default_factory=ProjectsConfig)
    ui: UiConfig = field(default_factory=UiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_deskboard_toml(path: Path) -> tuple[DeskboardConfig, str]:
    """Load dashboard config from deskboard.toml.

    Returns (config, warning). Warning is empty on success; on any failure the
    defaults are returned alongside it.
    """

    if not path.exists():
        return DeskboardConfig(), ""

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        return DeskboardConfig(), f"deskboard.toml parse failed: {exc}"

    if not isinstance(data, dict):
        return DeskboardConfig(), "deskboard.toml parse failed: top-level is not a table"

    projects = data.get("projects") if isinstance(data.get("projects"), dict) else {}
    ui = data.get("ui") if isinstance(data.get("ui"), dict) else {}
    logging = data.get("logging") if isinstance(data.get("logging"), dict) else {}

    raw_dir = projects.get("dir")
    cfg = DeskboardConfig(
        projects=ProjectsConfig(
            dir=raw_dir.strip() if isinstance(raw_dir, str) else ProjectsConfig.dir,
        ),
        ui=UiConfig(
            refresh_seconds=max(
                MIN_REFRESH_SECONDS,
                _as_float(ui.get("refresh_seconds"), default=UiConfig.refresh_seconds),
            ),
        ),
        logging=LoggingConfig(
            events=_as_bool(logging.get("events"), default=LoggingConfig.events),
        ),
    )
    return cfg, ""


def explain_deskboard_toml(config: DeskboardConfig, *, path: Path | None = None, projects_dir: Path | None = None) -> str:
    location = str(path) if path is not None else "deskboard.toml"
    configured_dir = config.projects.dir or "(default ~/.openclaw/workspace/projects)"
    lines = [
        f"deskboard.toml guide ({location})",
        "",
        "[projects]",
        f"- dir: directory of project markdown files (current: {configured_dir})",
        "- DESKBOARD_PROJECTS_DIR overrides this value when set.",
    ]
    if projects_dir is not None:
        lines.append(f"- effective directory: {projects_dir}")
    lines.extend(
        [
            "",
            "[ui]",
            f"- refresh_seconds: dashboard re-read interval, min {MIN_REFRESH_SECONDS:g} (current: {config.ui.refresh_seconds:g})",
            "",
            "[logging]",
            f"- events: append ledger events to logs/events.jsonl (current: {'true' if config.logging.events else 'false'})",
        ]
    )
    return "\n".join(lines)
