from __future__ import annotations

from pathlib import Path

from ..events import EventBus, emit
from .document import read_document
from .model import Project
from .parser import parse_project
from .toggle import DOCUMENT_SUFFIX, document_path


def iter_document_paths(projects_dir: Path, *, bus: EventBus | None = None) -> list[Path]:
    try:
        entries = sorted(projects_dir.iterdir(), key=lambda item: item.name)
    except OSError as exc:
        emit(
            bus,
            "projects.dir_unreadable",
            f"cannot list {projects_dir}: {exc}",
            severity="warn",
            metadata={"dir": str(projects_dir)},
        )
        return []
    return [path for path in entries if path.suffix == DOCUMENT_SUFFIX]


def _read_document(path: Path, *, bus: EventBus | None) -> str | None:
    try:
        return read_document(path)
    except (OSError, UnicodeDecodeError) as exc:
        emit(
            bus,
            "projects.skip",
            f"skipped {path.name}: {exc}",
            severity="warn",
            metadata={"path": str(path)},
        )
        return None


def list_projects(projects_dir: Path, *, bus: EventBus | None = None) -> list[Project]:
    """Parse every project document, active projects first.

    One unreadable document never aborts the listing; it is left out and
    reported on the bus.
    """

    projects: list[Project] = []
    for path in iter_document_paths(projects_dir, bus=bus):
        text = _read_document(path, bus=bus)
        if text is None:
            continue
        projects.append(parse_project(text, path.name))
    return sorted(projects, key=lambda project: not project.is_active)


def find_project(projects_dir: Path, project_id: str, *, bus: EventBus | None = None) -> Project | None:
    path = document_path(projects_dir, project_id)
    if not project_id or path.parent != projects_dir:
        return None
    if not path.is_file():
        return None
    text = _read_document(path, bus=bus)
    if text is None:
        return None
    return parse_project(text, path.name)
