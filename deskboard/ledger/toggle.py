from __future__ import annotations

import os
from pathlib import Path

from ..events import EventBus, emit
from .document import (
    DONE_MARKERS,
    MARKER_LEN,
    OPEN_MARKER,
    is_checkbox_line,
    is_done_marker,
    is_open_marker,
    join_lines,
    read_document,
    split_lines,
)


DOCUMENT_SUFFIX = ".md"


class LedgerError(RuntimeError):
    pass


class DocumentReadError(LedgerError):
    pass


class DocumentWriteError(LedgerError):
    pass


def document_path(projects_dir: Path, project_id: str) -> Path:
    return projects_dir / f"{project_id}{DOCUMENT_SUFFIX}"


def _check_project_id(project_id: str) -> None:
    if not project_id or project_id in {".", ".."}:
        raise DocumentReadError(f"Failed to read project file: invalid project id {project_id!r}")
    if "/" in project_id or "\\" in project_id or os.sep in project_id:
        raise DocumentReadError(f"Failed to read project file: invalid project id {project_id!r}")


def _flip_marker(line: str) -> str:
    trimmed = line.lstrip()
    indent = line[: len(line) - len(trimmed)]
    if is_done_marker(trimmed):
        return indent + OPEN_MARKER + trimmed[MARKER_LEN:]
    if is_open_marker(trimmed):
        return indent + DONE_MARKERS[0] + trimmed[MARKER_LEN:]
    return line


def toggle_lines(lines: list[str], ordinal: int) -> bool:
    """Flip the checkbox at `ordinal` in place. Returns True if a line changed."""

    seen = 0
    for idx, line in enumerate(lines):
        if not is_checkbox_line(line):
            continue
        if seen == ordinal:
            lines[idx] = _flip_marker(line)
            return lines[idx] != line
        seen += 1
    return False


def _write_document(path: Path, text: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def toggle_task(
    projects_dir: Path,
    project_id: str,
    ordinal: int,
    *,
    bus: EventBus | None = None,
) -> Path:
    """Flip one task's checkbox and rewrite its document.

    An ordinal past the last checkbox leaves every line alone but the file is
    still rewritten (line endings normalised, trailing newline dropped).
    """

    _check_project_id(project_id)
    path = document_path(projects_dir, project_id)

    try:
        text = read_document(path)
    except (OSError, UnicodeDecodeError) as exc:
        emit(
            bus,
            "task.toggle_failed",
            f"read failed for {project_id}: {exc}",
            severity="error",
            metadata={"project": project_id, "ordinal": ordinal},
        )
        raise DocumentReadError(f"Failed to read project file: {exc}") from exc

    lines = split_lines(text)
    changed = toggle_lines(lines, ordinal)

    try:
        _write_document(path, join_lines(lines))
    except OSError as exc:
        emit(
            bus,
            "task.toggle_failed",
            f"write failed for {project_id}: {exc}",
            severity="error",
            metadata={"project": project_id, "ordinal": ordinal},
        )
        raise DocumentWriteError(f"Failed to write project file: {exc}") from exc

    if changed:
        emit(
            bus,
            "task.toggled",
            f"toggled task {ordinal} in {project_id}",
            metadata={"project": project_id, "ordinal": ordinal},
        )
    else:
        emit(
            bus,
            "task.toggle_noop",
            f"no task {ordinal} in {project_id}; document rewritten unchanged",
            severity="warn",
            metadata={"project": project_id, "ordinal": ordinal},
        )
    return path
