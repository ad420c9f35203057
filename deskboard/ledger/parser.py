from __future__ import annotations

from pathlib import PurePath

from .document import OPEN_MARKER, is_checkbox_line, is_done_marker, split_lines
from .model import DEFAULT_CATEGORY, DEFAULT_STATUS, Project, Task


NAME_PREFIX = "# "
SECTION_PREFIX = "## "
DESCRIPTION_HEADING = "## Description"
TASK_TEXT_PREFIXES = ("- [x] ", "- [X] ", OPEN_MARKER + " ")
_FALLBACK_SKIP_PREFIXES = ("#", "Status:", "Created:", "Priority:")


def project_id_for(filename: str | PurePath) -> str:
    return PurePath(filename).stem


def _first_field(lines: list[str], key: str) -> str | None:
    needle = key.lower() + ":"
    for line in lines:
        if line.lower().startswith(needle):
            return line.split(":", 1)[1].strip()
    return None


def _parse_name(lines: list[str]) -> str | None:
    for line in lines:
        if line.startswith(NAME_PREFIX):
            return line[len(NAME_PREFIX) :]
    return None


def extract_section_line(lines: list[str], heading: str) -> str | None:
    """Return the first non-empty line under `heading`, or None.

    A following level-2 heading before any content means the section is empty.
    """

    in_section = False
    for line in lines:
        if line.startswith(heading):
            in_section = True
            continue
        if not in_section:
            continue
        if line.startswith(SECTION_PREFIX):
            return None
        if line:
            return line
    return None


def _fallback_description(lines: list[str]) -> str:
    for line in lines:
        if not line or line.startswith(_FALLBACK_SKIP_PREFIXES):
            continue
        return line
    return ""


def _parse_task(line: str) -> Task:
    trimmed = line.strip()
    text = trimmed
    for prefix in TASK_TEXT_PREFIXES:
        if trimmed.startswith(prefix):
            text = trimmed[len(prefix) :]
            break
    return Task(text=text, done=is_done_marker(trimmed))


def parse_project(text: str, filename: str | PurePath) -> Project:
    """Build a Project from document text. Never raises; every field has a default."""

    lines = split_lines(text)
    project_id = project_id_for(filename)

    description = extract_section_line(lines, DESCRIPTION_HEADING)
    if description is None:
        description = _fallback_description(lines)

    name = _parse_name(lines)
    status = _first_field(lines, "status")
    category = _first_field(lines, "category")

    return Project(
        id=project_id,
        name=project_id if name is None else name,
        status=DEFAULT_STATUS if status is None else status,
        category=DEFAULT_CATEGORY if category is None else category,
        description=description,
        tasks=tuple(_parse_task(line) for line in lines if is_checkbox_line(line)),
    )
