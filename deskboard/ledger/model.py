from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


DEFAULT_STATUS = "Unknown"
DEFAULT_CATEGORY = "personal"


@dataclass(frozen=True)
class Task:
    text: str
    done: bool

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "done": self.done}


@dataclass(frozen=True)
class Project:
    """Read-only projection of one project document.

    Counts are derived from `tasks` so they can never drift from it.
    """

    id: str
    name: str
    status: str = DEFAULT_STATUS
    category: str = DEFAULT_CATEGORY
    description: str = ""
    tasks: tuple[Task, ...] = field(default_factory=tuple)

    @property
    def task_count(self) -> int:
        return len(self.tasks)

    @property
    def tasks_done(self) -> int:
        return sum(1 for task in self.tasks if task.done)

    @property
    def is_active(self) -> bool:
        return "active" in self.status.lower()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "category": self.category,
            "description": self.description,
            "task_count": self.task_count,
            "tasks_done": self.tasks_done,
            "tasks": [task.to_dict() for task in self.tasks],
        }


def format_project_line(project: Project) -> str:
    return f"{project.id} [{project.status}] {project.name} ({project.tasks_done}/{project.task_count})"


def format_task_lines(project: Project) -> list[str]:
    lines: list[str] = []
    for ordinal, task in enumerate(project.tasks):
        box = "x" if task.done else " "
        lines.append(f"{ordinal:>3} [{box}] {task.text}")
    return lines
