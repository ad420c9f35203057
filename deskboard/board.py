from __future__ import annotations

from pathlib import Path

from .events import EventBus
from .ledger import LedgerError, Project, format_task_lines, list_projects, toggle_task


HELP_TEXT = "commands: <n> | toggle <n> | open <id> | next | prev | refresh | help"


class Board:
    """Dashboard state over a projects directory.

    Projects are re-read from disk on every refresh; the board only remembers
    which project is selected, by id.
    """

    def __init__(self, projects_dir: Path, *, bus: EventBus | None = None) -> None:
        self.projects_dir = projects_dir
        self.bus = bus
        self.projects: list[Project] = []
        self.selected_id: str | None = None
        self.last_message = ""

    @property
    def selected_index(self) -> int:
        for idx, project in enumerate(self.projects):
            if project.id == self.selected_id:
                return idx
        return -1

    @property
    def selected_project(self) -> Project | None:
        idx = self.selected_index
        if idx < 0:
            return None
        return self.projects[idx]

    def refresh(self) -> list[Project]:
        self.projects = list_projects(self.projects_dir, bus=self.bus)
        if self.selected_index < 0:
            self.selected_id = self.projects[0].id if self.projects else None
        return self.projects

    def select(self, project_id: str) -> bool:
        needle = project_id.strip()
        for project in self.projects:
            if project.id == needle:
                self.selected_id = project.id
                return True
        return False

    def move(self, step: int) -> None:
        if not self.projects:
            return
        idx = self.selected_index
        idx = 0 if idx < 0 else (idx + step) % len(self.projects)
        self.selected_id = self.projects[idx].id

    def toggle(self, ordinal: int) -> str:
        project = self.selected_project
        if project is None:
            return "no project selected"
        try:
            toggle_task(self.projects_dir, project.id, ordinal, bus=self.bus)
        except LedgerError as exc:
            return str(exc)
        self.refresh()
        if ordinal >= project.task_count:
            return f"{project.id} has no task {ordinal}"
        updated = self.selected_project
        if updated is None or ordinal >= updated.task_count:
            return f"toggled task {ordinal} in {project.id}"
        state = "done" if updated.tasks[ordinal].done else "open"
        return f"task {ordinal} in {project.id} is now {state}"

    def handle_command(self, text: str) -> str:
        cleaned = " ".join((text or "").split())
        if not cleaned:
            return ""
        head, _, rest = cleaned.partition(" ")
        head = head.lower()

        if cleaned.isdecimal():
            message = self.toggle(int(cleaned))
        elif head in {"toggle", "t", "x"}:
            if not rest.isdecimal():
                message = "usage: toggle <task number>"
            else:
                message = self.toggle(int(rest))
        elif head in {"open", "o"}:
            if not rest:
                message = "usage: open <project id>"
            elif self.select(rest):
                message = f"opened {self.selected_id}"
            else:
                message = f"unknown project: {rest}"
        elif head in {"next", "n"}:
            self.move(1)
            message = f"opened {self.selected_id}" if self.selected_id else "no projects"
        elif head in {"prev", "p"}:
            self.move(-1)
            message = f"opened {self.selected_id}" if self.selected_id else "no projects"
        elif head in {"refresh", "r"}:
            self.refresh()
            message = f"{len(self.projects)} projects"
        elif head in {"help", "?"}:
            message = HELP_TEXT
        else:
            message = f"unknown command: {head}"

        self.last_message = message
        return message

    def render_projects_panel(self) -> str:
        if not self.projects:
            return f"Projects\n\n(no projects in {self.projects_dir})"
        lines = ["Projects", ""]
        for project in self.projects:
            cursor = ">" if project.id == self.selected_id else " "
            lines.append(
                f"{cursor} {project.name} [{project.status}] {project.tasks_done}/{project.task_count}"
            )
        return "\n".join(lines)

    def render_tasks_panel(self) -> str:
        project = self.selected_project
        if project is None:
            return "Tasks\n\n(select a project)"
        lines = [f"{project.name} ({project.category})"]
        if project.description:
            lines.append(project.description)
        lines.append("")
        task_lines = format_task_lines(project)
        if not task_lines:
            lines.append("(no tasks)")
        lines.extend(task_lines)
        return "\n".join(lines)

    def status_line(self) -> str:
        active = sum(1 for project in self.projects if project.is_active)
        done = sum(project.tasks_done for project in self.projects)
        total = sum(project.task_count for project in self.projects)
        summary = f"projects={len(self.projects)} active={active} tasks={done}/{total}"
        if self.last_message:
            summary += f" | {self.last_message}"
        return summary
