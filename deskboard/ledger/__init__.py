from .listing import find_project, list_projects
from .model import Project, Task, format_project_line, format_task_lines
from .parser import parse_project
from .toggle import DocumentReadError, DocumentWriteError, LedgerError, document_path, toggle_task

__all__ = [
    "DocumentReadError",
    "DocumentWriteError",
    "LedgerError",
    "Project",
    "Task",
    "document_path",
    "find_project",
    "format_project_line",
    "format_task_lines",
    "list_projects",
    "parse_project",
    "toggle_task",
]
