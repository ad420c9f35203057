from __future__ import annotations

from pathlib import Path

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.widgets import Footer, Input, Static

from .board import HELP_TEXT, Board
from .events import EventBus


class DeskboardApp(App[None]):
    CSS = """
    Screen {
        layout: vertical;
    }

    #status-bar {
        height: 1;
        padding: 0 1;
        background: $boost;
        color: $text;
    }

    #main {
        height: 1fr;
    }

    #panel-projects {
        width: 1fr;
        border: solid $secondary;
        padding: 0 1;
    }

    #panel-tasks {
        width: 2fr;
        border: solid $accent;
        padding: 0 1;
    }

    #input-box {
        margin: 0;
        border: solid $border-blurred;
    }

    #input-box:focus {
        border: solid $border;
    }

    Footer {
        dock: none;
    }
    """

    BINDINGS = [
        ("ctrl+c", "request_quit", "Quit"),
        ("ctrl+r", "refresh", "Refresh"),
        ("ctrl+n", "next_project", "Next"),
        ("ctrl+b", "previous_project", "Prev"),
    ]

    ENABLE_COMMAND_PALETTE = False

    def __init__(self, *, projects_dir: Path, bus: EventBus | None = None, interval: float = 30.0) -> None:
        super().__init__()
        self.interval = max(1.0, float(interval))
        self.board = Board(projects_dir, bus=bus)

        self.status_bar: Static
        self.projects_panel: Static
        self.tasks_panel: Static
        self.input_box: Input

    def compose(self) -> ComposeResult:
        yield Static("", id="status-bar", markup=False)
        with Horizontal(id="main"):
            yield Static("", id="panel-projects", markup=False)
            yield Static("", id="panel-tasks", markup=False)
        yield Input(id="input-box", placeholder=HELP_TEXT)
        yield Footer()

    def on_mount(self) -> None:
        self.status_bar = self.query_one("#status-bar", Static)
        self.projects_panel = self.query_one("#panel-projects", Static)
        self.tasks_panel = self.query_one("#panel-tasks", Static)
        self.input_box = self.query_one("#input-box", Input)
        self.input_box.focus()
        self.board.refresh()
        self._refresh_panels()
        self.set_interval(self.interval, self._reload)

    def on_resize(self, _: events.Resize) -> None:
        self.call_after_refresh(self.input_box.focus)

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "input-box":
            return
        self.input_box.value = ""
        self.board.handle_command(event.value)
        self._refresh_panels()

    async def action_request_quit(self) -> None:
        self.exit()

    def action_refresh(self) -> None:
        self.board.handle_command("refresh")
        self._refresh_panels()

    def action_next_project(self) -> None:
        self.board.handle_command("next")
        self._refresh_panels()

    def action_previous_project(self) -> None:
        self.board.handle_command("prev")
        self._refresh_panels()

    def _reload(self) -> None:
        self.board.refresh()
        self._refresh_panels()

    def _refresh_panels(self) -> None:
        self.status_bar.update(self.board.status_line())
        self.projects_panel.update(self.board.render_projects_panel())
        self.tasks_panel.update(self.board.render_tasks_panel())


def run_terminal_app(*, projects_dir: Path, bus: EventBus | None = None, interval: float = 30.0) -> int:
    app = DeskboardApp(projects_dir=projects_dir, bus=bus, interval=interval)
    app.run(mouse=False)
    return 0
