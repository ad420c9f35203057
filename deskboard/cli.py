from __future__ import annotations

import argparse
from dataclasses import dataclass
import json
from pathlib import Path
import sys

from . import __version__
from .config import DeskboardConfig, explain_deskboard_toml, load_deskboard_toml
from .events import EventBus
from .ledger import LedgerError, find_project, format_project_line, format_task_lines, list_projects, toggle_task
from .paths import config_path, ensure_runtime_dirs, resolve_projects_dir, runtime_paths


@dataclass(frozen=True)
class CommandContext:
    config: DeskboardConfig
    config_path: Path
    projects_dir: Path
    bus: EventBus


def _non_negative_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {value}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError(f"task number must be >= 0: {value}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deskboard",
        description="Deskboard: project ledger dashboard over a folder of markdown files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="cmd", required=False)

    app = sub.add_parser("app", help="Start the interactive terminal dashboard.")
    app.add_argument("--interval", type=float, help="Re-read interval seconds (default from deskboard.toml)")
    app.add_argument("--dir", help="Projects directory override")

    list_cmd = sub.add_parser("list", help="List projects, active first.")
    list_cmd.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    list_cmd.add_argument("--dir", help="Projects directory override")

    show = sub.add_parser("show", help="Show one project and its numbered tasks.")
    show.add_argument("project_id", help="Project id (document filename without .md)")
    show.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    show.add_argument("--dir", help="Projects directory override")

    toggle = sub.add_parser("toggle", help="Flip one task between done and open.")
    toggle.add_argument("project_id", help="Project id (document filename without .md)")
    toggle.add_argument("ordinal", type=_non_negative_int, help="Zero-based task number")
    toggle.add_argument("--dir", help="Projects directory override")

    sub.add_parser("config", help="Explain deskboard.toml and the effective settings.")

    return parser


def _build_bus(config: DeskboardConfig) -> EventBus:
    bus = EventBus()
    if not config.logging.events:
        return bus
    try:
        paths = ensure_runtime_dirs(runtime_paths())
        bus.set_log_path(paths.events_log)
    except OSError as exc:
        print(f"warning: event log unavailable: {exc}", file=sys.stderr)
    return bus


def _load_context(args: argparse.Namespace) -> CommandContext:
    path = config_path()
    config, warning = load_deskboard_toml(path)
    if warning:
        print(f"warning: {warning}", file=sys.stderr)
    override = getattr(args, "dir", None)
    projects_dir = Path(override).expanduser() if override else resolve_projects_dir(config.projects.dir)
    return CommandContext(
        config=config,
        config_path=path,
        projects_dir=projects_dir,
        bus=_build_bus(config),
    )


def cmd_list(args: argparse.Namespace) -> int:
    ctx = _load_context(args)
    projects = list_projects(ctx.projects_dir, bus=ctx.bus)
    if args.json:
        print(json.dumps([project.to_dict() for project in projects], indent=2, ensure_ascii=False))
        return 0
    if not projects:
        print(f"No projects in {ctx.projects_dir}")
        return 0
    for project in projects:
        print(format_project_line(project))
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    ctx = _load_context(args)
    project = find_project(ctx.projects_dir, args.project_id, bus=ctx.bus)
    if project is None:
        print(f"Unknown project: {args.project_id}", file=sys.stderr)
        return 1
    if args.json:
        print(json.dumps(project.to_dict(), indent=2, ensure_ascii=False))
        return 0
    print(format_project_line(project))
    print(f"category: {project.category}")
    if project.description:
        print(project.description)
    for line in format_task_lines(project):
        print(line)
    return 0


def cmd_toggle(args: argparse.Namespace) -> int:
    ctx = _load_context(args)
    try:
        toggle_task(ctx.projects_dir, args.project_id, args.ordinal, bus=ctx.bus)
    except LedgerError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(f"Toggled task {args.ordinal} in {args.project_id}")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    ctx = _load_context(args)
    print(explain_deskboard_toml(ctx.config, path=ctx.config_path, projects_dir=ctx.projects_dir))
    return 0


def cmd_app(args: argparse.Namespace) -> int:
    try:
        from .app import run_terminal_app
    except ModuleNotFoundError as exc:
        if exc.name == "textual":
            print("Interactive dashboard requires `textual`. Install deskboard with its dependencies, then retry.", file=sys.stderr)
            return 1
        raise

    ctx = _load_context(args)
    interval = args.interval if args.interval is not None else ctx.config.ui.refresh_seconds
    return run_terminal_app(projects_dir=ctx.projects_dir, bus=ctx.bus, interval=max(1.0, float(interval)))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    argv = list(argv) if argv is not None else list(sys.argv[1:])
    if not argv:
        argv = ["app"]
    args = parser.parse_args(argv)

    if args.cmd == "app":
        return cmd_app(args)
    if args.cmd == "list":
        return cmd_list(args)
    if args.cmd == "show":
        return cmd_show(args)
    if args.cmd == "toggle":
        return cmd_toggle(args)
    if args.cmd == "config":
        return cmd_config(args)

    parser.error(f"Unknown command: {args.cmd}")
    return 2
