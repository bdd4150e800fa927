"""Command-line interface for oradew-tasks."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from oradew_tasks import __version__
from oradew_tasks.catalog import find_task, list_tasks
from oradew_tasks.config import ConfigError, load_settings
from oradew_tasks.console_logger import ConsoleLogger
from oradew_tasks.logging import Logger, LogLevel
from oradew_tasks.provider import HostContext, TaskProvider

app = typer.Typer(
    help="Run Oradew build and deploy tasks",
    add_completion=False,
    no_args_is_help=False,
)
console = Console()


def _parse_log_level(value: str) -> LogLevel:
    try:
        return LogLevel[value.upper()]
    except KeyError:
        valid = ", ".join(level.name.lower() for level in LogLevel)
        raise typer.BadParameter(f"Invalid log level '{value}'. Choose from: {valid}")


def _make_provider(
    logger: Logger,
    workspace: Optional[Path],
    extension_root: Optional[Path],
    storage: Optional[Path],
) -> TaskProvider:
    workspace_root = (workspace or Path.cwd()).absolute()
    try:
        settings = load_settings(workspace_root)
    except ConfigError as e:
        logger.error(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    context_root = extension_root or (Path(settings.extension_root) if settings.extension_root else workspace_root)
    context = HostContext(
        workspace_folders=[str(workspace_root)],
        extension_path=str(Path(context_root).absolute()),
        storage_path=str(storage.absolute()) if storage else None,
    )
    return TaskProvider(context, settings, logger)


def _list_tasks(logger: Logger) -> None:
    """List the task catalog with its arguments."""
    names = [descriptor.name for descriptor in list_tasks()]
    table = Table(show_edge=False, show_header=False, box=None, padding=(0, 2))
    table.add_column("Task", style="bold cyan", no_wrap=True, width=max(len(n) for n in names))
    table.add_column("Arguments", style="white")

    for descriptor in list_tasks():
        table.add_row(descriptor.name, Text(" ".join(descriptor.params())))

    logger.info(table)


def _show_task(logger: Logger, provider: TaskProvider, task_name: str) -> None:
    """Print the full command line a catalog task would run."""
    descriptor = find_task(task_name)
    if descriptor is None:
        logger.error(f"[red]Task not found: {task_name}[/red]")
        logger.info("\nAvailable tasks:")
        for descriptor in list_tasks():
            logger.info(f"  - {descriptor.name}")
        raise typer.Exit(1)

    task = provider.task_manager.create_task(descriptor)
    logger.info(f"[bold]Task: {task.name}[/bold]")
    logger.info(" ".join([task.execution.executable, *task.execution.args]), markup=False, highlight=False, soft_wrap=True)


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def main(
    ctx: typer.Context,
    list_opt: bool = typer.Option(False, "--list", "-l", help="List all available tasks"),
    show: Optional[str] = typer.Option(None, "--show", help="Show the command line of a task"),
    workspace: Optional[Path] = typer.Option(None, "--workspace", "-w", help="Workspace root (default: current directory)"),
    extension_root: Optional[Path] = typer.Option(None, "--extension-root", help="Root folder containing the Oradew tool"),
    storage: Optional[Path] = typer.Option(None, "--storage", help="Storage folder passed to the tool"),
    log_level: str = typer.Option("info", "--log-level", help="fatal, error, warn, info, debug or trace"),
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
):
    """
    Run the Oradew tool with the given arguments.

    Everything after the options (or after --) is passed to the tool, e.g.
    `oradew-tasks -- compile --env DEV --changed true`.
    """
    logger = ConsoleLogger(console, _parse_log_level(log_level))

    if version:
        logger.info(f"oradew-tasks version {__version__}")
        return

    if list_opt:
        _list_tasks(logger)
        return

    provider = _make_provider(logger, workspace, extension_root, storage)

    if show is not None:
        _show_task(logger, provider, show)
        return

    raw_args = list(ctx.args)
    if not raw_args:
        logger.info("[bold]Available tasks:[/bold]")
        for descriptor in list_tasks():
            logger.info(f"  - {descriptor.name}")
        logger.info("\nUse [cyan]oradew-tasks --show <task>[/cyan] to see a task's command line")
        logger.info("Use [cyan]oradew-tasks -- <args>[/cyan] to run the tool")
        return

    try:
        handle = provider.task_manager.dispatch(raw_args)
    except OSError as e:
        logger.error(f"[red]Failed to start {provider.task_manager.executable}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    # The console is the inherited stream, so stay attached until the tool exits
    raise typer.Exit(handle.wait())


if __name__ == "__main__":
    app()
