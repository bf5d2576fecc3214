"""tasktrack CLI - Personal task tracker."""

import asyncio
import json
import logging
import sys
from datetime import date

import click

from .adapters.http_gateway import HttpTaskGateway
from .config import Config, load_config
from .core.draft import parse_time
from .sync import TaskSyncManager


def build_manager(config: Config | None = None) -> TaskSyncManager:
    """Wire a sync manager to the configured store."""
    config = config or load_config()
    return TaskSyncManager(
        HttpTaskGateway(config.api_base),
        tz=config.tzinfo(),
        default_time=config.default_time,
    )


def _exit_on_error(manager: TaskSyncManager) -> None:
    view = manager.snapshot()
    if view.error:
        click.echo(f"Error: {view.error}", err=True)
        sys.exit(1)


def _show_tasks(manager: TaskSyncManager, as_json: bool) -> None:
    """Shared task list display logic."""
    view = manager.snapshot()
    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "id": t.id,
                        "title": t.title,
                        "due_date": t.due_date.isoformat(),
                        "status": t.status,
                        "overdue": manager.is_overdue(t),
                    }
                    for t in view.tasks
                ],
                indent=2,
            )
        )
        return

    if view.is_empty:
        click.echo("No tasks yet. Add one with 'tasktrack add'.")
        return

    for task in view.tasks:
        overdue = manager.is_overdue(task)
        marker = "!" if overdue else " "
        due = f"Due: {manager.format_due_date(task)}"
        line = f"[{marker}] {task.id:>4}  {task.title}  ({due})"
        click.echo(click.style(line, fg="red") if overdue else line)


@click.group()
@click.version_option(package_name="tasktrack")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """tasktrack - tasks ordered by due date."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tasks(as_json: bool):
    """List tasks, earliest due first."""
    manager = build_manager()
    asyncio.run(manager.initialize())
    _exit_on_error(manager)
    _show_tasks(manager, as_json)


@main.command()
@click.argument("title")
@click.option("--date", "-d", "due_day", default=None, help="Due date (YYYY-MM-DD), defaults to today")
@click.option("--time", "-t", "due_time", default=None, help="Due time (HH:MM), defaults to DEFAULT_TIME (12:00)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def add(title: str, due_day: str | None, due_time: str | None, as_json: bool):
    """Add a task."""
    if not title.strip():
        raise click.BadParameter("title must not be empty", param_hint="TITLE")

    manager = build_manager()
    manager.set_title(title)
    try:
        if due_day:
            manager.set_date(date.fromisoformat(due_day))
        if due_time:
            manager.set_time(parse_time(due_time))
    except ValueError as e:
        raise click.BadParameter(str(e))

    asyncio.run(manager.submit())
    _exit_on_error(manager)
    _show_tasks(manager, as_json)


@main.command()
@click.argument("task_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def delete(task_id: str, as_json: bool):
    """Delete a task by id."""
    manager = build_manager()
    asyncio.run(manager.remove(task_id))
    _exit_on_error(manager)
    _show_tasks(manager, as_json)
