"""taskdice CLI entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import click

from . import __version__
from .config import ConfigError, ConfigLoader
from .state.errors import TaskStoreError
from .state.tasks import Selection, TaskStore
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)


def _run(ctx: click.Context, operation: Callable[[TaskStore], None]) -> None:
    """Load the store, apply one operation, then save it."""
    path: Path = ctx.obj["store_path"]
    try:
        tasks = TaskStore.load(path)
        operation(tasks)
        tasks.save()
    except TaskStoreError as exc:
        logger.debug("Command failed", exc_info=True)
        raise click.ClickException(str(exc)) from exc


def _format_selection(selection: Selection) -> str:
    task = selection.task
    lines = [f"Go and do - {selection.topic}:", f"  task: {task.name}"]
    if task.description is not None:
        lines.append(f"  description: {task.description}")
    if task.link is not None:
        lines.append(f"  link: {task.link}")
    return "\n".join(lines)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the JSON store (default: storage.path from config).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log what each command does.")
@click.pass_context
def main(ctx: click.Context, store_path: Optional[Path], verbose: bool) -> None:
    """taskdice - keep tasks under topics and pick one at random."""
    try:
        config = ConfigLoader()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging("DEBUG" if verbose else config.log_level(), config.log_file())
    ctx.ensure_object(dict)
    ctx.obj["store_path"] = store_path or config.storage_path()


@main.command()
@click.option("--topic", default="n/a", show_default=True, help="Topic to file the task under.")
@click.option("--task", "name", required=True, help="Task name (unique within the topic).")
@click.option("--task-description", "description", default=None, help="Optional description.")
@click.option("--link", default=None, help="Optional link.")
@click.pass_context
def create(
    ctx: click.Context,
    topic: str,
    name: str,
    description: Optional[str],
    link: Optional[str],
) -> None:
    """Create a task, replacing any task of the same name in the topic."""
    _run(ctx, lambda tasks: tasks.create(topic, name, description, link))


@main.command()
@click.option("--topic", default=None, help="Only show this topic.")
@click.option("--task", default=None, help="Accepted for compatibility; does not filter.")
@click.pass_context
def read(ctx: click.Context, topic: Optional[str], task: Optional[str]) -> None:
    """Print one topic, or every topic, as JSON."""
    _run(ctx, lambda tasks: click.echo(tasks.read(topic, task)))


@main.command()
@click.option("--topic", required=True, help="Topic to delete from.")
@click.option("--task", default=None, help="Task name; omit to delete the whole topic.")
@click.pass_context
def delete(ctx: click.Context, topic: str, task: Optional[str]) -> None:
    """Delete a topic, or a single task by name."""
    _run(ctx, lambda tasks: tasks.delete(topic, task))


@main.command()
@click.option("--topic", default=None, help="Pick from this topic if it exists.")
@click.pass_context
def randomise(ctx: click.Context, topic: Optional[str]) -> None:
    """Pick a random task, optionally from one topic."""

    def _pick(tasks: TaskStore) -> None:
        selection = tasks.randomise(topic)
        if selection is None:
            click.echo("Nothing to pick from.", err=True)
            return
        click.echo(_format_selection(selection))

    _run(ctx, _pick)


if __name__ == "__main__":
    main()
