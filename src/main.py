"""Main entry point for the terminal TODO list.

``todo`` with no sub-command opens the interactive list; the sub-commands
run a single operation and exit (handy for shell prompts and scripts).
"""
from pathlib import Path
import click
from loguru import logger
from config import Settings
from logging_setup import configure_logging
from service import TodoService, Outcome
from todo_list import render_task_line
from cli import run_interactive


def _emit(outcome: Outcome) -> None:
    if outcome.message:
        click.echo(outcome.message, err=not outcome.ok)
    if not outcome.ok:
        raise SystemExit(1)
    if not outcome.applied:
        raise SystemExit(2)


@click.group(invoke_without_command=True)
@click.option('--file', 'todo_file', type=click.Path(dir_okay=False, path_type=Path),
              help='Task file (default: ./todo.txt or $TODO_FILE).')
@click.option('--log-file', type=click.Path(dir_okay=False, path_type=Path),
              help='Completion log file (default: ./todo-completed.txt or $TODO_LOG_FILE).')
@click.option('--no-alt-screen', is_flag=True, help='Draw in the normal screen buffer.')
@click.pass_context
def cli(ctx: click.Context, todo_file, log_file, no_alt_screen: bool) -> None:
    """Personal TODO list kept in a plain text file."""
    settings = Settings.load()
    if todo_file:
        settings.todo_file = todo_file
    if log_file:
        settings.log_file = log_file
    if no_alt_screen:
        settings.alt_screen = False
    configure_logging(settings.log_path, settings.log_level)
    logger.debug("Settings: {}", settings)
    ctx.obj = TodoService.from_settings(settings)
    if ctx.invoked_subcommand is None:
        run_interactive(ctx.obj, alt_screen=settings.alt_screen)


@cli.command('list')
@click.pass_obj
def list_cmd(service: TodoService) -> None:
    """Print the numbered list."""
    outcome = service.tasks()
    for number, task in enumerate(outcome.tasks, start=1):
        click.echo(f"{number}. {render_task_line(task)}")
    _emit(outcome)


@cli.command()
@click.argument('description', nargs=-1, required=True)
@click.pass_obj
def add(service: TodoService, description) -> None:
    """Add a task (at the top unless TODO_INSERT=append)."""
    _emit(service.add(' '.join(description)))


@cli.command()
@click.argument('number', type=click.IntRange(min=1))
@click.pass_obj
def toggle(service: TodoService, number: int) -> None:
    """Toggle task NUMBER between pending and done."""
    _emit(service.toggle(number - 1))


@cli.command()
@click.pass_obj
def reorder(service: TodoService) -> None:
    """Move pending tasks above done tasks, keeping their order."""
    _emit(service.reorder())


@cli.command()
@click.option('--yes', is_flag=True, help='Do not ask for confirmation.')
@click.pass_obj
def clear(service: TodoService, yes: bool) -> None:
    """Remove every task."""
    if not yes and not click.confirm('Clear ALL tasks? This cannot be undone', default=False):
        click.echo('Clear cancelled.')
        return
    _emit(service.clear())


@cli.command()
@click.pass_obj
def status(service: TodoService) -> None:
    """Print the task the status line shows."""
    _emit(service.status())


@cli.command('log')
@click.pass_obj
def log_cmd(service: TodoService) -> None:
    """Print completed tasks, newest first."""
    for entry in service.history():
        click.echo(entry.line())


def main():
    cli()

if __name__ == "__main__":
    main()
